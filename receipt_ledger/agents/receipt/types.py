"""
ReceiptAgent Type Definitions

Output contract of the receipt classifier.
"""

from typing import Literal, Optional, TypedDict


class ReceiptAgentOutput(TypedDict):
    """Output schema for ReceiptAgent."""
    status: Literal["RECEIPT", "NOT_RECEIPT"]

    # Present when status == "RECEIPT", exactly as printed on the receipt
    payer_name: Optional[str]

    # Present when status == "NOT_RECEIPT"
    reason: Optional[str]
