"""
ReceiptAgent Package

Single-shot Gemini vision classifier for PIX payment receipts.

Main Components:
- types: TypedDict output contract
- prompts: System and user prompts
- agent: Runner that calls Gemini and classifies failures

Usage:
    from receipt_ledger.agents.receipt import run_receipt_agent

    result = run_receipt_agent(image_bytes, "image/jpeg")
    if result["status"] == "RECEIPT":
        payer = result["payer_name"]
"""

from receipt_ledger.agents.receipt.agent import reset_gemini_client, run_receipt_agent
from receipt_ledger.agents.receipt.prompts import (
    RECEIPT_AGENT_SYSTEM_PROMPT,
    RECEIPT_AGENT_USER_PROMPT,
)
from receipt_ledger.agents.receipt.types import ReceiptAgentOutput

__all__ = [
    # Main runner
    "run_receipt_agent",
    "reset_gemini_client",
    # Types
    "ReceiptAgentOutput",
    # Prompts
    "RECEIPT_AGENT_SYSTEM_PROMPT",
    "RECEIPT_AGENT_USER_PROMPT",
]
