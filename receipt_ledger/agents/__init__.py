"""
AI components for the Receipt Ledger backend.

1. ReceiptAgent (Single-Shot Multimodal Workflow)
   - Uses Gemini vision to decide whether an image is a PIX payment receipt
     and, if it is, to read the payer's name
   - NOT an ADK agent - uses the Google Gen AI SDK directly
"""

from receipt_ledger.agents.receipt import ReceiptAgentOutput, run_receipt_agent

__all__ = [
    "run_receipt_agent",
    "ReceiptAgentOutput",
]
