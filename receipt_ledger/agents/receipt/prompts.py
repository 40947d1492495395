"""
ReceiptAgent Prompt Templates

The classifier is deliberately strict: it must never guess a name. When the
image lacks clear textual evidence of a PIX receipt the model answers with
the exact sentinel ``NOT_RECEIPT_SENTINEL``, which the agent maps to
status NOT_RECEIPT.

Architecture:
- Pattern: Single-shot multimodal classification
- Model: Gemini (with vision capabilities)
- Temperature: 0.0 (deterministic)
- Output: plain text (a name or the sentinel)
"""

from receipt_ledger.utils.constants import NOT_RECEIPT_SENTINEL

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

RECEIPT_AGENT_SYSTEM_PROMPT = (
    "Você é um classificador rigoroso de comprovante PIX. "
    "Nunca chute, nunca infira e nunca complete informações faltantes. "
    "Se não houver evidência textual clara de comprovante PIX, "
    f"responda exatamente: {NOT_RECEIPT_SENTINEL}"
)


# =============================================================================
# USER PROMPT
# =============================================================================

RECEIPT_AGENT_USER_PROMPT = (
    "Regras estritas:\n"
    "1) Só é PIX se houver termos como 'PIX', 'Comprovante', 'Transferência', "
    "ID/Txid, valor, data\n"
    f"2) Se faltar evidência suficiente: responda '{NOT_RECEIPT_SENTINEL}'\n"
    "3) Se for PIX válido: responda APENAS o nome do pagador/remetente\n"
    f"4) Nomes soltos sem contexto de comprovante = '{NOT_RECEIPT_SENTINEL}'\n"
    "5) Nunca invente informações"
)
