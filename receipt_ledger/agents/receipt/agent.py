"""
ReceiptAgent Runner

Single-shot Gemini vision call. Sends the receipt image with the strict
classification prompt and returns either the payer's name or NOT_RECEIPT.

Failure policy:
- Missing image, Gemini API errors and network errors are raised as
  ``ClassifierTransportFailure`` subclasses, so the caller reports them as
  real errors.
- Anything else (blocked or unparseable answers, unexpected SDK errors)
  fails open to NOT_RECEIPT, so an ambiguous image never blocks the intake.
"""

import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from receipt_ledger.agents.receipt.prompts import (
    RECEIPT_AGENT_SYSTEM_PROMPT,
    RECEIPT_AGENT_USER_PROMPT,
)
from receipt_ledger.agents.receipt.types import ReceiptAgentOutput
from receipt_ledger.config import settings
from receipt_ledger.errors import (
    ClassifierAPIError,
    ClassifierInputNotFound,
    ClassifierNetworkError,
)
from receipt_ledger.utils.constants import DEFAULT_MIME_TYPE, NOT_RECEIPT_SENTINEL
from receipt_ledger.utils.text import normalize_text

logger = logging.getLogger(__name__)

_gemini_client: Optional[genai.Client] = None


def _get_gemini_client() -> genai.Client:
    """
    Lazy initialization of the Gemini client.

    Raises:
        ClassifierAPIError: If GOOGLE_API_KEY is not configured
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.error("GOOGLE_API_KEY not configured")
        raise ClassifierAPIError(
            "GOOGLE_API_KEY is not configured. "
            "Please set it in your .env file to use ReceiptAgent."
        )

    timeout_ms = (settings.GEMINI_TIMEOUT_SECONDS or 60) * 1000
    _gemini_client = genai.Client(
        api_key=settings.GOOGLE_API_KEY,
        http_options=types.HttpOptions(timeout=timeout_ms),
    )
    logger.info("Gemini client initialized for ReceiptAgent")
    return _gemini_client


def reset_gemini_client() -> None:
    """Drop the cached client; the next call builds a new one."""
    global _gemini_client
    _gemini_client = None


def _not_receipt(reason: str) -> ReceiptAgentOutput:
    return {"status": "NOT_RECEIPT", "payer_name": None, "reason": reason}


def _is_sentinel(answer: str) -> bool:
    return normalize_text(answer).rstrip(".") == normalize_text(NOT_RECEIPT_SENTINEL)


def run_receipt_agent(
    image_bytes: bytes,
    mime_type: str = DEFAULT_MIME_TYPE,
) -> ReceiptAgentOutput:
    """
    Classify an image and read the payer's name from a PIX receipt.

    Args:
        image_bytes: Raw image bytes, kept in memory
        mime_type: Image MIME type (e.g. "image/jpeg")

    Returns:
        ReceiptAgentOutput with status RECEIPT and the payer name exactly as
        the model read it, or status NOT_RECEIPT with a reason

    Raises:
        ClassifierInputNotFound: If no image bytes were given
        ClassifierAPIError: If Gemini rejects the call (auth, quota, 4xx/5xx)
        ClassifierNetworkError: If Gemini cannot be reached or times out
    """
    if not image_bytes:
        logger.error("ReceiptAgent called without image bytes")
        raise ClassifierInputNotFound("Image not found: [in-memory buffer is empty]")

    logger.info(f"ReceiptAgent invoked: size={len(image_bytes)} bytes, mime_type={mime_type}")

    try:
        client = _get_gemini_client()

        prompt_parts = [
            types.Part(text=RECEIPT_AGENT_USER_PROMPT),
            types.Part(
                inline_data=types.Blob(
                    mime_type=mime_type or DEFAULT_MIME_TYPE,
                    data=image_bytes,
                )
            ),
        ]

        config = types.GenerateContentConfig(
            system_instruction=RECEIPT_AGENT_SYSTEM_PROMPT,
            temperature=0.0,
        )

        response = client.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt_parts,  # type: ignore
            config=config,
        )

        answer = (response.text or "").strip()

    except ClassifierAPIError:
        raise
    except genai_errors.APIError as e:
        logger.error(f"Gemini API error: code={e.code}, message={e.message}")
        raise ClassifierAPIError(f"Gemini API error: {e}") from e
    except httpx.TransportError as e:
        logger.error(f"Network error reaching Gemini: {e}")
        raise ClassifierNetworkError(f"Network error reaching Gemini: {e}") from e
    except Exception as e:
        logger.warning(f"ReceiptAgent error treated as not a receipt: {e}", exc_info=True)
        return _not_receipt(f"Agent error: {e}")

    if not answer:
        logger.info("ReceiptAgent completed: empty answer")
        return _not_receipt("Model did not return an answer")

    if _is_sentinel(answer):
        logger.info("ReceiptAgent completed: status=NOT_RECEIPT")
        return _not_receipt("Model found no PIX receipt evidence")

    logger.info(f"ReceiptAgent completed: status=RECEIPT, payer={answer}")
    return {"status": "RECEIPT", "payer_name": answer, "reason": None}
