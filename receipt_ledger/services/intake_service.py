"""
Receipt intake pipeline.

Orchestrates: classify image -> capitalize payer name -> current period ->
file name -> ledger writer.

``process_receipt`` never raises. Every outcome is reported in an
``IntakeResult`` so the caller can tell a silent skip (not a receipt), an
expected resend (duplicate) and a real failure (error) apart.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, Literal, Optional
from zoneinfo import ZoneInfo

from receipt_ledger.agents.receipt.types import ReceiptAgentOutput
from receipt_ledger.errors import DuplicateReceipt
from receipt_ledger.services.ledger_service import LedgerEntry
from receipt_ledger.services.storage import ArtifactFromBuffer, ArtifactInput
from receipt_ledger.utils.constants import DEFAULT_MIME_TYPE, MONTH_NAMES
from receipt_ledger.utils.text import capitalize_name

logger = logging.getLogger(__name__)

IntakeStatus = Literal["success", "not-receipt", "duplicate", "error"]

Classifier = Callable[[bytes, str], ReceiptAgentOutput]
Recorder = Callable[[str, ArtifactInput, str], Awaitable[LedgerEntry]]


@dataclass(frozen=True)
class ReceiptIntake:
    """An image handed over by the transport. Lives in memory only."""
    image_bytes: bytes
    extension: str
    mime_type: str = DEFAULT_MIME_TYPE


@dataclass
class IntakeResult:
    status: IntakeStatus
    payer_name: Optional[str] = None
    period: Optional[str] = None
    file_name: Optional[str] = None
    cell: Optional[str] = None
    summary_cell: Optional[str] = None
    drive_file_id: Optional[str] = None
    error: Optional[str] = None


def current_period_label(
    now: Optional[datetime] = None,
    locale: str = "pt-BR",
    timezone: str = "America/Sao_Paulo",
) -> str:
    """
    Full month name for ``now`` in the ledger locale, first letter upper-cased.

    >>> current_period_label(datetime(2025, 3, 10), "pt-BR")
    'Março'
    """
    if now is None:
        now = datetime.now(ZoneInfo(timezone))
    try:
        months = MONTH_NAMES[locale]
    except KeyError:
        raise ValueError(f"Unsupported ledger locale: {locale}") from None
    name = months[now.month - 1]
    return name[:1].upper() + name[1:]


def synthesize_filename(payer_name: str, period: str, extension: str) -> str:
    """
    ``<first name>_<first 3 letters of period><.ext>``

    "João Silva", "Fevereiro", "jpg" -> "João_Fev.jpg"
    """
    first_name = payer_name.split(" ")[0]
    ext = extension if extension.startswith(".") else f".{extension}"
    return f"{first_name}_{period[:3]}{ext}"


async def process_receipt(
    intake: ReceiptIntake,
    classifier: Classifier,
    recorder: Recorder,
    locale: str = "pt-BR",
    timezone: str = "America/Sao_Paulo",
    now: Optional[datetime] = None,
) -> IntakeResult:
    """
    Run one intake end to end.

    Args:
        intake: Image bytes, extension and MIME type from the transport
        classifier: Vision classifier; blocking, run in a worker thread
        recorder: Ledger writer bound to its clients and layout
        locale: Ledger locale for the period label
        timezone: Timezone used to read the wall clock
        now: Fixed clock for tests

    Returns:
        IntakeResult with status success, not-receipt, duplicate or error
    """
    try:
        output = await asyncio.to_thread(classifier, intake.image_bytes, intake.mime_type)

        if output["status"] == "NOT_RECEIPT" or not output.get("payer_name"):
            logger.info(f"Image is not a payment receipt: {output.get('reason') or 'no reason'}")
            return IntakeResult(status="not-receipt")

        payer_name = capitalize_name(output["payer_name"])
        period = current_period_label(now, locale, timezone)
        file_name = synthesize_filename(payer_name, period, intake.extension)

        logger.info(
            f"Receipt classified: payer={payer_name}, period={period}, "
            f"file_name={file_name}"
        )

        entry = await recorder(
            payer_name,
            ArtifactFromBuffer(
                file_name=file_name,
                data=intake.image_bytes,
                mime_type=intake.mime_type or DEFAULT_MIME_TYPE,
            ),
            period,
        )

        return IntakeResult(
            status="success",
            payer_name=payer_name,
            period=period,
            file_name=file_name,
            cell=entry.cell,
            summary_cell=entry.summary_cell,
            drive_file_id=entry.artifact.file_id,
        )

    except DuplicateReceipt as e:
        logger.info(f"Receipt already recorded: {e}")
        return IntakeResult(
            status="duplicate",
            payer_name=e.payer_name,
            period=e.period,
            cell=e.cell,
            error=str(e),
        )

    except Exception as e:
        logger.error(f"Receipt intake failed: {e}", exc_info=True)
        return IntakeResult(status="error", error=str(e))
