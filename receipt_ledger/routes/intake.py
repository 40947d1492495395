"""
Receipt intake API endpoint.

The chat transport forwards every downloaded image here. The endpoint:
1. Counts the message and reads the upload into memory (never to disk)
2. Applies the chat filters (own messages, old messages, other chats)
3. Runs the intake pipeline: classify -> ledger -> Drive -> summary
4. Maps the outcome to IntakeResponse and updates the counters

Every pipeline outcome is a 200; the status is in the body so the transport
can skip non-receipts silently and report errors.
"""

import logging
from dataclasses import asdict
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from google.auth.exceptions import RefreshError

from receipt_ledger.agents.receipt import run_receipt_agent
from receipt_ledger.config import settings
from receipt_ledger.db import GoogleClientProvider, get_google_clients
from receipt_ledger.schemas.intake import IntakeResponse
from receipt_ledger.services.intake_service import (
    Classifier,
    ReceiptIntake,
    process_receipt,
)
from receipt_ledger.services.ledger_service import (
    CellLockRegistry,
    LedgerEntry,
    LedgerLayout,
    cell_locks,
    record_receipt,
)
from receipt_ledger.services.metrics import IntakeMetrics, get_metrics
from receipt_ledger.services.storage import ArtifactInput
from receipt_ledger.transport import IgnoredMessage, to_inbound_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["intake"])


def get_ledger_layout() -> LedgerLayout:
    return LedgerLayout.from_settings(settings)


def get_classifier() -> Classifier:
    return run_receipt_agent


def get_cell_locks() -> CellLockRegistry:
    return cell_locks


@router.post(
    "/intake",
    response_model=IntakeResponse,
    status_code=status.HTTP_200_OK,
    summary="Record a receipt image forwarded by the chat transport",
)
async def intake_receipt(
    image: Annotated[UploadFile, File(description="Image downloaded from the chat")],
    clients: Annotated[GoogleClientProvider, Depends(get_google_clients)],
    layout: Annotated[LedgerLayout, Depends(get_ledger_layout)],
    classifier: Annotated[Classifier, Depends(get_classifier)],
    locks: Annotated[CellLockRegistry, Depends(get_cell_locks)],
    metrics: Annotated[IntakeMetrics, Depends(get_metrics)],
    chat_id: Annotated[Optional[str], Form()] = None,
    sender: Annotated[Optional[str], Form()] = None,
    from_me: Annotated[bool, Form()] = False,
    timestamp: Annotated[Optional[int], Form()] = None,
) -> IntakeResponse:
    """
    Classify a forwarded image and record it in the ledger if it is a receipt.

    Form fields:
    - image: the image file (required)
    - chat_id: chat the message came from; omit for manual uploads
    - sender: participant id, for logs only
    - from_me: true when the bot's own account sent it
    - timestamp: message time, epoch seconds
    """
    metrics.record_received()

    try:
        image_bytes = await image.read()
    except Exception as e:
        metrics.record_error()
        logger.error(f"Failed to read uploaded file: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "file_read_error",
                "details": "Could not read uploaded image file"
            }
        )

    if not image_bytes:
        metrics.record_error()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "empty_file",
                "details": "Image download returned no data"
            }
        )

    max_size_mb = settings.MAX_IMAGE_SIZE_MB or 10
    if len(image_bytes) > max_size_mb * 1024 * 1024:
        metrics.record_error()
        logger.warning(f"Image too large: {len(image_bytes)} bytes")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "file_too_large",
                "details": f"Image must be smaller than {max_size_mb}MB"
            }
        )

    message = to_inbound_message(
        data=image_bytes,
        content_type=image.content_type,
        group_jid=settings.GROUP_JID,
        chat_id=chat_id,
        sender=sender,
        from_me=from_me,
        timestamp=timestamp,
        started_at=int(metrics.started_at),
    )

    if isinstance(message, IgnoredMessage):
        logger.debug(f"Message ignored: {message.reason}")
        return IntakeResponse(status="ignored", ignored_reason=message.reason)

    logger.info(
        f"Processing image: sender={sender or 'unknown'}, "
        f"size={len(message.data)} bytes, mime_type={message.mime_type}"
    )

    async def recorder(payer_name: str, artifact: ArtifactInput, period: str) -> LedgerEntry:
        try:
            return await record_receipt(
                clients.get_sheets(),
                clients.get_drive(),
                payer_name,
                artifact,
                period,
                layout,
                locks,
            )
        except RefreshError:
            clients.invalidate()
            raise

    result = await process_receipt(
        ReceiptIntake(
            image_bytes=message.data,
            extension=message.extension,
            mime_type=message.mime_type,
        ),
        classifier,
        recorder,
        locale=settings.LEDGER_LOCALE,
        timezone=settings.LEDGER_TIMEZONE,
    )

    if result.status == "success":
        metrics.record_processed()
        logger.info(
            f"Receipt processed: payer={result.payer_name}, period={result.period}, "
            f"file_name={result.file_name}, cell={result.cell}"
        )
    elif result.status == "not-receipt":
        logger.info(f"Image is not a payment receipt: sender={sender or 'unknown'}")
    elif result.status == "duplicate":
        logger.info(f"Duplicate receipt ignored: {result.error}")
    else:
        metrics.record_error()
        logger.error(f"Failed to process receipt: sender={sender or 'unknown'}, error={result.error}")

    return IntakeResponse(**asdict(result))
