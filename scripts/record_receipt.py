#!/usr/bin/env python3
"""
Manual receipt backfill.

Records a receipt image from local disk into the ledger, the same way the
intake endpoint does, for receipts that never went through the chat (sent
by e-mail, paid in cash with a photo, or dropped while the service was down).

By default the image is classified by Gemini to read the payer's name. With
--payer the classifier is skipped and the given name is used.

Usage:
    python scripts/record_receipt.py ~/Downloads/pix.jpg
    python scripts/record_receipt.py ~/Downloads/pix.jpg --payer "João Silva"
    python scripts/record_receipt.py ~/Downloads/pix.png --payer "Ana" --period Fevereiro
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from receipt_ledger.agents.receipt import run_receipt_agent
from receipt_ledger.config import settings
from receipt_ledger.db import google_clients
from receipt_ledger.errors import ReceiptLedgerError
from receipt_ledger.services.intake_service import current_period_label, synthesize_filename
from receipt_ledger.services.ledger_service import LedgerLayout, record_receipt
from receipt_ledger.services.storage import ArtifactFromPath, resolve_artifact_input
from receipt_ledger.utils.text import capitalize_name


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def backfill(image: Path, payer: Optional[str], period: Optional[str]) -> int:
    """Record one image. Returns the process exit code."""
    period = period or current_period_label(
        locale=settings.LEDGER_LOCALE, timezone=settings.LEDGER_TIMEZONE
    )

    if payer is None:
        receipt = resolve_artifact_input(ArtifactFromPath(path=image))
        print(f"\nClassifying {image.name} with {settings.GEMINI_MODEL}...")
        output = await asyncio.to_thread(run_receipt_agent, receipt.data, receipt.mime_type)
        if output["status"] != "RECEIPT" or not output["payer_name"]:
            print(f"\n❌ Not a PIX receipt: {output['reason']}\n")
            return 1
        payer = output["payer_name"]

    payer_name = capitalize_name(payer)
    file_name = synthesize_filename(payer_name, period, image.suffix or ".jpg")

    print("\n" + "=" * 60)
    print(f"Payer:     {payer_name}")
    print(f"Period:    {period}")
    print(f"File name: {file_name}")
    print("=" * 60)

    try:
        entry = await record_receipt(
            google_clients.get_sheets(),
            google_clients.get_drive(),
            payer_name,
            ArtifactFromPath(path=image, file_name=file_name),
            period,
            LedgerLayout.from_settings(settings),
        )
    except ReceiptLedgerError as e:
        print(f"\n❌ {type(e).__name__}: {e}\n")
        return 1

    print(f"\n✅ Recorded in {entry.cell}, summary {entry.summary_cell}")
    print(f"   Drive: {entry.artifact.link}\n")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Record a receipt image from disk into the ledger"
    )
    parser.add_argument("image", type=Path, help="Path to the receipt image")
    parser.add_argument(
        "--payer", "-p",
        type=str,
        help="Payer name as it appears in the ledger (skips the classifier)"
    )
    parser.add_argument(
        "--period",
        type=str,
        help="Period header to record under (default: current month)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.image.is_file():
        print(f"\n⚠️  ERROR: {args.image} is not a file")
        sys.exit(2)

    sys.exit(asyncio.run(backfill(args.image, args.payer, args.period)))


if __name__ == "__main__":
    main()
