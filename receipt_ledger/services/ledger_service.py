"""
Ledger writer.

Records a receipt in the spreadsheet:

1. Find the payer's row and the period's column in the ledger tab
2. Refuse if the cell is already filled (duplicate guard, before any upload)
3. Find or upload the receipt image in Drive
4. Write a HYPERLINK formula to the image into the cell
5. Tick the payer/period checkbox in the summary tab

The two tabs are separate writes with no transaction between them. If step 5
fails, the ledger keeps its link and the summary stays unmarked; the failure
is logged with both addresses and raised as ``SummaryMarkFailed``.

Steps 2-4 for one cell run under a per-cell asyncio lock, so concurrent
intakes for the same payer and period in this process cannot both pass the
duplicate check. There is no protection against a second process.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from receipt_ledger.config import Settings
from receipt_ledger.db import execute
from receipt_ledger.errors import DuplicateReceipt, SummaryMarkFailed
from receipt_ledger.services.locator import column_letter, locate_column, locate_row
from receipt_ledger.services.storage import (
    ArtifactInput,
    StoredArtifact,
    resolve_artifact_input,
    upsert_artifact,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerLayout:
    """Where things live in the spreadsheet and the Drive folder."""
    spreadsheet_id: str
    folder_id: str
    ledger_sheet: str = "Comprovantes"
    summary_sheet: str = "Main"
    name_column: str = "A"
    name_start_row: int = 2
    name_end_row: int = 29
    header_row: int = 1
    month_start_column: str = "B"
    month_end_column: str = "L"
    marker: str = "Comp"
    formula_separator: str = ";"

    @classmethod
    def from_settings(cls, settings: Settings) -> "LedgerLayout":
        return cls(
            spreadsheet_id=settings.GOOGLE_SHEET_ID,
            folder_id=settings.GOOGLE_DRIVE_FOLDER_ID,
            ledger_sheet=settings.GOOGLE_SHEET_NAME,
            summary_sheet=settings.GOOGLE_MAIN_SHEET_NAME,
            name_column=settings.SHEET_NAME_COLUMN,
            name_start_row=settings.SHEET_NAME_START_ROW,
            name_end_row=settings.SHEET_NAME_END_ROW,
            header_row=settings.SHEET_HEADER_ROW,
            month_start_column=settings.SHEET_MONTH_START_COLUMN,
            month_end_column=settings.SHEET_MONTH_END_COLUMN,
            marker=settings.SHEET_HEADER_MARKER,
            formula_separator=settings.SHEETS_FORMULA_SEPARATOR,
        )

    @property
    def name_range(self) -> str:
        return (
            f"{self.name_column}{self.name_start_row}:"
            f"{self.name_column}{self.name_end_row}"
        )

    @property
    def header_range(self) -> str:
        return (
            f"{self.month_start_column}{self.header_row}:"
            f"{self.month_end_column}{self.header_row}"
        )

    def qualified(self, sheet: str, a1: str) -> str:
        """A1 reference on a given tab, quoting tab names that need it."""
        if sheet.replace("_", "").isalnum():
            return f"{sheet}!{a1}"
        escaped = sheet.replace("'", "''")
        return f"'{escaped}'!{a1}"


@dataclass(frozen=True)
class LedgerEntry:
    """Outcome of a successful ``record_receipt``."""
    cell: str
    summary_cell: str
    artifact: StoredArtifact


@dataclass
class CellLockRegistry:
    """One asyncio.Lock per cell address, created on first use."""
    _locks: Dict[str, asyncio.Lock] = field(default_factory=dict)

    def lock_for(self, cell: str) -> asyncio.Lock:
        lock = self._locks.get(cell)
        if lock is None:
            lock = self._locks[cell] = asyncio.Lock()
        return lock


# Process-wide registry used by the intake route
cell_locks = CellLockRegistry()


def build_hyperlink_formula(link: str, label: str, separator: str) -> str:
    """
    ``=HYPERLINK("<link>"<sep>"<label>")`` with embedded quotes doubled.

    The argument separator depends on the spreadsheet locale (";" in pt-BR,
    "," in en-US) and must come from configuration.
    """
    escaped_link = link.replace('"', '""')
    escaped_label = label.replace('"', '""')
    return f'=HYPERLINK("{escaped_link}"{separator}"{escaped_label}")'


def _first_column(values: Optional[List[List[Any]]]) -> List[Optional[str]]:
    # Empty rows come back as [] and must keep their position
    return [row[0] if row else None for row in (values or [])]


def _first_row(values: Optional[List[List[Any]]]) -> List[Optional[str]]:
    return list(values[0]) if values else []


async def _get_values(sheets: Any, spreadsheet_id: str, a1_range: str) -> List[List[Any]]:
    response = await execute(
        sheets.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id,
            range=a1_range,
        )
    )
    return (response or {}).get("values") or []


async def _update_value(sheets: Any, spreadsheet_id: str, a1: str, value: Any) -> None:
    await execute(
        sheets.spreadsheets().values().update(
            spreadsheetId=spreadsheet_id,
            range=a1,
            valueInputOption="USER_ENTERED",
            body={"values": [[value]]},
        )
    )


async def _read_labels(
    sheets: Any, layout: LedgerLayout, sheet: str
) -> Tuple[List[Optional[str]], List[Optional[str]]]:
    names, headers = await asyncio.gather(
        _get_values(sheets, layout.spreadsheet_id, layout.qualified(sheet, layout.name_range)),
        _get_values(sheets, layout.spreadsheet_id, layout.qualified(sheet, layout.header_range)),
    )
    return _first_column(names), _first_row(headers)


async def resolve_cell(
    sheets: Any,
    layout: LedgerLayout,
    sheet: str,
    payer_name: str,
    period: str,
    marker: Optional[str] = None,
) -> str:
    """
    Qualified A1 address of the payer/period cell on ``sheet``.

    Raises:
        RowNotFound: If no name in the name range matches
        ColumnNotFound: If no header mentions the period (and the marker,
            when one is given)
    """
    names, headers = await _read_labels(sheets, layout, sheet)

    row_index = locate_row(
        names,
        payer_name,
        f"{sheet} column {layout.name_column} "
        f"(rows {layout.name_start_row}-{layout.name_end_row})",
    )
    column_index = locate_column(
        headers,
        period,
        f"{sheet} {layout.header_range}",
        marker=marker,
    )

    row = layout.name_start_row + row_index
    column = column_letter(layout.month_start_column, column_index)
    return layout.qualified(sheet, f"{column}{row}")


async def _write_summary_mark(
    sheets: Any,
    layout: LedgerLayout,
    summary_cell: str,
    payer_name: str,
    period: str,
) -> None:
    await _update_value(sheets, layout.spreadsheet_id, summary_cell, True)
    logger.info(f"Summary tab updated: {payer_name} -> {summary_cell} ({period})")


async def mark_summary(
    sheets: Any,
    payer_name: str,
    period: str,
    layout: LedgerLayout,
) -> str:
    """
    Tick the payer/period checkbox on the summary tab.

    Summary headers are bare period names, so no marker is required.

    Returns:
        The qualified address that was set to TRUE
    """
    summary_cell = await resolve_cell(
        sheets, layout, layout.summary_sheet, payer_name, period
    )
    await _write_summary_mark(sheets, layout, summary_cell, payer_name, period)
    return summary_cell


async def record_receipt(
    sheets: Any,
    drive: Any,
    payer_name: str,
    artifact: ArtifactInput,
    period: str,
    layout: LedgerLayout,
    locks: Optional[CellLockRegistry] = None,
) -> LedgerEntry:
    """
    Link a receipt image in the ledger and mark the summary tab.

    Args:
        sheets: Sheets v4 service
        drive: Drive v3 service
        payer_name: Capitalized payer name as extracted from the receipt
        artifact: The image, in memory or on disk; its file name is the
            Drive identity
        period: Period label as it appears in the headers (e.g. "Fevereiro")
        layout: Spreadsheet and folder layout
        locks: Per-cell lock registry (defaults to the process-wide one)

    Returns:
        LedgerEntry with both cell addresses and the stored artifact

    Raises:
        RowNotFound / ColumnNotFound: Ledger or config mismatch
        DuplicateReceipt: The ledger cell is already filled; nothing uploaded
        ArtifactStoreFailure: Drive returned no id or link
        SummaryMarkFailed: Ledger written but the summary mark failed
        HttpError: Any Google API failure before the ledger write
    """
    locks = locks or cell_locks
    receipt = resolve_artifact_input(artifact)

    cell = await resolve_cell(
        sheets, layout, layout.ledger_sheet, payer_name, period, marker=layout.marker
    )

    async with locks.lock_for(cell):
        existing = _first_row(await _get_values(sheets, layout.spreadsheet_id, cell))
        existing_value = existing[0] if existing else None
        if existing_value not in (None, ""):
            logger.info(
                f"Duplicate receipt refused: payer={payer_name}, period={period}, "
                f"cell={cell}"
            )
            raise DuplicateReceipt(payer_name, period, cell, str(existing_value))

        stored = await upsert_artifact(
            drive,
            receipt.file_name,
            receipt.data,
            receipt.mime_type,
            layout.folder_id,
        )

        formula = build_hyperlink_formula(stored.link, stored.name, layout.formula_separator)
        await _update_value(sheets, layout.spreadsheet_id, cell, formula)

    logger.info(
        f"Receipt recorded: {payer_name} -> {cell} ({period}) | Drive: {stored.file_id}"
    )

    # Resolved before the write so a failed write can still name the cell
    summary_cell: Optional[str] = None
    try:
        summary_cell = await resolve_cell(
            sheets, layout, layout.summary_sheet, payer_name, period
        )
        await _write_summary_mark(sheets, layout, summary_cell, payer_name, period)
    except Exception as e:
        logger.error(
            f"summary_mark_failed: ledger_cell={cell}, "
            f"summary_cell={summary_cell or 'unresolved'}, "
            f"summary_sheet={layout.summary_sheet}, payer={payer_name}, "
            f"period={period}, error={e}"
        )
        raise SummaryMarkFailed(cell, e, summary_cell) from e

    return LedgerEntry(cell=cell, summary_cell=summary_cell, artifact=stored)
