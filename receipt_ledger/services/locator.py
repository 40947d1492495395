"""
Tabular locator for the ledger and summary tabs.

Pure functions over the label sequences read from the spreadsheet: which
row holds a payer, which column holds a period, and the A1 letter of that
column.
"""

from typing import Optional, Sequence

from receipt_ledger.errors import ColumnNotFound, RowNotFound
from receipt_ledger.utils.text import normalize_text


def find_row(labels: Sequence[Optional[str]], target: str) -> Optional[int]:
    """
    Index of the first label equal to ``target`` after normalization.

    Case and diacritics are ignored, so "JOÃO SILVA" matches "joao silva".
    Returns None when no label matches. A blank target never matches, so
    it cannot land on an empty row.
    """
    key = normalize_text(target)
    if not key:
        return None
    for index, label in enumerate(labels):
        if normalize_text(label) == key:
            return index
    return None


def find_column(
    labels: Sequence[Optional[str]],
    period: str,
    marker: Optional[str] = None,
) -> Optional[int]:
    """
    Index of the first header mentioning ``period``.

    The period is matched as a normalized substring, since headers carry
    decoration like "Comp - Março". When ``marker`` is given the raw,
    un-normalized header must also contain it: the marker is a fixed ASCII
    literal while period names may carry accents.
    """
    key = normalize_text(period)
    for index, label in enumerate(labels):
        raw = label or ""
        if key not in normalize_text(raw):
            continue
        if marker is not None and marker not in raw:
            continue
        return index
    return None


def column_letter(start: str, offset: int) -> str:
    """
    Letter of the column ``offset`` places right of ``start``.

    Single-letter scheme only: "B" + 0 -> "B", "B" + 10 -> "L". Columns past
    "Z" are not supported and raise ValueError.
    """
    code = ord(start.upper()) + offset
    if offset < 0 or code > ord("Z"):
        raise ValueError(
            f"Column offset {offset} from {start} is outside A-Z; "
            "two-letter columns are not supported"
        )
    return chr(code)


def locate_row(labels: Sequence[Optional[str]], target: str, searched_range: str) -> int:
    index = find_row(labels, target)
    if index is None:
        raise RowNotFound(target, searched_range)
    return index


def locate_column(
    labels: Sequence[Optional[str]],
    period: str,
    searched_range: str,
    marker: Optional[str] = None,
) -> int:
    index = find_column(labels, period, marker=marker)
    if index is None:
        raise ColumnNotFound(period, searched_range)
    return index
