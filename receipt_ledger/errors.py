"""
Error taxonomy for the receipt intake pipeline.

Every component raises one of these to the intake pipeline with enough
context (payer, period, cell, existing value) to log meaningfully.
Nothing here is retried internally.
"""

from typing import Optional


class ReceiptLedgerError(Exception):
    """Base class for every intake failure the pipeline knows how to report."""


class ConfigurationMissing(ReceiptLedgerError, ValueError):
    """Raised at startup when required settings are absent or invalid."""

    def __init__(self, missing: list[str], problems: Optional[list[str]] = None):
        self.missing = missing
        self.problems = problems or []
        parts = []
        if missing:
            parts.append(
                f"Missing required environment variables: {', '.join(missing)}"
            )
        parts.extend(self.problems)
        super().__init__(". ".join(parts) + ". Please check your .env file.")


class RowNotFound(ReceiptLedgerError):
    def __init__(self, name: str, searched_range: str):
        self.name = name
        self.searched_range = searched_range
        super().__init__(f'Name "{name}" not found in {searched_range}')


class ColumnNotFound(ReceiptLedgerError):
    def __init__(self, period: str, searched_range: str):
        self.period = period
        self.searched_range = searched_range
        super().__init__(f'Period "{period}" not found in headers {searched_range}')


class DuplicateReceipt(ReceiptLedgerError):
    """The target ledger cell is already filled; the submission is a resend."""

    def __init__(self, payer_name: str, period: str, cell: str, existing_value: str):
        self.payer_name = payer_name
        self.period = period
        self.cell = cell
        self.existing_value = existing_value
        super().__init__(
            f"Receipt already recorded for {payer_name} in {period}. "
            f"Cell {cell} already contains: {existing_value}"
        )


class ArtifactStoreFailure(ReceiptLedgerError):
    """Drive returned a file without an id or a shareable link."""

    def __init__(self, file_name: str, detail: str):
        self.file_name = file_name
        super().__init__(f"{detail}: {file_name}")


class SummaryMarkFailed(ReceiptLedgerError):
    """
    The ledger cross-reference was written but the summary mark was not.

    The two tabs are left inconsistent; ``ledger_cell`` names the cell that
    was already written so an operator can reconcile by hand. ``summary_cell``
    is None when the summary lookup itself failed.
    """

    def __init__(
        self, ledger_cell: str, cause: Exception, summary_cell: Optional[str] = None
    ):
        self.ledger_cell = ledger_cell
        self.summary_cell = summary_cell
        self.cause = cause
        super().__init__(
            f"Ledger cell {ledger_cell} was written but the summary mark failed: {cause}"
        )


class ClassifierTransportFailure(ReceiptLedgerError):
    """The classifier could not be reached, as opposed to answering "not a receipt"."""


class ClassifierInputNotFound(ClassifierTransportFailure):
    pass


class ClassifierAPIError(ClassifierTransportFailure):
    """Gemini rejected the call (bad key, quota, permission or other API error)."""


class ClassifierNetworkError(ClassifierTransportFailure):
    pass
