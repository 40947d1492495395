"""
Service layer for the Receipt Ledger backend.

Contains the intake orchestration that:
- Calls the receipt classifier
- Locates the payer/period cell in the ledger spreadsheet
- Stores the receipt image in Drive
- Writes the ledger link and the summary mark

Services act as the glue between routes (HTTP layer) and the agent/Google APIs.
"""

from .intake_service import (
    IntakeResult,
    ReceiptIntake,
    current_period_label,
    process_receipt,
    synthesize_filename,
)
from .ledger_service import (
    CellLockRegistry,
    LedgerEntry,
    LedgerLayout,
    build_hyperlink_formula,
    cell_locks,
    mark_summary,
    record_receipt,
)
from .locator import column_letter, find_column, find_row
from .metrics import IntakeMetrics, get_metrics, metrics
from .storage import (
    ArtifactFromBuffer,
    ArtifactFromPath,
    StoredArtifact,
    resolve_artifact_input,
    upsert_artifact,
)

__all__ = [
    # Intake
    "IntakeResult",
    "ReceiptIntake",
    "current_period_label",
    "process_receipt",
    "synthesize_filename",
    # Ledger
    "CellLockRegistry",
    "LedgerEntry",
    "LedgerLayout",
    "build_hyperlink_formula",
    "cell_locks",
    "mark_summary",
    "record_receipt",
    # Locator
    "column_letter",
    "find_column",
    "find_row",
    # Metrics
    "IntakeMetrics",
    "get_metrics",
    "metrics",
    # Storage
    "ArtifactFromBuffer",
    "ArtifactFromPath",
    "StoredArtifact",
    "resolve_artifact_input",
    "upsert_artifact",
]
