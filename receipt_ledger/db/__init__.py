"""
Remote data access layer for the Receipt Ledger backend.

The "database" here is a Google Sheets spreadsheet plus a Google Drive
folder. This package only builds and caches the authenticated API clients;
reads and writes live in ``receipt_ledger.services``.
"""

from .client import GoogleClientProvider, execute, get_google_clients, google_clients

__all__ = ["GoogleClientProvider", "execute", "get_google_clients", "google_clients"]
