"""
Google API client provider.

Holds the authenticated Sheets and Drive services for the whole process.
Services are built lazily on first use from the OAuth2 refresh token and
reused afterwards; ``invalidate()`` drops them so the next call rebuilds them
(used when a credential refresh fails).

The provider is exposed as a FastAPI dependency so the ledger and storage
services never build clients themselves, and tests override it with mocks.

SECURITY RULES:
1. The refresh token comes from configuration only, never from a request
2. Scopes are limited to spreadsheets and drive.file
3. Tokens are never logged
"""

import asyncio
import logging
import threading
from typing import Any, Optional

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build

from receipt_ledger.config import settings

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.file",
]


class GoogleClientProvider:
    """
    Lazily-built, invalidatable holder for the Sheets v4 and Drive v3 services.

    Each service gets its own ``AuthorizedHttp`` because httplib2 connections
    are not thread-safe and the services are driven from worker threads.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        refresh_token: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._timeout_seconds = timeout_seconds
        self._credentials: Optional[Credentials] = None
        self._sheets: Any = None
        self._drive: Any = None
        self._lock = threading.Lock()

    def _build_credentials(self) -> Credentials:
        refresh_token = self._refresh_token or settings.GOOGLE_REFRESH_TOKEN
        if not refresh_token:
            raise ValueError(
                "GOOGLE_REFRESH_TOKEN is not configured. "
                "Authorize the Google account and set it in your .env file."
            )

        return Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=settings.GOOGLE_TOKEN_URI,
            client_id=self._client_id or settings.GOOGLE_CLIENT_ID,
            client_secret=self._client_secret or settings.GOOGLE_CLIENT_SECRET,
            scopes=SCOPES,
        )

    def _authorized_http(self) -> AuthorizedHttp:
        timeout = self._timeout_seconds or settings.GOOGLE_API_TIMEOUT_SECONDS
        return AuthorizedHttp(self._credentials, http=httplib2.Http(timeout=timeout))

    def get_sheets(self) -> Any:
        """Return the Sheets v4 service, building it on first use."""
        with self._lock:
            if self._sheets is None:
                if self._credentials is None:
                    self._credentials = self._build_credentials()
                self._sheets = build(
                    "sheets", "v4", http=self._authorized_http(), cache_discovery=False
                )
                logger.info("Google Sheets client initialized")
            return self._sheets

    def get_drive(self) -> Any:
        """Return the Drive v3 service, building it on first use."""
        with self._lock:
            if self._drive is None:
                if self._credentials is None:
                    self._credentials = self._build_credentials()
                self._drive = build(
                    "drive", "v3", http=self._authorized_http(), cache_discovery=False
                )
                logger.info("Google Drive client initialized")
            return self._drive

    def invalidate(self) -> None:
        """Forget cached credentials and services; the next call rebuilds them."""
        with self._lock:
            self._credentials = None
            self._sheets = None
            self._drive = None
        logger.warning("Google API clients invalidated, will re-authenticate on next use")


# Process-wide provider
google_clients = GoogleClientProvider()


def get_google_clients() -> GoogleClientProvider:
    """FastAPI dependency returning the process-wide provider."""
    return google_clients


async def execute(request: Any) -> Any:
    """
    Run a googleapiclient request in a worker thread.

    ``request.execute()`` blocks on HTTP; the socket timeout configured on
    the provider bounds how long it can take.
    """
    return await asyncio.to_thread(request.execute)
