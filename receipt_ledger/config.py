"""
Configuration module for the Receipt Ledger backend.

Loads environment variables and validates required settings.
"""
import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from receipt_ledger.errors import ConfigurationMissing
from receipt_ledger.utils.constants import MONTH_NAMES

# Load .env file
load_dotenv()


def _int_env(name: str, default: int) -> Optional[int]:
    """Read an integer variable; None when it is set but not a number."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return None


class Settings:
    """Application settings loaded from environment variables."""

    # Google Sheets / Drive
    GOOGLE_SHEET_ID: str = os.getenv("GOOGLE_SHEET_ID", "")
    GOOGLE_DRIVE_FOLDER_ID: str = os.getenv("GOOGLE_DRIVE_FOLDER_ID", "")

    # OAuth2 (refresh token is obtained out of band)
    GOOGLE_CLIENT_ID: str = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET: str = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REFRESH_TOKEN: str = os.getenv("GOOGLE_REFRESH_TOKEN", "")
    GOOGLE_TOKEN_URI: str = os.getenv(
        "GOOGLE_TOKEN_URI", "https://oauth2.googleapis.com/token"
    )
    GOOGLE_API_TIMEOUT_SECONDS: Optional[int] = _int_env("GOOGLE_API_TIMEOUT_SECONDS", 30)

    # Ledger tab (receipt links) and summary tab (monthly checkboxes)
    GOOGLE_SHEET_NAME: str = os.getenv("GOOGLE_SHEET_NAME", "Comprovantes")
    GOOGLE_MAIN_SHEET_NAME: str = os.getenv("GOOGLE_MAIN_SHEET_NAME", "Main")

    # Ledger layout
    SHEET_NAME_COLUMN: str = os.getenv("SHEET_NAME_COLUMN", "A")
    SHEET_NAME_START_ROW: Optional[int] = _int_env("SHEET_NAME_START_ROW", 2)
    SHEET_NAME_END_ROW: Optional[int] = _int_env("SHEET_NAME_END_ROW", 29)
    SHEET_HEADER_ROW: Optional[int] = _int_env("SHEET_HEADER_ROW", 1)
    SHEET_MONTH_START_COLUMN: str = os.getenv("SHEET_MONTH_START_COLUMN", "B")
    SHEET_MONTH_END_COLUMN: str = os.getenv("SHEET_MONTH_END_COLUMN", "L")
    SHEET_HEADER_MARKER: str = os.getenv("SHEET_HEADER_MARKER", "Comp")

    # ';' for pt-BR spreadsheets, ',' for en-US
    SHEETS_FORMULA_SEPARATOR: str = os.getenv("SHEETS_FORMULA_SEPARATOR", ";")

    # Period labels
    LEDGER_LOCALE: str = os.getenv("LEDGER_LOCALE", "pt-BR")
    LEDGER_TIMEZONE: str = os.getenv("LEDGER_TIMEZONE", "America/Sao_Paulo")

    # Google Gemini API (receipt classifier)
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TIMEOUT_SECONDS: Optional[int] = _int_env("GEMINI_TIMEOUT_SECONDS", 60)

    # Chat transport
    # Empty GROUP_JID = debug mode: chat ids are logged and nothing is processed
    GROUP_JID: str = os.getenv("GROUP_JID", "")
    MAX_IMAGE_SIZE_MB: Optional[int] = _int_env("MAX_IMAGE_SIZE_MB", 10)

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ConfigurationMissing: If any required setting is missing or a
                layout value is out of range.
        """
        required_settings = {
            "GOOGLE_SHEET_ID": cls.GOOGLE_SHEET_ID,
            "GOOGLE_DRIVE_FOLDER_ID": cls.GOOGLE_DRIVE_FOLDER_ID,
            "GOOGLE_CLIENT_ID": cls.GOOGLE_CLIENT_ID,
            "GOOGLE_CLIENT_SECRET": cls.GOOGLE_CLIENT_SECRET,
            "GOOGLE_REFRESH_TOKEN": cls.GOOGLE_REFRESH_TOKEN,
            "GOOGLE_API_KEY": cls.GOOGLE_API_KEY,
        }

        missing = [key for key, value in required_settings.items() if not value]

        problems = []
        integers = {
            "SHEET_NAME_START_ROW": cls.SHEET_NAME_START_ROW,
            "SHEET_NAME_END_ROW": cls.SHEET_NAME_END_ROW,
            "SHEET_HEADER_ROW": cls.SHEET_HEADER_ROW,
            "GOOGLE_API_TIMEOUT_SECONDS": cls.GOOGLE_API_TIMEOUT_SECONDS,
            "GEMINI_TIMEOUT_SECONDS": cls.GEMINI_TIMEOUT_SECONDS,
            "MAX_IMAGE_SIZE_MB": cls.MAX_IMAGE_SIZE_MB,
        }
        for key, value in integers.items():
            if value is None:
                problems.append(f"{key} must be an integer")

        start, end = cls.SHEET_NAME_START_ROW, cls.SHEET_NAME_END_ROW
        if start is not None and start < 1:
            problems.append("SHEET_NAME_START_ROW must be >= 1")
        if start is not None and end is not None and end < start:
            problems.append("SHEET_NAME_END_ROW must be >= SHEET_NAME_START_ROW")

        for key in ("SHEET_NAME_COLUMN", "SHEET_MONTH_START_COLUMN", "SHEET_MONTH_END_COLUMN"):
            value = getattr(cls, key)
            if len(value) != 1 or not ("A" <= value <= "Z"):
                problems.append(f"{key} must be a single column letter A-Z")

        first, last = cls.SHEET_MONTH_START_COLUMN, cls.SHEET_MONTH_END_COLUMN
        if len(first) == 1 and len(last) == 1 and last < first:
            problems.append("SHEET_MONTH_END_COLUMN must not come before SHEET_MONTH_START_COLUMN")

        if len(cls.SHEETS_FORMULA_SEPARATOR) != 1:
            problems.append("SHEETS_FORMULA_SEPARATOR must be a single character")

        if cls.LEDGER_LOCALE not in MONTH_NAMES:
            problems.append(
                f"LEDGER_LOCALE must be one of: {', '.join(sorted(MONTH_NAMES))}"
            )

        try:
            ZoneInfo(cls.LEDGER_TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            problems.append(f"LEDGER_TIMEZONE is not a known timezone: {cls.LEDGER_TIMEZONE}")

        if missing or problems:
            raise ConfigurationMissing(missing, problems)


# Create a singleton instance
settings = Settings()

# Validate settings on module import so a misconfigured process never starts.
# Tests disable this with VALIDATE_CONFIG=false.
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    settings.validate()
