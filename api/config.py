"""
Application configuration.

Settings are read from the environment. A `.env` file in the project root is
loaded first so local runs do not need exported variables.

Environment variables:
- PORT: listen port (default 8080)
- TOY_SPREADSHEET_ID / TOY_SHEET_NAME: ledger for 3D toy sales
- JEWELRY_SPREADSHEET_ID / JEWELRY_SHEET_NAME: ledger for jewelry sales
- GOOGLE_APPLICATION_CREDENTIALS: service account JSON (application default
  credentials are used when unset)
- TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID: notification channel
- LOG_LEVEL: root log level (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from domain.sale import ProductLine
from repositories.errors import StartupError

env_path = Path(__file__).parent.parent / ".env"

DEFAULT_PORT: int = 8080
DEFAULT_SHEET_NAME: str = "Sheet1"

# Fixed per product line; must match the width of the row projection.
COLUMN_RANGES: Mapping[ProductLine, str] = {
    ProductLine.TOY: "A:E",
    ProductLine.JEWELRY: "A:D",
}


@dataclass(frozen=True, slots=True)
class LedgerSettings:
    """Destination of one product line's ledger rows."""
    spreadsheet_id: str
    sheet_name: str
    column_range: str


@dataclass(frozen=True, slots=True)
class Settings:
    port: int
    toy_ledger: LedgerSettings
    jewelry_ledger: LedgerSettings
    telegram_bot_token: str
    telegram_chat_id: int
    credentials_file: Optional[str] = None
    log_level: str = "INFO"

    def ledger_for(self, product_line: ProductLine) -> LedgerSettings:
        if product_line is ProductLine.TOY:
            return self.toy_ledger
        return self.jewelry_ledger


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "").strip()
    if not value:
        raise StartupError(f"Missing environment variable: {name}")
    return value


def _parse_int(environ: Mapping[str, str], name: str, default: Optional[int] = None) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        if default is None:
            raise StartupError(f"Missing environment variable: {name}")
        return default
    try:
        return int(raw)
    except ValueError:
        raise StartupError(f"Invalid {name}: {raw!r} is not an integer") from None


def _ledger_settings(environ: Mapping[str, str], prefix: str, product_line: ProductLine) -> LedgerSettings:
    return LedgerSettings(
        spreadsheet_id=_require(environ, f"{prefix}_SPREADSHEET_ID"),
        sheet_name=environ.get(f"{prefix}_SHEET_NAME", "").strip() or DEFAULT_SHEET_NAME,
        column_range=COLUMN_RANGES[product_line],
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        environ: Mapping to read instead of `os.environ` (the `.env` file is
            only loaded when reading the real environment)

    Raises:
        StartupError: a required variable is missing or malformed
    """

    if environ is None:
        load_dotenv(dotenv_path=env_path)
        environ = os.environ

    return Settings(
        port=_parse_int(environ, "PORT", DEFAULT_PORT),
        toy_ledger=_ledger_settings(environ, "TOY", ProductLine.TOY),
        jewelry_ledger=_ledger_settings(environ, "JEWELRY", ProductLine.JEWELRY),
        telegram_bot_token=_require(environ, "TELEGRAM_BOT_TOKEN"),
        telegram_chat_id=_parse_int(environ, "TELEGRAM_CHAT_ID"),
        credentials_file=environ.get("GOOGLE_APPLICATION_CREDENTIALS") or None,
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
    )


__all__ = ["LedgerSettings", "Settings", "StartupError", "load_settings"]
