"""
Ledger repository (Google Sheets).

Append-only sink for sale rows. One SheetsLedger writes to one fixed
spreadsheet/sheet/column range; one append writes exactly one row after the
existing data, with values interpreted as user-entered so the sheet may
auto-format dates and numbers.

Credentials:
- GOOGLE_APPLICATION_CREDENTIALS: path to a service account JSON file
- otherwise application default credentials
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

import google.auth
import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiError

from repositories.errors import SinkError, StartupError

logger = logging.getLogger(__name__)

SHEETS_SCOPES: List[str] = ["https://www.googleapis.com/auth/spreadsheets"]

_VALUE_INPUT_OPTION: str = "USER_ENTERED"
_INSERT_DATA_OPTION: str = "INSERT_ROWS"


def load_credentials(credentials_file: Optional[str] = None) -> Any:
    """
    Load Google credentials for the Sheets API.

    Args:
        credentials_file: Service account JSON path; when empty, application
            default credentials are used

    Raises:
        StartupError: credentials could not be loaded
    """

    try:
        if credentials_file:
            return service_account.Credentials.from_service_account_file(
                credentials_file, scopes=SHEETS_SCOPES
            )
        credentials, _project = google.auth.default(scopes=SHEETS_SCOPES)
        return credentials
    except (GoogleAuthError, OSError, ValueError) as e:
        raise StartupError(f"failed to load Google credentials: {e}") from e


def _build_sheets_service(credentials: Any) -> Any:
    # Bundled discovery document; no network call at build time.
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


class SheetsLedger:
    """Appends sale rows to a fixed range of a Google spreadsheet."""

    def __init__(
        self,
        spreadsheet_id: str,
        sheet_name: str = "Sheet1",
        column_range: str = "A:E",
        credentials: Any = None,
        service_factory: Callable[[Any], Any] = _build_sheets_service,
    ) -> None:
        if not spreadsheet_id:
            raise StartupError("SpreadsheetID is required")
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name or "Sheet1"
        self.column_range = column_range or "A:E"
        self._credentials = credentials
        self._service_factory = service_factory

    @classmethod
    def from_settings(cls, ledger_settings: Any, credentials: Any) -> "SheetsLedger":
        return cls(
            spreadsheet_id=ledger_settings.spreadsheet_id,
            sheet_name=ledger_settings.sheet_name,
            column_range=ledger_settings.column_range,
            credentials=credentials,
        )

    @property
    def range_notation(self) -> str:
        return f"{self.sheet_name}!{self.column_range}"

    def append_row(self, row: List[str]) -> None:
        """
        Append one row to the end of the sheet's existing data.

        Raises:
            SinkError: the Sheets API call failed (auth, network, quota, range)
        """

        try:
            # Service objects share an httplib2 connection and are not
            # thread-safe, so each append builds its own.
            service = self._service_factory(self._credentials)
            service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=self.range_notation,
                valueInputOption=_VALUE_INPUT_OPTION,
                insertDataOption=_INSERT_DATA_OPTION,
                body={"values": [list(row)]},
            ).execute()
        except (GoogleApiError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            raise SinkError(f"failed to append row to sheet: {e}") from e

        logger.debug("Appended row to %s/%s", self.spreadsheet_id, self.range_notation)


__all__ = ["SheetsLedger", "load_credentials", "SHEETS_SCOPES"]
