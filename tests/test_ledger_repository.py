"""
Tests for `repositories/ledger_repository.py`.

The Sheets service is a MagicMock; no credentials or network are used.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from api.config import LedgerSettings
from repositories.errors import SinkError, StartupError
from repositories.ledger_repository import SheetsLedger


def _ledger(service: MagicMock, **kwargs) -> SheetsLedger:
    kwargs.setdefault("spreadsheet_id", "sheet-id")
    return SheetsLedger(service_factory=lambda credentials: service, **kwargs)


def test_append_row_calls_values_append() -> None:
    service = MagicMock()
    ledger = _ledger(service, sheet_name="Фигурки", column_range="A:E")

    ledger.append_row(["2025-11-18 22:45:48", "Марк", "Золотой", "40", "Карта"])

    service.spreadsheets.return_value.values.return_value.append.assert_called_once_with(
        spreadsheetId="sheet-id",
        range="Фигурки!A:E",
        valueInputOption="USER_ENTERED",
        insertDataOption="INSERT_ROWS",
        body={"values": [["2025-11-18 22:45:48", "Марк", "Золотой", "40", "Карта"]]},
    )
    service.spreadsheets.return_value.values.return_value.append.return_value.execute.assert_called_once()


def test_defaults() -> None:
    ledger = _ledger(MagicMock(), sheet_name="", column_range="")

    assert ledger.range_notation == "Sheet1!A:E"


def test_from_settings() -> None:
    settings = LedgerSettings(spreadsheet_id="jewelry-id", sheet_name="Sheet1", column_range="A:D")

    ledger = SheetsLedger.from_settings(settings, credentials=None)

    assert ledger.spreadsheet_id == "jewelry-id"
    assert ledger.range_notation == "Sheet1!A:D"


def test_http_error_raises_sink_error() -> None:
    service = MagicMock()
    resp = httplib2.Response({"status": "403"})
    service.spreadsheets.return_value.values.return_value.append.return_value.execute.side_effect = HttpError(
        resp, b'{"error": {"message": "The caller does not have permission"}}'
    )

    with pytest.raises(SinkError, match="failed to append row to sheet"):
        _ledger(service).append_row(["a", "b", "c", "d"])


def test_network_error_raises_sink_error() -> None:
    service = MagicMock()
    service.spreadsheets.return_value.values.return_value.append.return_value.execute.side_effect = (
        ConnectionResetError("reset by peer")
    )

    with pytest.raises(SinkError):
        _ledger(service).append_row(["a", "b", "c", "d"])


def test_missing_spreadsheet_id_raises_startup_error() -> None:
    with pytest.raises(StartupError):
        SheetsLedger(spreadsheet_id="")
