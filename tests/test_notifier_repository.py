"""
Tests for `repositories/notifier_repository.py`.

The Telegram Bot API is replaced with an httpx.MockTransport.
"""

from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from repositories.errors import SinkError, StartupError
from repositories.notifier_repository import TelegramNotifier


def _notifier(handler, requests: List[httpx.Request]) -> TelegramNotifier:
    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(record))
    return TelegramNotifier("123:abc", -100500, client=client)


def test_send_message_posts_markdown_message() -> None:
    requests: List[httpx.Request] = []
    notifier = _notifier(lambda r: httpx.Response(200, json={"ok": True, "result": {}}), requests)

    notifier.send_message("Товар: Серьги\nПродано за: 1500\nТип оплаты: Наличные")

    assert len(requests) == 1
    assert requests[0].url.path == "/bot123:abc/sendMessage"
    assert json.loads(requests[0].content) == {
        "chat_id": -100500,
        "text": "Товар: Серьги\nПродано за: 1500\nТип оплаты: Наличные",
        "parse_mode": "Markdown",
    }


def test_send_message_api_error_raises_sink_error() -> None:
    notifier = _notifier(
        lambda r: httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"}),
        [],
    )

    with pytest.raises(SinkError, match="chat not found"):
        notifier.send_message("hello")


def test_send_message_not_ok_raises_sink_error() -> None:
    notifier = _notifier(lambda r: httpx.Response(200, json={"ok": False}), [])

    with pytest.raises(SinkError):
        notifier.send_message("hello")


def test_send_message_transport_error_raises_sink_error() -> None:
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    notifier = _notifier(unreachable, [])

    with pytest.raises(SinkError, match="failed to send Telegram message"):
        notifier.send_message("hello")


def test_verify_accepts_valid_token() -> None:
    requests: List[httpx.Request] = []
    notifier = _notifier(
        lambda r: httpx.Response(200, json={"ok": True, "result": {"username": "sales_bot"}}),
        requests,
    )

    notifier.verify()

    assert requests[0].url.path == "/bot123:abc/getMe"


def test_verify_rejected_token_raises_startup_error() -> None:
    notifier = _notifier(lambda r: httpx.Response(401, json={"ok": False, "description": "Unauthorized"}), [])

    with pytest.raises(StartupError, match="Unauthorized"):
        notifier.verify()


def test_empty_token_raises_startup_error() -> None:
    with pytest.raises(StartupError):
        TelegramNotifier("", 1)
