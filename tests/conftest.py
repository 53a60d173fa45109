"""Pytest configuration and fixtures for kaiheila_client tests."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from kaiheila_client import KaiheilaHttpClient

BASE_URL = "https://mock.test/api/v3"
TOKEN = "1/MTA=/abc"


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock aiohttp ClientSession."""
    import aiohttp

    return MagicMock(spec=aiohttp.ClientSession)


@pytest.fixture
def client(mock_session: MagicMock) -> KaiheilaHttpClient:
    """Create a bot client bound to the mock session."""
    return KaiheilaHttpClient.from_bot_token(
        TOKEN, session=mock_session, base_url=BASE_URL
    )


def create_mock_response(
    status: int = 200,
    read_data: bytes | None = None,
) -> AsyncMock:
    """Create a configured mock response.

    Args:
        status: HTTP status code
        read_data: Data to return from read() call

    Returns:
        Configured AsyncMock response
    """
    response = AsyncMock()
    response.status = status

    if read_data is not None:
        response.read.return_value = read_data

    response.__aenter__.return_value = response
    response.__aexit__.return_value = None

    return response


def envelope_response(
    data: Any, *, code: int = 0, message: str = "", status: int = 200
) -> AsyncMock:
    """Create a 200 response carrying a JSON envelope."""
    body = json.dumps({"code": code, "message": message, "data": data})
    return create_mock_response(status=status, read_data=body.encode())


def page_data(
    items: list[Any], *, page: int, page_total: int, page_size: int = 2
) -> dict[str, Any]:
    """Build the data of one page of a list endpoint."""
    return {
        "items": items,
        "meta": {
            "page": page,
            "page_total": page_total,
            "page_size": page_size,
            "total": page_total * page_size,
        },
        "sort": {"id": 1},
    }


def guild_item(guild_id: str) -> dict[str, Any]:
    """Build a /guild/list item."""
    return {
        "id": guild_id,
        "name": f"Guild {guild_id}",
        "topic": "",
        "master_id": "100",
        "icon": "",
        "notify_type": 2,
        "region": "beijing",
        "enable_open": False,
        "open_id": "0",
        "default_channel_id": "200",
        "welcome_channel_id": "0",
        "boost_num": 3,
        "level": 1,
    }
