"""Tests for gateway WebSocket helpers."""

from __future__ import annotations

import json
import zlib
from unittest.mock import AsyncMock, patch

import pytest

from kaiheila_client import (
    FrameDecodeFailed,
    GatewayAddress,
    GatewayConnectFailed,
    GatewayResumeState,
    build_ping_frame,
    connect_gateway,
    decode_frame,
)

ADDRESS = GatewayAddress(
    scheme="wss",
    host="ws.example.test",
    path="/gateway",
    token="abc",
    compress=True,
    resume=GatewayResumeState(sequence=12, session_id="s1"),
)


class TestConnectGateway:
    """Tests for connect_gateway()."""

    async def test_connects_to_built_url(self) -> None:
        """Test the connection URL carries the resume state."""
        mock_ws = AsyncMock()
        with patch(
            "kaiheila_client.ws.websockets.connect",
            new=AsyncMock(return_value=mock_ws),
        ) as mock_connect:
            ws = await connect_gateway(ADDRESS)

        assert ws is mock_ws
        mock_connect.assert_called_once_with(
            "wss://ws.example.test/gateway?compress=1&token=abc"
            "&resume=1&sn=12&session_id=s1",
            ping_interval=None,
            close_timeout=5,
            max_size=None,
        )

    async def test_os_error_wrapped(self) -> None:
        """Test network failures raise GatewayConnectFailed."""
        with patch(
            "kaiheila_client.ws.websockets.connect",
            new=AsyncMock(side_effect=OSError("unreachable")),
        ):
            with pytest.raises(GatewayConnectFailed) as exc_info:
                await connect_gateway(ADDRESS)

        assert isinstance(exc_info.value.cause, OSError)
        assert exc_info.value.url == ADDRESS.build()

    async def test_timeout_wrapped(self) -> None:
        """Test connection timeouts raise GatewayConnectFailed."""
        with patch(
            "kaiheila_client.ws.websockets.connect",
            new=AsyncMock(side_effect=TimeoutError()),
        ):
            with pytest.raises(GatewayConnectFailed):
                await connect_gateway(ADDRESS, timeout=0.1)


class TestDecodeFrame:
    """Tests for decode_frame()."""

    def test_compressed_frame(self) -> None:
        """Test binary frames are inflated before decoding."""
        payload = {"s": 0, "sn": 3, "d": {"type": 9}}
        frame = zlib.compress(json.dumps(payload).encode())
        assert decode_frame(frame) == payload

    def test_text_frame(self) -> None:
        """Test text frames are decoded directly."""
        assert decode_frame('{"s": 3}') == {"s": 3}

    @pytest.mark.parametrize("frame", [b"not zlib", "not json", "[1, 2]"])
    def test_invalid_frame(self, frame: bytes | str) -> None:
        """Test undecodable frames raise FrameDecodeFailed."""
        with pytest.raises(FrameDecodeFailed):
            decode_frame(frame)


class TestPingFrame:
    """Tests for build_ping_frame()."""

    def test_with_resume_state(self) -> None:
        """Test the ping acknowledges the last sequence."""
        assert build_ping_frame(ADDRESS.resume) == {"s": 2, "sn": 12}

    def test_fresh_session(self) -> None:
        """Test a fresh session pings with sequence zero."""
        assert build_ping_frame(None) == {"s": 2, "sn": 0}
