"""WebSocket helpers for connecting to the Kaiheila gateway.

The read loop, heartbeat scheduling and reconnect policy belong to the
caller. These helpers only open the connection and translate frames.
"""

from __future__ import annotations

import asyncio
import json
import zlib
from typing import Any

import websockets
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import WebSocketException

from .errors import FrameDecodeFailed, GatewayConnectFailed
from .gateway import GatewayAddress, GatewayResumeState

SIGNAL_PING = 2


async def connect_gateway(
    address: GatewayAddress,
    *,
    ping_interval: int | None = None,
    timeout: float = 15.0,
) -> ClientConnection:
    """Connect to the gateway described by ``address``.

    Kaiheila uses application-level ping frames (see :func:`build_ping_frame`),
    so protocol pings are off by default.

    Args:
        address: Gateway address, with resume state when reconnecting
        ping_interval: Interval for protocol ping frames
        timeout: Connection timeout
    """
    url = address.build()
    try:
        return await asyncio.wait_for(
            websockets.connect(
                url,
                ping_interval=ping_interval,
                close_timeout=5,
                max_size=None,
            ),
            timeout=timeout,
        )
    except TimeoutError as err:
        raise GatewayConnectFailed(url, err) from err
    except (OSError, WebSocketException) as err:
        raise GatewayConnectFailed(url, err) from err


def decode_frame(data: bytes | str) -> dict[str, Any]:
    """Decode a gateway frame.

    Binary frames are zlib-compressed JSON (sessions opened with
    ``compress=1``); text frames are plain JSON.
    """
    try:
        if isinstance(data, bytes):
            data = zlib.decompress(data)
        result = json.loads(data)
    except (zlib.error, ValueError) as err:
        raise FrameDecodeFailed(data, err) from err
    if not isinstance(result, dict):
        raise FrameDecodeFailed(data, TypeError("frame is not a JSON object"))
    return result


def build_ping_frame(resume: GatewayResumeState | None) -> dict[str, int]:
    """Build the heartbeat frame acknowledging the last received sequence."""
    return {"s": SIGNAL_PING, "sn": resume.sequence if resume is not None else 0}
