"""Gateway connection URL codec.

The gateway URL returned by ``/gateway/index`` has the shape::

    <scheme>://<host>[:<port>]<path>?compress=<0|1>&token=<token>
        [&resume=1&sn=<u64>&session_id=<id>]

The resume triple lets a reconnecting client continue from the last
acknowledged event instead of starting a fresh session.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass

from yarl import URL

from .errors import (
    InvalidSchema,
    InvalidSN,
    InvalidURL,
    NoHost,
    NoSessionID,
    NoSN,
    NoToken,
)

GATEWAY_SCHEMES: frozenset[str] = frozenset({"ws", "wss"})
_DEFAULT_PORTS: dict[str, int] = {"ws": 80, "wss": 443}
MAX_SEQUENCE = 2**64 - 1

# Unsigned decimal, optionally with a leading plus sign
_SN_PATTERN = re.compile(r"\+?[0-9]+")


def _parse_sn(value: str) -> int:
    if not _SN_PATTERN.fullmatch(value):
        raise ValueError(f"invalid digit found in {value!r}")
    sn = int(value)
    if sn > MAX_SEQUENCE:
        raise ValueError(f"{value} is too large to fit in an unsigned 64-bit integer")
    return sn


@dataclass(frozen=True)
class GatewayResumeState:
    """Last acknowledged event position and the session it belongs to."""

    sequence: int
    session_id: str

    def __post_init__(self) -> None:
        if isinstance(self.sequence, bool) or not isinstance(self.sequence, int):
            raise TypeError("sequence must be an integer")
        if not 0 <= self.sequence <= MAX_SEQUENCE:
            raise ValueError(f"sequence {self.sequence} is out of u64 range")
        if not isinstance(self.session_id, str):
            raise TypeError("session_id must be a string")


@dataclass(frozen=True)
class GatewayAddress:
    """Parsed gateway URL.

    Instances are immutable; use :meth:`with_resume` to derive the address
    for a reconnect. A port equal to the scheme default is stored as ``None``
    and an empty path as ``"/"``, and the host is lowercased, so that equal
    URLs compare equal.
    """

    scheme: str
    host: str
    path: str
    token: str
    compress: bool = False
    port: int | None = None
    resume: GatewayResumeState | None = None

    def __post_init__(self) -> None:
        if self.scheme not in GATEWAY_SCHEMES:
            raise ValueError(f"scheme must be ws or wss, got {self.scheme!r}")
        if not self.host:
            raise ValueError("host is required")
        object.__setattr__(self, "host", self.host.lower())
        if not isinstance(self.token, str):
            raise TypeError("token must be a string")
        if self.resume is not None and not isinstance(
            self.resume, GatewayResumeState
        ):
            raise TypeError("resume must be a GatewayResumeState or None")
        if self.port is not None:
            if not 0 <= self.port <= 65535:
                raise ValueError(f"port {self.port} is out of range")
            if self.port == _DEFAULT_PORTS[self.scheme]:
                object.__setattr__(self, "port", None)
        if not self.path:
            object.__setattr__(self, "path", "/")
        elif not self.path.startswith("/"):
            raise ValueError(f"path must start with '/', got {self.path!r}")

    @classmethod
    def parse(cls, s: str) -> GatewayAddress:
        """Parse a gateway URL string.

        Raises:
            InvalidURL, InvalidSchema, NoHost, NoToken, NoSN, NoSessionID,
            InvalidSN: The URL is malformed or incomplete.
        """
        try:
            url = URL(s)
            port = url.port
        except (TypeError, ValueError) as err:
            raise InvalidURL(s, err) from err
        if not url.scheme:
            raise InvalidURL(s, ValueError("relative URL without a base"))

        if url.scheme not in GATEWAY_SCHEMES:
            raise InvalidSchema(s, url.scheme)

        if not url.host:
            raise NoHost(s)

        query = url.query

        def param(key: str) -> str | None:
            # Last occurrence wins for repeated keys
            values = query.getall(key, [])
            return values[-1] if values else None

        compress = param("compress") == "1"

        token = param("token")
        if token is None:
            raise NoToken(s)

        resume: GatewayResumeState | None = None
        if param("resume") == "1":
            sn = param("sn")
            if sn is None:
                raise NoSN(s)
            session_id = param("session_id")
            if session_id is None:
                raise NoSessionID(s)
            try:
                sequence = _parse_sn(sn)
            except ValueError as err:
                raise InvalidSN(s, err) from err
            resume = GatewayResumeState(sequence=sequence, session_id=session_id)

        return cls(
            scheme=url.scheme,
            host=url.host,
            port=None if url.is_default_port() else port,
            path=url.path,
            compress=compress,
            token=token,
            resume=resume,
        )

    def url(self) -> URL:
        """Build the connection URL."""
        query: list[tuple[str, str]] = [
            ("compress", "1" if self.compress else "0"),
            ("token", self.token),
        ]
        if self.resume is not None:
            query.append(("resume", "1"))
            query.append(("sn", str(self.resume.sequence)))
            query.append(("session_id", self.resume.session_id))
        return URL.build(
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query=query,
        )

    def build(self) -> str:
        return str(self.url())

    def with_resume(self, resume: GatewayResumeState | None) -> GatewayAddress:
        """Return a copy of this address carrying ``resume``."""
        return dataclasses.replace(self, resume=resume)

    def __str__(self) -> str:
        return self.build()
