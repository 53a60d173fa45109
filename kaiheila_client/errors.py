"""Error types for Kaiheila API and gateway interactions."""

from __future__ import annotations


class KaiheilaError(Exception):
    """Base error for Kaiheila client failures."""


class TokenInvalid(KaiheilaError):
    """Token cannot be used as an Authorization header value."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Token {token!r} is not a valid header value")
        self.token = token


class ClientCreateFailed(KaiheilaError):
    """The underlying aiohttp session could not be created."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Failed to create HTTP client: {cause}")
        self.cause = cause


class BuildRequestFailed(KaiheilaError):
    """Request could not be assembled from the given parameters."""

    def __init__(self, cause: BaseException | str) -> None:
        super().__init__(f"Failed to build request: {cause}")
        self.cause = cause


class RequestFailed(KaiheilaError):
    """Network fault while sending a request or reading its body."""

    def __init__(self, method: str, url: str, cause: BaseException) -> None:
        super().__init__(f"{method} {url} failed: {cause!r}")
        self.method = method
        self.url = url
        self.cause = cause


class HTTPStatusNotOK(KaiheilaError):
    """Server answered with a status other than 200."""

    def __init__(self, method: str, url: str, status: int) -> None:
        super().__init__(f"{method} {url} returned HTTP status {status}")
        self.method = method
        self.url = url
        self.status = status


class ParseBodyFailed(KaiheilaError):
    """Response body is not a valid envelope."""

    def __init__(self, body: bytes, cause: BaseException | None = None) -> None:
        super().__init__(f"Failed to parse response body: {body[:200]!r}")
        self.body = body
        self.cause = cause


class CodeNotZero(KaiheilaError):
    """Envelope parsed but the API reported an application error."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"API error {code}: {message}")
        self.code = code
        self.message = message


class GatewayURLError(KaiheilaError):
    """Base error for malformed or incomplete gateway URLs."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class InvalidURL(GatewayURLError):
    """The string is not a valid absolute URL."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(url, f"{url} is an invalid url: {cause}")
        self.cause = cause


class InvalidSchema(GatewayURLError):
    """The URL scheme is not ws or wss."""

    def __init__(self, url: str, schema: str) -> None:
        super().__init__(
            url, f"the url {url} has invalid schema {schema}, only ws or wss is ok"
        )
        self.schema = schema


class NoHost(GatewayURLError):
    def __init__(self, url: str) -> None:
        super().__init__(url, f"the gateway url {url} has no host")


class NoToken(GatewayURLError):
    def __init__(self, url: str) -> None:
        super().__init__(url, f"the gateway url {url} has no token")


class NoSN(GatewayURLError):
    def __init__(self, url: str) -> None:
        super().__init__(url, f"the gateway url {url} has no sn when resume is 1")


class InvalidSN(GatewayURLError):
    """The sn parameter is not an unsigned 64-bit integer."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(url, f"the gateway url {url} has invalid sn: {cause}")
        self.cause = cause


class NoSessionID(GatewayURLError):
    def __init__(self, url: str) -> None:
        super().__init__(
            url, f"the gateway url {url} has no session_id when resume is 1"
        )


class GatewayConnectFailed(KaiheilaError):
    """WebSocket connection to the gateway could not be established."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"Gateway connection to {url} failed: {cause!r}")
        self.url = url
        self.cause = cause


class FrameDecodeFailed(KaiheilaError):
    """A gateway frame could not be inflated or decoded as JSON."""

    def __init__(self, data: bytes | str, cause: BaseException) -> None:
        super().__init__(f"Failed to decode gateway frame: {cause}")
        self.data = data
        self.cause = cause
