"""HTTP client for the Kaiheila REST API."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any, Final, TypeVar

import aiohttp
from yarl import URL

from . import __version__
from .errors import (
    BuildRequestFailed,
    ClientCreateFailed,
    CodeNotZero,
    HTTPStatusNotOK,
    ParseBodyFailed,
    RequestFailed,
    TokenInvalid,
)
from .gateway import GatewayAddress
from .models import (
    GatewayIndex,
    GuildListItem,
    GuildMuteList,
    GuildMuteSetting,
    GuildNicknameSetting,
    GuildUser,
    GuildUserListSetting,
    GuildView,
)
from .pagination import PageStream
from .protocol import Envelope

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Params = Sequence[tuple[str, str]]

DEFAULT_BASE_URL: Final = "https://www.kaiheila.cn/api/v3"
DEFAULT_TIMEOUT: Final = 10.0
USER_AGENT: Final = f"kaiheila-client/{__version__}"

# Sent with every call; asks the server for compact payloads
_COMPRESS: Final = ("compress", "1")

# Visible ASCII and tab, the characters allowed in a header value
_HEADER_VALUE = re.compile(r"[\t\x20-\x7e]*")


def _ignore_data(data: Any) -> None:
    return None


class KaiheilaHttpClient:
    """HTTP client wrapper for the Kaiheila REST API.

    Usage:
        async with KaiheilaHttpClient.from_bot_token(token) as client:
            url = await client.gateway_url()
            async for guild in client.guild_list_stream():
                ...

    The Authorization header is fixed at construction. The instance keeps no
    per-call state and can be shared between concurrent tasks.
    """

    def __init__(
        self,
        token: str,
        *,
        auth_type: str = "Bot",
        session: aiohttp.ClientSession | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize client.

        Args:
            token: Bot or OAuth2 access token
            auth_type: Authorization scheme, "Bot" or "Bearer"
            session: Existing aiohttp session; one is created when omitted
            base_url: API origin and version prefix
            timeout: Total timeout per request (seconds)

        Raises:
            TokenInvalid: The token cannot be sent as a header value
            ClientCreateFailed: The aiohttp session could not be created
        """
        auth_value = f"{auth_type} {token}"
        if not _HEADER_VALUE.fullmatch(auth_value):
            raise TokenInvalid(token)

        self._headers = {
            "Authorization": auth_value,
            "User-Agent": USER_AGENT,
        }
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

        self._owns_session = session is None
        if session is None:
            try:
                session = aiohttp.ClientSession(auto_decompress=True)
            except (RuntimeError, TypeError, ValueError) as err:
                raise ClientCreateFailed(err) from err
        self._session = session

    @classmethod
    def from_bot_token(cls, token: str, **kwargs: Any) -> KaiheilaHttpClient:
        """Create a client authenticating as a bot."""
        return cls(token, auth_type="Bot", **kwargs)

    @classmethod
    def from_oauth2_token(cls, token: str, **kwargs: Any) -> KaiheilaHttpClient:
        """Create a client authenticating with an OAuth2 access token."""
        return cls(token, auth_type="Bearer", **kwargs)

    async def __aenter__(self) -> KaiheilaHttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and not self._session.closed:
            await self._session.close()

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _build(
        self,
        path: str,
        form: Params | None,
        json_body: Any,
    ) -> tuple[str, dict[str, str], Any]:
        if form is not None and json_body is not None:
            raise BuildRequestFailed("form and json_body are mutually exclusive")
        if not path.startswith("/"):
            raise BuildRequestFailed(f"path must start with '/': {path!r}")

        url = self._url(path)
        try:
            URL(url)
        except ValueError as err:
            raise BuildRequestFailed(err) from err

        headers = dict(self._headers)
        data: Any = None
        if json_body is not None:
            try:
                data = json.dumps(json_body)
            except (TypeError, ValueError) as err:
                raise BuildRequestFailed(err) from err
            headers["Content-type"] = "application/json"
        elif form is not None:
            data = aiohttp.FormData(list(form))
        return url, headers, data

    async def request(
        self,
        path: str,
        method: str = "GET",
        *,
        query: Params | None = None,
        form: Params | None = None,
        json_body: Any = None,
        parser: Callable[[Any], T] | None = None,
    ) -> T:
        """Execute one API call and return the envelope's ``data``.

        Args:
            path: Resource path below the base URL, e.g. "/guild/list"
            method: HTTP method
            query: Ordered query pairs; duplicates are all sent
            form: Ordered form pairs sent as the body
            json_body: JSON-serializable body; exclusive with ``form``
            parser: Converts raw ``data`` into the result type

        Raises:
            BuildRequestFailed: Parameters do not form a valid request
            RequestFailed: Network fault or timeout
            HTTPStatusNotOK: Status other than 200
            ParseBodyFailed: Body is not a valid envelope
            CodeNotZero: The API reported an application error
        """
        url, headers, data = self._build(path, form, json_body)

        _LOGGER.debug("%s %s", method, url)
        try:
            async with self._session.request(
                method,
                url,
                params=list(query) if query is not None else None,
                data=data,
                headers=headers,
                timeout=self._timeout,
                allow_redirects=False,
            ) as resp:
                if resp.status != 200:
                    _LOGGER.warning(
                        "%s %s returned status %s", method, url, resp.status
                    )
                    raise HTTPStatusNotOK(method, url, resp.status)
                body = await resp.read()
        except TimeoutError as err:
            raise RequestFailed(method, url, err) from err
        except aiohttp.ClientError as err:
            raise RequestFailed(method, url, err) from err

        try:
            envelope = Envelope.from_json(body)
        except (TypeError, ValueError) as err:
            raise ParseBodyFailed(body, err) from err

        if not envelope.ok:
            _LOGGER.warning(
                "%s %s failed with code %s: %s",
                method,
                url,
                envelope.code,
                envelope.message,
            )
            raise CodeNotZero(envelope.code, envelope.message)

        if parser is None:
            return envelope.data
        try:
            return parser(envelope.data)
        except (KeyError, TypeError, ValueError) as err:
            raise ParseBodyFailed(body, err) from err

    # -------------------------------------------------------------------------
    # Gateway
    # -------------------------------------------------------------------------

    async def gateway_url(self) -> str:
        """Call /gateway/index and return the raw gateway URL."""
        index: GatewayIndex = await self.request(
            "/gateway/index", "GET", query=[_COMPRESS], parser=GatewayIndex.from_dict
        )
        return index.url

    async def gateway_address(self) -> GatewayAddress:
        """Call /gateway/index and parse the returned URL.

        Raises:
            GatewayURLError: The server returned an unusable URL
        """
        return GatewayAddress.parse(await self.gateway_url())

    # -------------------------------------------------------------------------
    # Guilds
    # -------------------------------------------------------------------------

    def guild_list_stream(self) -> PageStream[GuildListItem]:
        """Stream every guild the bot has joined (/guild/list)."""
        return PageStream(self, "/guild/list", [_COMPRESS], GuildListItem.from_dict)

    async def guild_view(self, guild_id: str) -> GuildView:
        """Fetch guild details (/guild/view)."""
        return await self.request(
            "/guild/view",
            "GET",
            query=[_COMPRESS, ("guild_id", guild_id)],
            parser=GuildView.from_dict,
        )

    def guild_user_list_stream(
        self, setting: GuildUserListSetting
    ) -> PageStream[GuildUser]:
        """Stream the members of a guild (/guild/user-list)."""
        return PageStream(
            self,
            "/guild/user-list",
            [_COMPRESS, *setting.to_query()],
            GuildUser.from_dict,
        )

    async def guild_nickname(self, setting: GuildNicknameSetting) -> None:
        """Change or reset a member nickname (/guild/nickname)."""
        await self._post("/guild/nickname", setting.to_json())

    async def guild_leave(self, guild_id: str) -> None:
        """Leave a guild (/guild/leave)."""
        await self._post("/guild/leave", {"guild_id": guild_id})

    async def guild_kickout(self, guild_id: str, target_id: str) -> None:
        """Kick a member out of a guild (/guild/kickout)."""
        await self._post(
            "/guild/kickout", {"guild_id": guild_id, "target_id": target_id}
        )

    async def guild_mute_list(self, guild_id: str) -> GuildMuteList:
        """Fetch the mic and headset mute lists (/guild-mute/list)."""
        return await self.request(
            "/guild-mute/list",
            "GET",
            query=[_COMPRESS, ("return_type", "detail"), ("guild_id", guild_id)],
            parser=GuildMuteList.from_dict,
        )

    async def guild_mute_create(self, setting: GuildMuteSetting) -> None:
        """Mute a member (/guild-mute/create)."""
        await self._post("/guild-mute/create", setting.to_json())

    async def guild_mute_delete(self, setting: GuildMuteSetting) -> None:
        """Unmute a member (/guild-mute/delete)."""
        await self._post("/guild-mute/delete", setting.to_json())

    async def _post(self, path: str, body: dict[str, Any]) -> None:
        await self.request(
            path, "POST", query=[_COMPRESS], json_body=body, parser=_ignore_data
        )
