"""Typed asyncio client for the Kaiheila REST API and gateway."""

__version__ = "0.1.0"

from .errors import (
    BuildRequestFailed,
    ClientCreateFailed,
    CodeNotZero,
    FrameDecodeFailed,
    GatewayConnectFailed,
    GatewayURLError,
    HTTPStatusNotOK,
    InvalidSchema,
    InvalidSN,
    InvalidURL,
    KaiheilaError,
    NoHost,
    NoSessionID,
    NoSN,
    NoToken,
    ParseBodyFailed,
    RequestFailed,
    TokenInvalid,
)
from .gateway import GatewayAddress, GatewayResumeState
from .http import DEFAULT_BASE_URL, KaiheilaHttpClient
from .models import (
    GuildChannel,
    GuildListItem,
    GuildMuteList,
    GuildMuteSetting,
    GuildNicknameSetting,
    GuildRole,
    GuildUser,
    GuildUserListSetting,
    GuildView,
    MuteGroup,
    MuteType,
)
from .pagination import PageStream
from .protocol import Envelope, PagedList, PageMeta
from .ws import build_ping_frame, connect_gateway, decode_frame

__all__ = [
    "DEFAULT_BASE_URL",
    "BuildRequestFailed",
    "ClientCreateFailed",
    "CodeNotZero",
    "Envelope",
    "FrameDecodeFailed",
    "GatewayAddress",
    "GatewayConnectFailed",
    "GatewayResumeState",
    "GatewayURLError",
    "GuildChannel",
    "GuildListItem",
    "GuildMuteList",
    "GuildMuteSetting",
    "GuildNicknameSetting",
    "GuildRole",
    "GuildUser",
    "GuildUserListSetting",
    "GuildView",
    "HTTPStatusNotOK",
    "InvalidSN",
    "InvalidSchema",
    "InvalidURL",
    "KaiheilaError",
    "KaiheilaHttpClient",
    "MuteGroup",
    "MuteType",
    "NoHost",
    "NoSN",
    "NoSessionID",
    "NoToken",
    "PageMeta",
    "PageStream",
    "PagedList",
    "ParseBodyFailed",
    "RequestFailed",
    "TokenInvalid",
    "__version__",
    "build_ping_frame",
    "connect_gateway",
    "decode_frame",
]
