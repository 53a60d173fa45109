"""Typed request settings and response data for Kaiheila guild endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any


def _int_or_default(value: Any, default: int = 0) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _flag(value: bool) -> str:
    return "1" if value else "0"


# -----------------------------------------------------------------------------
# Response data
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class GatewayIndex:
    """Data of ``/gateway/index``."""

    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GatewayIndex:
        url = data["url"]
        if not isinstance(url, str):
            raise TypeError("url must be a string")
        return cls(url=url)


@dataclass(frozen=True)
class GuildListItem:
    """Item of ``/guild/list``."""

    id: str
    name: str
    topic: str
    master_id: str
    icon: str
    notify_type: int
    region: str
    enable_open: bool
    open_id: str
    default_channel_id: str
    welcome_channel_id: str
    boost_num: int = 0
    level: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GuildListItem:
        return cls(
            id=data["id"],
            name=data["name"],
            topic=data["topic"],
            master_id=data["master_id"],
            icon=data["icon"],
            notify_type=data["notify_type"],
            region=data["region"],
            enable_open=bool(data["enable_open"]),
            open_id=str(data["open_id"]),
            default_channel_id=data["default_channel_id"],
            welcome_channel_id=data["welcome_channel_id"],
            # Server sends these as strings or omits them for some guilds
            boost_num=_int_or_default(data.get("boost_num")),
            level=_int_or_default(data.get("level")),
        )


@dataclass(frozen=True)
class GuildRole:
    role_id: int
    name: str
    color: int
    position: int
    hoist: int
    mentionable: int
    permissions: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GuildRole:
        return cls(
            role_id=data["role_id"],
            name=data["name"],
            color=data["color"],
            position=data["position"],
            hoist=data["hoist"],
            mentionable=data["mentionable"],
            permissions=data["permissions"],
        )


@dataclass(frozen=True)
class GuildChannel:
    id: str
    guild_id: str
    master_id: str
    parent_id: str
    name: str
    topic: str
    type: int
    level: int
    slow_mode: int
    is_category: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GuildChannel:
        return cls(
            id=data["id"],
            guild_id=data["guild_id"],
            master_id=data["master_id"],
            parent_id=data["parent_id"],
            name=data["name"],
            topic=data["topic"],
            type=data["type"],
            level=data["level"],
            slow_mode=data["slow_mode"],
            is_category=bool(data["is_category"]),
        )


@dataclass(frozen=True)
class GuildView:
    """Data of ``/guild/view``."""

    id: str
    name: str
    topic: str
    master_id: str
    icon: str
    notify_type: int
    region: str
    enable_open: bool
    open_id: str
    default_channel_id: str
    welcome_channel_id: str
    boost_num: int
    level: int
    roles: tuple[GuildRole, ...] = ()
    channels: tuple[GuildChannel, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GuildView:
        return cls(
            id=data["id"],
            name=data["name"],
            topic=data["topic"],
            master_id=data["master_id"],
            icon=data["icon"],
            notify_type=data["notify_type"],
            region=data["region"],
            enable_open=bool(data["enable_open"]),
            open_id=str(data["open_id"]),
            default_channel_id=data["default_channel_id"],
            welcome_channel_id=data["welcome_channel_id"],
            boost_num=_int_or_default(data.get("boost_num")),
            level=_int_or_default(data.get("level")),
            roles=tuple(GuildRole.from_dict(role) for role in data["roles"]),
            channels=tuple(
                GuildChannel.from_dict(channel) for channel in data["channels"]
            ),
        )


@dataclass(frozen=True)
class GuildUser:
    """Item of ``/guild/user-list``."""

    id: str
    username: str
    identify_num: str
    online: bool
    status: int
    bot: bool
    avatar: str
    vip_avatar: str
    nickname: str
    roles: tuple[int, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GuildUser:
        return cls(
            id=data["id"],
            username=data["username"],
            identify_num=data["identify_num"],
            online=bool(data["online"]),
            status=data["status"],
            bot=bool(data["bot"]),
            avatar=data["avatar"],
            vip_avatar=data["vip_avatar"],
            nickname=data["nickname"],
            roles=tuple(data["roles"]),
        )


@dataclass(frozen=True)
class MuteGroup:
    type: int
    user_ids: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MuteGroup:
        return cls(type=data["type"], user_ids=tuple(data["user_ids"]))


@dataclass(frozen=True)
class GuildMuteList:
    """Data of ``/guild-mute/list`` with ``return_type=detail``."""

    mic: MuteGroup
    headset: MuteGroup

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GuildMuteList:
        return cls(
            mic=MuteGroup.from_dict(data["mic"]),
            headset=MuteGroup.from_dict(data["headset"]),
        )


# -----------------------------------------------------------------------------
# Request settings
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class GuildUserListSetting:
    """Filters for ``/guild/user-list``.

    Every field is optional and maps to exactly one query parameter:

    - ``channel_id``, ``search``, ``filter_user_id``: sent verbatim.
    - ``role_id``: sent as its decimal string.
    - ``mobile_verified``: ``"1"`` / ``"0"``.
    - ``active_time``, ``joined_at``: sort order, ``"1"`` ascending,
      ``"0"`` descending.
    """

    guild_id: str
    channel_id: str | None = None
    search: str | None = None
    role_id: int | None = None
    mobile_verified: bool | None = None
    active_time: bool | None = None
    joined_at: bool | None = None
    filter_user_id: str | None = None

    def to_query(self) -> tuple[tuple[str, str], ...]:
        query: list[tuple[str, str]] = [("guild_id", self.guild_id)]
        if self.channel_id is not None:
            query.append(("channel_id", self.channel_id))
        if self.search is not None:
            query.append(("search", self.search))
        if self.role_id is not None:
            query.append(("role_id", str(self.role_id)))
        if self.mobile_verified is not None:
            query.append(("mobile_verified", _flag(self.mobile_verified)))
        if self.active_time is not None:
            query.append(("active_time", _flag(self.active_time)))
        if self.joined_at is not None:
            query.append(("joined_at", _flag(self.joined_at)))
        if self.filter_user_id is not None:
            query.append(("filter_user_id", self.filter_user_id))
        return tuple(query)


@dataclass(frozen=True)
class GuildNicknameSetting:
    """Body of ``/guild/nickname``.

    Omitting ``nickname`` resets it; omitting ``user_id`` targets the bot.
    """

    guild_id: str
    nickname: str | None = None
    user_id: str | None = None

    def to_json(self) -> dict[str, str]:
        body = {"guild_id": self.guild_id}
        if self.nickname:
            body["nickname"] = self.nickname
        if self.user_id:
            body["user_id"] = self.user_id
        return body


class MuteType(IntEnum):
    MIC = 1
    HEADSET = 2


@dataclass(frozen=True)
class GuildMuteSetting:
    """Body of ``/guild-mute/create`` and ``/guild-mute/delete``."""

    guild_id: str
    user_id: str
    type: MuteType

    def to_json(self) -> dict[str, Any]:
        return {
            "guild_id": self.guild_id,
            "user_id": self.user_id,
            "type": int(self.type),
        }
