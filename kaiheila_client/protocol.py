"""Response envelope and pagination shapes shared by all Kaiheila endpoints.

Every REST response is wrapped as ``{"code": int, "message": str, "data": T}``.
``code == 0`` means success; ``data`` must not be trusted otherwise.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _require_int(value: Any, name: str) -> int:
    # bool is an int subclass but never a valid wire integer
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Envelope(Generic[T]):
    """Wrapped API response."""

    code: int
    message: str
    data: T

    @property
    def ok(self) -> bool:
        return self.code == 0

    @classmethod
    def from_json(cls, raw: bytes | str) -> Envelope[Any]:
        """Decode raw bytes into an envelope with an unconverted ``data`` value.

        Raises:
            ValueError: Body is not JSON (``json.JSONDecodeError``).
            TypeError: Body is JSON but not envelope-shaped.
        """
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise TypeError("Envelope must be a JSON object")
        if "data" not in payload:
            raise TypeError("Envelope has no data field")
        if "message" not in payload:
            raise TypeError("Envelope has no message field")
        message = payload["message"]
        if not isinstance(message, str):
            raise TypeError(f"message must be a string, got {message!r}")
        return cls(
            code=_require_int(payload.get("code"), "code"),
            message=message,
            data=payload["data"],
        )


@dataclass(frozen=True)
class PageMeta:
    """Server pagination cursor. ``page_total`` is authoritative."""

    page: int
    page_total: int
    page_size: int
    total: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PageMeta:
        return cls(
            page=_require_int(data["page"], "page"),
            page_total=_require_int(data["page_total"], "page_total"),
            page_size=_require_int(data["page_size"], "page_size"),
            total=_require_int(data["total"], "total"),
        )


@dataclass(frozen=True)
class PagedList(Generic[T]):
    """One page of a list endpoint.

    ``extra`` keeps endpoint-specific top-level fields (for example the
    ``user_count`` of ``/guild/user-list``).
    """

    items: tuple[T, ...]
    meta: PageMeta
    sort: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], item_parser: Callable[[Any], T]
    ) -> PagedList[T]:
        items = data["items"]
        if not isinstance(items, list):
            raise TypeError(f"items must be a list, got {type(items).__name__}")
        return cls(
            items=tuple(item_parser(item) for item in items),
            meta=PageMeta.from_dict(data["meta"]),
            sort=data.get("sort"),
            extra={
                key: value
                for key, value in data.items()
                if key not in {"items", "meta", "sort"}
            },
        )
