"""Suggestion models for hashtag and mention completion lists."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from socialtext.errors import UnsupportedAvatarTypeError


@dataclass(frozen=True, slots=True)
class ResourceAvatar:
    """Avatar bundled with the host, addressed by resource id."""

    resource_id: int


@dataclass(frozen=True, slots=True)
class RemoteAvatar:
    """Avatar fetched by the host from a URL."""

    url: str


Avatar = ResourceAvatar | RemoteAvatar | None


def to_avatar(value: object) -> Avatar:
    """Coerce a raw avatar value (None, int resource id, str URL) into an Avatar."""
    if value is None or isinstance(value, (ResourceAvatar, RemoteAvatar)):
        return value
    # bool is an int subclass but never a resource id.
    if isinstance(value, int) and not isinstance(value, bool):
        return ResourceAvatar(value)
    if isinstance(value, str):
        return RemoteAvatar(value)
    raise UnsupportedAvatarTypeError(value)


@dataclass(frozen=True, slots=True)
class Mention:
    username: str
    display_name: str | None = None
    avatar: Avatar = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "avatar", to_avatar(self.avatar))

    @property
    def key(self) -> str:
        return self.username


@dataclass(frozen=True, slots=True)
class Hashtag:
    name: str
    count: int | None = None

    @property
    def key(self) -> str:
        return self.name


S = TypeVar("S", Mention, Hashtag)


def filter_suggestions(items: Iterable[S], partial: str) -> list[S]:
    """Keep items whose key starts with partial, ignoring case, in input order."""
    prefix = partial.casefold()
    return [item for item in items if item.key.casefold().startswith(prefix)]
