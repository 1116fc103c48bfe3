"""Type aliases for django-zset.

Compatible with redis-py and valkey-py type systems, defined locally
to avoid a runtime dependency on either library for type annotations.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

# Key types - matches redis.typing.KeyT and valkey.typing.KeyT
type KeyT = bytes | str | memoryview

# Scores are sent as formatted floats; ints are accepted for convenience
type ScoreT = float | int

# Sorted set members travel as strings
type MemberT = str | bytes


class KeyType(StrEnum):
    """Redis key data types, as reported by TYPE."""

    STRING = "string"
    LIST = "list"
    SET = "set"
    HASH = "hash"
    ZSET = "zset"
    STREAM = "stream"
    NONE = "none"


class Aggregate(StrEnum):
    """How ZUNIONSTORE/ZINTERSTORE resolve a member present in several sets."""

    SUM = "SUM"
    MIN = "MIN"
    MAX = "MAX"


@runtime_checkable
class CommandClient(Protocol):
    """Anything that can send a raw command, e.g. ``redis.Redis``."""

    def execute_command(self, *args: Any, **options: Any) -> Any: ...


@runtime_checkable
class AsyncCommandClient(Protocol):
    """Async counterpart of :class:`CommandClient`, e.g. ``redis.asyncio.Redis``."""

    async def execute_command(self, *args: Any, **options: Any) -> Any: ...
