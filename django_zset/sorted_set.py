"""Sorted set (ZSET) accessor.

Each method maps to a single command on the bound key. Async variants carry
an ``a`` prefix and send the same arguments through the async client.

Usage:
    zset = SortedSet(CommandExecutor.from_client(redis.Redis()), "leaderboard")
    zset.add("alice", 120)
    zset.add("bob", 95)
    zset.reverse_indexed_between_with_scores(0, 9)
    # {"alice": 120.0, "bob": 95.0}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from django_zset.combos import SortedSetCombo
from django_zset.key import Key
from django_zset.omit_exception import omit_exception
from django_zset.ranges import ScoreRange
from django_zset.replies import (
    format_score,
    to_bool,
    to_float,
    to_int,
    to_members,
    to_optional_float,
    to_optional_floats,
    to_optional_int,
    to_score_map,
    to_score_pairs,
)
from django_zset.types import KeyType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from django_zset.types import MemberT, ScoreT


class SortedSet(Key):
    """Accessor for a sorted set stored at one key.

    Indices are 0-based and inclusive; negative indices count from the end
    (-1 is the member with the highest score).
    """

    # =========================================================================
    # Argument helpers
    # =========================================================================

    def _zadd_args(
        self,
        mapping: Mapping[MemberT, ScoreT],
        *,
        nx: bool,
        xx: bool,
        gt: bool,
        lt: bool,
        ch: bool,
    ) -> list[Any]:
        if not mapping:
            msg = "ZADD requires at least one member"
            raise ValueError(msg)
        if nx and xx:
            msg = "ZADD allows either 'nx' or 'xx', not both"
            raise ValueError(msg)
        if gt and lt:
            msg = "ZADD allows either 'gt' or 'lt', not both"
            raise ValueError(msg)
        if nx and (gt or lt):
            msg = "ZADD allows only one of 'nx', 'lt', or 'gt'"
            raise ValueError(msg)

        args: list[Any] = []
        if nx:
            args.append("NX")
        if xx:
            args.append("XX")
        if gt:
            args.append("GT")
        if lt:
            args.append("LT")
        if ch:
            args.append("CH")
        for member, score in mapping.items():
            args.extend([format_score(score), member])
        return args

    # =========================================================================
    # Type check
    # =========================================================================

    @omit_exception(return_value=False)
    def is_valid(self) -> bool:
        """Whether the key can be used with sorted set commands.

        Only an existing zset counts; a missing key reports ``none``.
        """
        return self.type() == KeyType.ZSET

    @omit_exception(return_value=False)
    async def ais_valid(self) -> bool:
        """Whether the key holds a sorted set, asynchronously."""
        return await self.atype() == KeyType.ZSET

    # =========================================================================
    # Membership and scores
    # =========================================================================

    @omit_exception(return_value=False)
    def add(self, member: MemberT, score: ScoreT) -> bool:
        """Add a member or update its score.

        Returns True when the member was added, False when it was updated.
        """
        return self._execute("ZADD", format_score(score), member, decoder=to_bool)

    @omit_exception(return_value=False)
    async def aadd(self, member: MemberT, score: ScoreT) -> bool:
        """Add a member or update its score asynchronously."""
        return await self._aexecute("ZADD", format_score(score), member, decoder=to_bool)

    @omit_exception(return_value=0)
    def add_many(
        self,
        mapping: Mapping[MemberT, ScoreT],
        *,
        nx: bool = False,
        xx: bool = False,
        gt: bool = False,
        lt: bool = False,
        ch: bool = False,
    ) -> int:
        """Add several members at once.

        Args:
            mapping: Member to score
            nx: Only add new members, never update
            xx: Only update existing members, never add
            gt: Only update when the new score is greater
            lt: Only update when the new score is lower
            ch: Count changed members instead of added ones
        """
        args = self._zadd_args(mapping, nx=nx, xx=xx, gt=gt, lt=lt, ch=ch)
        return self._execute("ZADD", *args, decoder=to_int)

    @omit_exception(return_value=0)
    async def aadd_many(
        self,
        mapping: Mapping[MemberT, ScoreT],
        *,
        nx: bool = False,
        xx: bool = False,
        gt: bool = False,
        lt: bool = False,
        ch: bool = False,
    ) -> int:
        """Add several members at once asynchronously."""
        args = self._zadd_args(mapping, nx=nx, xx=xx, gt=gt, lt=lt, ch=ch)
        return await self._aexecute("ZADD", *args, decoder=to_int)

    @omit_exception
    def increment_by(self, member: MemberT, amount: ScoreT) -> float:
        """Adjust a member's score, adding it if missing. Returns the new score."""
        return self._execute("ZINCRBY", format_score(amount), member, decoder=to_float)

    @omit_exception
    async def aincrement_by(self, member: MemberT, amount: ScoreT) -> float:
        """Adjust a member's score asynchronously."""
        return await self._aexecute("ZINCRBY", format_score(amount), member, decoder=to_float)

    @omit_exception(return_value=False)
    def remove(self, member: MemberT) -> bool:
        """Remove a member. Returns whether it was part of the set."""
        return self._execute("ZREM", member, decoder=to_bool)

    @omit_exception(return_value=False)
    async def aremove(self, member: MemberT) -> bool:
        """Remove a member asynchronously."""
        return await self._aexecute("ZREM", member, decoder=to_bool)

    @omit_exception(return_value=0)
    def remove_many(self, *members: MemberT) -> int:
        """Remove several members. Returns how many were part of the set."""
        if not members:
            return 0
        return self._execute("ZREM", *members, decoder=to_int)

    @omit_exception(return_value=0)
    async def aremove_many(self, *members: MemberT) -> int:
        """Remove several members asynchronously."""
        if not members:
            return 0
        return await self._aexecute("ZREM", *members, decoder=to_int)

    @omit_exception(return_value=0)
    def size(self) -> int:
        """Number of members in the set."""
        return self._execute("ZCARD", decoder=to_int)

    @omit_exception(return_value=0)
    async def asize(self) -> int:
        """Number of members in the set, asynchronously."""
        return await self._aexecute("ZCARD", decoder=to_int)

    @omit_exception
    def score_of(self, member: MemberT) -> float | None:
        """Score of a member, or None if it isn't in the set."""
        return self._execute("ZSCORE", member, decoder=to_optional_float)

    @omit_exception
    async def ascore_of(self, member: MemberT) -> float | None:
        """Score of a member asynchronously."""
        return await self._aexecute("ZSCORE", member, decoder=to_optional_float)

    @omit_exception(return_value=[])
    def scores_of(self, *members: MemberT) -> list[float | None]:
        """Scores of several members, None for each one that is missing."""
        if not members:
            return []
        return self._execute("ZMSCORE", *members, decoder=to_optional_floats)

    @omit_exception(return_value=[])
    async def ascores_of(self, *members: MemberT) -> list[float | None]:
        """Scores of several members asynchronously."""
        if not members:
            return []
        return await self._aexecute("ZMSCORE", *members, decoder=to_optional_floats)

    # =========================================================================
    # Ranks
    # =========================================================================

    @omit_exception
    def index_of(self, member: MemberT) -> int | None:
        """Rank of a member, lowest score first (the lowest member is 0).

        Returns None if the member isn't in the set.
        """
        return self._execute("ZRANK", member, decoder=to_optional_int)

    @omit_exception
    async def aindex_of(self, member: MemberT) -> int | None:
        """Rank of a member asynchronously."""
        return await self._aexecute("ZRANK", member, decoder=to_optional_int)

    @omit_exception
    def reverse_index_of(self, member: MemberT) -> int | None:
        """Rank of a member, highest score first (the highest member is 0)."""
        return self._execute("ZREVRANK", member, decoder=to_optional_int)

    @omit_exception
    async def areverse_index_of(self, member: MemberT) -> int | None:
        """Reverse rank of a member asynchronously."""
        return await self._aexecute("ZREVRANK", member, decoder=to_optional_int)

    # =========================================================================
    # Index ranges
    # =========================================================================

    @omit_exception(return_value=[])
    def indexed_between(self, start: int, stop: int) -> list[str]:
        """Members between two indices, lowest score first."""
        return self._execute("ZRANGE", int(start), int(stop), decoder=to_members)

    @omit_exception(return_value=[])
    async def aindexed_between(self, start: int, stop: int) -> list[str]:
        """Members between two indices asynchronously."""
        return await self._aexecute("ZRANGE", int(start), int(stop), decoder=to_members)

    @omit_exception(return_value=[])
    def reverse_indexed_between(self, start: int, stop: int) -> list[str]:
        """Members between two reverse indices, highest score first."""
        return self._execute("ZREVRANGE", int(start), int(stop), decoder=to_members)

    @omit_exception(return_value=[])
    async def areverse_indexed_between(self, start: int, stop: int) -> list[str]:
        """Members between two reverse indices asynchronously."""
        return await self._aexecute("ZREVRANGE", int(start), int(stop), decoder=to_members)

    @omit_exception(return_value={})
    def indexed_between_with_scores(self, start: int, stop: int) -> dict[str, float]:
        """Members and scores between two indices, in rank order."""
        return self._execute("ZRANGE", int(start), int(stop), "WITHSCORES", decoder=to_score_map)

    @omit_exception(return_value={})
    async def aindexed_between_with_scores(self, start: int, stop: int) -> dict[str, float]:
        """Members and scores between two indices asynchronously."""
        return await self._aexecute("ZRANGE", int(start), int(stop), "WITHSCORES", decoder=to_score_map)

    @omit_exception(return_value={})
    def reverse_indexed_between_with_scores(self, start: int, stop: int) -> dict[str, float]:
        """Members and scores between two reverse indices, in reverse rank order."""
        return self._execute("ZREVRANGE", int(start), int(stop), "WITHSCORES", decoder=to_score_map)

    @omit_exception(return_value={})
    async def areverse_indexed_between_with_scores(self, start: int, stop: int) -> dict[str, float]:
        """Members and scores between two reverse indices asynchronously."""
        return await self._aexecute("ZREVRANGE", int(start), int(stop), "WITHSCORES", decoder=to_score_map)

    @omit_exception(return_value=0)
    def remove_indexed_between(self, start: int, stop: int) -> int:
        """Remove members between two indices. Returns how many were removed."""
        return self._execute("ZREMRANGEBYRANK", int(start), int(stop), decoder=to_int)

    @omit_exception(return_value=0)
    async def aremove_indexed_between(self, start: int, stop: int) -> int:
        """Remove members between two indices asynchronously."""
        return await self._aexecute("ZREMRANGEBYRANK", int(start), int(stop), decoder=to_int)

    # =========================================================================
    # Pops
    # =========================================================================

    @omit_exception(return_value=[])
    def pop_lowest(self, count: int = 1) -> list[tuple[str, float]]:
        """Remove and return up to ``count`` members with the lowest scores."""
        return self._execute("ZPOPMIN", int(count), decoder=to_score_pairs)

    @omit_exception(return_value=[])
    async def apop_lowest(self, count: int = 1) -> list[tuple[str, float]]:
        """Remove and return the lowest members asynchronously."""
        return await self._aexecute("ZPOPMIN", int(count), decoder=to_score_pairs)

    @omit_exception(return_value=[])
    def pop_highest(self, count: int = 1) -> list[tuple[str, float]]:
        """Remove and return up to ``count`` members with the highest scores."""
        return self._execute("ZPOPMAX", int(count), decoder=to_score_pairs)

    @omit_exception(return_value=[])
    async def apop_highest(self, count: int = 1) -> list[tuple[str, float]]:
        """Remove and return the highest members asynchronously."""
        return await self._aexecute("ZPOPMAX", int(count), decoder=to_score_pairs)

    # =========================================================================
    # Builders
    # =========================================================================

    def scores(self) -> ScoreRange:
        """Start a score range query over the whole set (-inf to +inf)."""
        return ScoreRange(self)

    def store_union(self) -> SortedSetCombo:
        """Start a union of other sets, stored into this key (ZUNIONSTORE)."""
        return SortedSetCombo(self, "ZUNIONSTORE")

    def store_intersection(self) -> SortedSetCombo:
        """Start an intersection of other sets, stored into this key (ZINTERSTORE)."""
        return SortedSetCombo(self, "ZINTERSTORE")
