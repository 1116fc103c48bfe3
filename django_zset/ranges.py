from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from django_zset.omit_exception import omit_exception
from django_zset.replies import format_score, to_int, to_members, to_score_map

if TYPE_CHECKING:
    from django_zset.sorted_set import SortedSet
    from django_zset.types import ScoreT


class ScoreRange:
    """Score filter over a sorted set, built up before running a query.

    Bounds only ever narrow: a new lower bound replaces the current one only
    if it is at least as high, a new upper bound only if it is at least as
    low. At an equal value the exclusive form wins over the inclusive one.

    Usage:
        zset.scores().above_or_equal_to(10).below(20).reversed().limit(0, 5).get()
        # ZREVRANGEBYSCORE key (20 10.0 LIMIT 0 5
    """

    def __init__(self, key: SortedSet) -> None:
        self._key = key
        self._executor = key.executor
        self._min = "-inf"
        self._max = "+inf"
        self._fmin: float | None = None
        self._fmax: float | None = None
        self._limit: tuple[int, int] | None = None
        self._reversed = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._key.name!r} [{self._min}, {self._max}]>"

    @property
    def min(self) -> str:
        """Lower bound as sent to the server (``-inf``, ``1.5`` or ``(1.5``)."""
        return self._min

    @property
    def max(self) -> str:
        """Upper bound as sent to the server (``+inf``, ``1.5`` or ``(1.5``)."""
        return self._max

    # =========================================================================
    # Filters
    # =========================================================================

    def above(self, min_score: ScoreT) -> Self:
        """Only members with a score strictly above ``min_score``."""
        value = float(min_score)
        bound = "(" + format_score(value)
        if self._fmin is None or self._fmin <= value:
            self._fmin = value
            self._min = bound
        return self

    def above_or_equal_to(self, min_score: ScoreT) -> Self:
        """Only members with a score of at least ``min_score``."""
        value = float(min_score)
        bound = format_score(value)
        if self._fmin is None or self._fmin < value:
            self._fmin = value
            self._min = bound
        return self

    def below(self, max_score: ScoreT) -> Self:
        """Only members with a score strictly below ``max_score``."""
        value = float(max_score)
        bound = "(" + format_score(value)
        if self._fmax is None or self._fmax >= value:
            self._fmax = value
            self._max = bound
        return self

    def below_or_equal_to(self, max_score: ScoreT) -> Self:
        """Only members with a score of at most ``max_score``."""
        value = float(max_score)
        bound = format_score(value)
        if self._fmax is None or self._fmax > value:
            self._fmax = value
            self._max = bound
        return self

    def reversed(self) -> Self:
        """Toggle highest-first order. Only affects get() and get_with_scores()."""
        self._reversed = not self._reversed
        return self

    def limit(self, offset: int, count: int) -> Self:
        """Skip ``offset`` results and return at most ``count``.

        Only affects get() and get_with_scores(). A negative count returns
        everything after ``offset``.
        """
        self._limit = (int(offset), int(count))
        return self

    # =========================================================================
    # Argument assembly
    # =========================================================================

    def _range_args(self, *, withscores: bool) -> list[Any]:
        if self._reversed:
            args: list[Any] = ["ZREVRANGEBYSCORE", self._max, self._min]
        else:
            args = ["ZRANGEBYSCORE", self._min, self._max]
        if withscores:
            args.append("WITHSCORES")
        if self._limit is not None:
            args.extend(["LIMIT", *self._limit])
        return args

    # =========================================================================
    # Queries
    # =========================================================================

    @omit_exception(return_value=0)
    def count(self) -> int:
        """Number of members within the bounds (ZCOUNT)."""
        return self._key._execute("ZCOUNT", self._min, self._max, decoder=to_int)

    @omit_exception(return_value=0)
    async def acount(self) -> int:
        """Number of members within the bounds, asynchronously."""
        return await self._key._aexecute("ZCOUNT", self._min, self._max, decoder=to_int)

    @omit_exception(return_value=0)
    def remove(self) -> int:
        """Remove all members within the bounds (ZREMRANGEBYSCORE).

        Returns how many were removed.
        """
        return self._key._execute("ZREMRANGEBYSCORE", self._min, self._max, decoder=to_int)

    @omit_exception(return_value=0)
    async def aremove(self) -> int:
        """Remove all members within the bounds, asynchronously."""
        return await self._key._aexecute("ZREMRANGEBYSCORE", self._min, self._max, decoder=to_int)

    @omit_exception(return_value=[])
    def get(self) -> list[str]:
        """Members within the bounds (ZRANGEBYSCORE or ZREVRANGEBYSCORE)."""
        return self._key._execute(*self._range_args(withscores=False), decoder=to_members)

    @omit_exception(return_value=[])
    async def aget(self) -> list[str]:
        """Members within the bounds, asynchronously."""
        return await self._key._aexecute(*self._range_args(withscores=False), decoder=to_members)

    @omit_exception(return_value={})
    def get_with_scores(self) -> dict[str, float]:
        """Members within the bounds with their scores, in query order."""
        return self._key._execute(*self._range_args(withscores=True), decoder=to_score_map)

    @omit_exception(return_value={})
    async def aget_with_scores(self) -> dict[str, float]:
        """Members within the bounds with their scores, asynchronously."""
        return await self._key._aexecute(*self._range_args(withscores=True), decoder=to_score_map)
