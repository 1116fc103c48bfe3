from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from django_zset.exceptions import EmptyCombinationError
from django_zset.key import Key
from django_zset.omit_exception import omit_exception
from django_zset.replies import format_score, to_int
from django_zset.types import Aggregate

if TYPE_CHECKING:
    from django_zset.sorted_set import SortedSet
    from django_zset.types import ScoreT


class SortedSetCombo:
    """Union or intersection of sorted sets, stored into a destination key.

    Sources keep the order they were added in. Adding a source twice keeps
    its first position and the latest weight.

    Usage:
        total.store_union().of_set(week1).of_weighted_set(week2, 2).use_combined_scores()
        # ZUNIONSTORE total 2 week1 week2 WEIGHTS 1.0 2.0
    """

    def __init__(self, destination: SortedSet, command: str) -> None:
        self._destination = destination
        self._executor = destination.executor
        self._command = command
        self._sets: dict[str, float] = {}
        self._weighted = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._command} {self._destination.name!r} sources={list(self._sets)}>"

    @property
    def sources(self) -> list[str]:
        """Source key names in the order they will be sent."""
        return list(self._sets)

    def of_set(self, other: SortedSet | str) -> Self:
        """Add a source set with the default weight of 1."""
        self._sets[self._name_of(other)] = 1.0
        return self

    def of_weighted_set(self, other: SortedSet | str, weight: ScoreT) -> Self:
        """Add a source set whose scores are multiplied by ``weight``."""
        self._weighted = True
        self._sets[self._name_of(other)] = float(weight)
        return self

    @staticmethod
    def _name_of(other: Key | str) -> str:
        if isinstance(other, Key):
            return other.name
        return other

    def args(self, aggregate: Aggregate | str = Aggregate.SUM) -> list[Any]:
        """Build the full store command for the given aggregate mode.

        Raises:
            EmptyCombinationError: If no source set was added.
        """
        aggregate = Aggregate(str(aggregate).upper())
        if not self._sets:
            raise EmptyCombinationError(self._destination.name)

        args: list[Any] = [len(self._sets), *self._sets]
        if self._weighted:
            args.append("WEIGHTS")
            args.extend(format_score(weight) for weight in self._sets.values())
        # SUM is the server default
        if aggregate != Aggregate.SUM:
            args.extend(["AGGREGATE", aggregate.value])
        return self._destination.args(self._command, *args)

    # =========================================================================
    # Store
    # =========================================================================

    @omit_exception(return_value=0)
    def store(self, aggregate: Aggregate | str = Aggregate.SUM) -> int:
        """Store the combination. Returns the size of the resulting set."""
        return self._executor.execute(*self.args(aggregate), decoder=to_int)

    @omit_exception(return_value=0)
    async def astore(self, aggregate: Aggregate | str = Aggregate.SUM) -> int:
        """Store the combination asynchronously."""
        return await self._executor.aexecute(*self.args(aggregate), decoder=to_int)

    def use_lower_score(self) -> int:
        """Store, keeping the lowest score of a member found in several sets."""
        return self.store(Aggregate.MIN)

    async def ause_lower_score(self) -> int:
        """Store keeping the lowest score, asynchronously."""
        return await self.astore(Aggregate.MIN)

    def use_higher_score(self) -> int:
        """Store, keeping the highest score of a member found in several sets."""
        return self.store(Aggregate.MAX)

    async def ause_higher_score(self) -> int:
        """Store keeping the highest score, asynchronously."""
        return await self.astore(Aggregate.MAX)

    def use_combined_scores(self) -> int:
        """Store, adding up the scores of a member found in several sets."""
        return self.store(Aggregate.SUM)

    async def ause_combined_scores(self) -> int:
        """Store adding up the scores, asynchronously."""
        return await self.astore(Aggregate.SUM)
