"""Tests for SortedSet commands."""

import math

import pytest

from django_zset import ScoreRange, SortedSetCombo
from tests.fixtures import sent


class TestSortedSetValidity:
    def test_is_valid_for_zset(self, zset, client):
        client.execute_command.return_value = b"zset"
        assert zset.is_valid() is True
        assert sent(client) == ("TYPE", "scores")

    @pytest.mark.parametrize("reply", [b"string", b"set", b"none", b"vectorset", b"ReJSON-RL"])
    def test_is_valid_for_other_types(self, zset, client, reply):
        client.execute_command.return_value = reply
        assert zset.is_valid() is False


class TestSortedSetAdd:
    def test_add_new_member(self, zset, client):
        client.execute_command.return_value = 1
        assert zset.add("alice", 100) is True
        assert sent(client) == ("ZADD", "scores", "100.0", "alice")

    def test_add_existing_member_updates(self, zset, client):
        client.execute_command.return_value = 0
        assert zset.add("alice", 42.5) is False
        assert sent(client) == ("ZADD", "scores", "42.5", "alice")

    def test_add_infinite_score(self, zset, client):
        client.execute_command.return_value = 1
        zset.add("top", math.inf)
        assert sent(client) == ("ZADD", "scores", "+inf", "top")

    def test_add_many(self, zset, client):
        client.execute_command.return_value = 2
        assert zset.add_many({"a": 1, "b": 2.5}) == 2
        assert sent(client) == ("ZADD", "scores", "1.0", "a", "2.5", "b")

    def test_add_many_flags(self, zset, client):
        client.execute_command.return_value = 1
        zset.add_many({"a": 1}, xx=True, gt=True, ch=True)
        assert sent(client) == ("ZADD", "scores", "XX", "GT", "CH", "1.0", "a")

    def test_add_many_nx(self, zset, client):
        client.execute_command.return_value = 0
        zset.add_many({"a": 1}, nx=True)
        assert sent(client) == ("ZADD", "scores", "NX", "1.0", "a")

    @pytest.mark.parametrize(
        "flags",
        [{"nx": True, "xx": True}, {"gt": True, "lt": True}, {"nx": True, "gt": True}],
    )
    def test_add_many_conflicting_flags(self, zset, client, flags):
        with pytest.raises(ValueError, match="ZADD"):
            zset.add_many({"a": 1}, **flags)
        client.execute_command.assert_not_called()

    def test_add_many_empty(self, zset, client):
        with pytest.raises(ValueError, match="at least one member"):
            zset.add_many({})

    def test_increment_by(self, zset, client):
        client.execute_command.return_value = b"150"
        assert zset.increment_by("alice", 50) == 150.0
        assert sent(client) == ("ZINCRBY", "scores", "50.0", "alice")

    def test_increment_by_negative(self, zset, client):
        client.execute_command.return_value = b"-1.5"
        assert zset.increment_by("alice", -1.5) == -1.5
        assert sent(client) == ("ZINCRBY", "scores", "-1.5", "alice")


class TestSortedSetRemove:
    def test_remove_member(self, zset, client):
        client.execute_command.return_value = 1
        assert zset.remove("alice") is True
        assert sent(client) == ("ZREM", "scores", "alice")

    def test_remove_missing_member(self, zset, client):
        client.execute_command.return_value = 0
        assert zset.remove("ghost") is False

    def test_remove_many(self, zset, client):
        client.execute_command.return_value = 2
        assert zset.remove_many("a", "b", "c") == 2
        assert sent(client) == ("ZREM", "scores", "a", "b", "c")

    def test_remove_many_nothing(self, zset, client):
        assert zset.remove_many() == 0
        client.execute_command.assert_not_called()

    def test_remove_indexed_between(self, zset, client):
        client.execute_command.return_value = 3
        assert zset.remove_indexed_between(0, 2) == 3
        assert sent(client) == ("ZREMRANGEBYRANK", "scores", 0, 2)


class TestSortedSetScores:
    def test_size(self, zset, client):
        client.execute_command.return_value = 4
        assert zset.size() == 4
        assert sent(client) == ("ZCARD", "scores")

    def test_score_of(self, zset, client):
        client.execute_command.return_value = b"42.5"
        assert zset.score_of("alice") == 42.5
        assert sent(client) == ("ZSCORE", "scores", "alice")

    def test_score_of_missing(self, zset, client):
        client.execute_command.return_value = None
        assert zset.score_of("ghost") is None

    def test_scores_of(self, zset, client):
        client.execute_command.return_value = [b"1", None, b"3"]
        assert zset.scores_of("a", "ghost", "c") == [1.0, None, 3.0]
        assert sent(client) == ("ZMSCORE", "scores", "a", "ghost", "c")

    def test_scores_of_nothing(self, zset, client):
        assert zset.scores_of() == []
        client.execute_command.assert_not_called()


class TestSortedSetRanks:
    def test_index_of(self, zset, client):
        client.execute_command.return_value = 0
        assert zset.index_of("alice") == 0
        assert sent(client) == ("ZRANK", "scores", "alice")

    def test_index_of_missing(self, zset, client):
        client.execute_command.return_value = None
        assert zset.index_of("ghost") is None

    def test_reverse_index_of(self, zset, client):
        client.execute_command.return_value = 2
        assert zset.reverse_index_of("alice") == 2
        assert sent(client) == ("ZREVRANK", "scores", "alice")


class TestSortedSetIndexRanges:
    def test_indexed_between(self, zset, client):
        client.execute_command.return_value = [b"a", b"b"]
        assert zset.indexed_between(0, -1) == ["a", "b"]
        assert sent(client) == ("ZRANGE", "scores", 0, -1)

    def test_reverse_indexed_between(self, zset, client):
        client.execute_command.return_value = [b"b", b"a"]
        assert zset.reverse_indexed_between(0, 1) == ["b", "a"]
        assert sent(client) == ("ZREVRANGE", "scores", 0, 1)

    def test_indexed_between_with_scores(self, zset, client):
        client.execute_command.return_value = [b"a", b"1", b"b", b"2"]
        assert zset.indexed_between_with_scores(0, -1) == {"a": 1.0, "b": 2.0}
        assert sent(client) == ("ZRANGE", "scores", 0, -1, "WITHSCORES")

    def test_reverse_indexed_between_with_scores_keeps_order(self, zset, client):
        client.execute_command.return_value = [b"b", b"2", b"a", b"1"]
        result = zset.reverse_indexed_between_with_scores(0, -1)
        assert list(result.items()) == [("b", 2.0), ("a", 1.0)]
        assert sent(client) == ("ZREVRANGE", "scores", 0, -1, "WITHSCORES")

    def test_empty_range(self, zset, client):
        client.execute_command.return_value = []
        assert zset.indexed_between(5, 10) == []
        assert zset.indexed_between_with_scores(5, 10) == {}


class TestSortedSetPops:
    def test_pop_lowest(self, zset, client):
        client.execute_command.return_value = [b"a", b"1"]
        assert zset.pop_lowest() == [("a", 1.0)]
        assert sent(client) == ("ZPOPMIN", "scores", 1)

    def test_pop_highest(self, zset, client):
        client.execute_command.return_value = [b"c", b"3", b"b", b"2"]
        assert zset.pop_highest(2) == [("c", 3.0), ("b", 2.0)]
        assert sent(client) == ("ZPOPMAX", "scores", 2)


class TestSortedSetBuilders:
    def test_scores_starts_unbounded(self, zset):
        query = zset.scores()
        assert isinstance(query, ScoreRange)
        assert (query.min, query.max) == ("-inf", "+inf")

    def test_each_call_gets_a_fresh_range(self, zset):
        first = zset.scores().above(5)
        assert zset.scores() is not first
        assert zset.scores().min == "-inf"

    def test_store_union(self, zset):
        combo = zset.store_union()
        assert isinstance(combo, SortedSetCombo)
        assert combo.of_set("a").args()[0] == "ZUNIONSTORE"

    def test_store_intersection(self, zset):
        assert zset.store_intersection().of_set("a").args()[0] == "ZINTERSTORE"
