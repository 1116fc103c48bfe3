from django_zset.combos import SortedSetCombo
from django_zset.executor import CommandExecutor
from django_zset.ranges import ScoreRange
from django_zset.sorted_set import SortedSet
from django_zset.types import Aggregate, KeyType

VERSION = (1, 0, 0)
__version__ = ".".join(map(str, VERSION))


def get_sorted_set(key, alias="default", version=None):
    """Helper used for obtaining a sorted set bound to a Django cache alias.

    The key goes through the cache's key function, so KEY_PREFIX and VERSION
    apply exactly as they do for regular cache keys.
    """
    from django.core.cache import caches

    cache = caches[alias]
    name = cache.make_and_validate_key(key, version=version)
    return SortedSet(CommandExecutor.from_cache(cache), name)


__all__ = [
    "VERSION",
    "Aggregate",
    "CommandExecutor",
    "KeyType",
    "ScoreRange",
    "SortedSet",
    "SortedSetCombo",
    "__version__",
    "get_sorted_set",
]
