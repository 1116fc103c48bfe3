"""Utilities for resolving clients from Django cache backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from django_zset.exceptions import NotSupportedError

if TYPE_CHECKING:
    from collections.abc import Callable


def get_client_getters(cache: Any) -> tuple[Callable[..., Any], Callable[..., Any] | None]:
    """Return ``(get_client, get_async_client)`` for a Django cache instance.

    Supports django-cachex backends, which expose ``get_client`` on the cache
    and ``get_async_client`` on the inner client, and Django's builtin
    ``RedisCache``, which only exposes ``get_client`` on the inner client.

    Raises:
        NotSupportedError: If the backend gives no access to a raw client.
    """
    inner = getattr(cache, "_cache", None)

    if callable(getattr(cache, "get_client", None)):
        get_client = cache.get_client
    elif callable(getattr(inner, "get_client", None)):
        get_client = inner.get_client
    else:
        raise NotSupportedError("sorted sets", backend=type(cache).__name__)

    get_async_client = getattr(inner, "get_async_client", None)
    if not callable(get_async_client):
        get_async_client = None
    return get_client, get_async_client


def get_cache_options(cache: Any) -> dict[str, Any]:
    """Return the OPTIONS dict a cache was configured with."""
    options = getattr(cache, "_options", None)
    if isinstance(options, dict):
        return options
    return {}
