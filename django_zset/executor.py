"""Command executor for Redis-compatible clients.

The executor is the only place a command leaves the process. It picks a
client (read or write, sync or async), sends the raw command, translates
library errors into django-zset exceptions and decodes the reply.

Architecture:
- CommandExecutor: wraps ``get_client`` / ``get_async_client`` callables that
  follow django-cachex's ``(key=None, *, write=False)`` signature
- from_client(): builds an executor around concrete client instances
- from_cache(): builds an executor around a Django cache alias
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django_zset.compat import get_cache_options, get_client_getters
from django_zset.exceptions import (
    CommandError,
    ConnectionInterruptedError,
    NotSupportedError,
    _connection_errors,
    _response_errors,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from django_zset.types import AsyncCommandClient, CommandClient, KeyT

logger = logging.getLogger(__name__)

# Commands that modify data and must go to the primary
WRITE_COMMANDS = frozenset(
    {
        "DEL",
        "EXPIRE",
        "ZADD",
        "ZINCRBY",
        "ZINTERSTORE",
        "ZPOPMAX",
        "ZPOPMIN",
        "ZREM",
        "ZREMRANGEBYRANK",
        "ZREMRANGEBYSCORE",
        "ZUNIONSTORE",
    }
)


def is_write_command(command: str) -> bool:
    """Whether a command modifies data."""
    return command.upper() in WRITE_COMMANDS


class CommandExecutor:
    """Sends commands through sync and async clients and decodes replies.

    Attributes:
        ignore_exceptions: Swallow connection errors in decorated operations
        log_ignored_exceptions: Log swallowed connection errors
    """

    def __init__(
        self,
        get_client: Callable[..., CommandClient],
        get_async_client: Callable[..., AsyncCommandClient] | None = None,
        *,
        ignore_exceptions: bool = False,
        log_ignored_exceptions: bool = False,
    ) -> None:
        self._get_client = get_client
        self._get_async_client = get_async_client
        self.ignore_exceptions = ignore_exceptions
        self.log_ignored_exceptions = log_ignored_exceptions
        self.logger = logger

    def __repr__(self) -> str:
        return f"<{type(self).__name__} async={self.supports_async}>"

    @classmethod
    def from_client(
        cls,
        client: CommandClient,
        async_client: AsyncCommandClient | None = None,
        **options: Any,
    ) -> CommandExecutor:
        """Build an executor around client instances (e.g. ``redis.Redis``)."""

        def get_client(key: KeyT | None = None, *, write: bool = False) -> CommandClient:
            return client

        def get_async_client(key: KeyT | None = None, *, write: bool = False) -> AsyncCommandClient:
            return async_client

        return cls(get_client, get_async_client if async_client is not None else None, **options)

    @classmethod
    def from_cache(cls, cache: Any, **options: Any) -> CommandExecutor:
        """Build an executor around a Django cache backend.

        ``ignore_exceptions`` and ``log_ignored_exceptions`` default to the
        values in the cache's OPTIONS; keyword arguments take precedence.
        """
        get_client, get_async_client = get_client_getters(cache)
        cache_options = get_cache_options(cache)
        options.setdefault("ignore_exceptions", cache_options.get("ignore_exceptions", False))
        options.setdefault("log_ignored_exceptions", cache_options.get("log_ignored_exceptions", False))
        return cls(get_client, get_async_client, **options)

    @property
    def supports_async(self) -> bool:
        return self._get_async_client is not None

    def get_client(self, key: KeyT | None = None, *, write: bool = False) -> CommandClient:
        """Get a sync client for the given key."""
        return self._get_client(key, write=write)

    def get_async_client(self, key: KeyT | None = None, *, write: bool = False) -> AsyncCommandClient:
        """Get an async client for the given key.

        Raises:
            NotSupportedError: If the executor has no async client.
        """
        if self._get_async_client is None:
            raise NotSupportedError("async commands", backend=type(self).__name__)
        return self._get_async_client(key, write=write)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def execute(self, command: str, *args: Any, decoder: Callable[[Any], Any] | None = None) -> Any:
        """Send a command and decode its reply.

        The first argument is treated as the key for client selection.

        Raises:
            ConnectionInterruptedError: On connection or timeout errors.
            CommandError: When the server rejects the command.
        """
        key = args[0] if args else None
        client = self.get_client(key, write=is_write_command(command))

        try:
            reply = client.execute_command(command, *args)
        except _connection_errors as e:
            raise ConnectionInterruptedError(connection=client) from e
        except _response_errors as e:
            raise CommandError(command, str(e)) from e

        if decoder is None:
            return reply
        return decoder(reply)

    async def aexecute(self, command: str, *args: Any, decoder: Callable[[Any], Any] | None = None) -> Any:
        """Send a command through the async client and decode its reply."""
        key = args[0] if args else None
        client = self.get_async_client(key, write=is_write_command(command))

        try:
            reply = await client.execute_command(command, *args)
        except _connection_errors as e:
            raise ConnectionInterruptedError(connection=client) from e
        except _response_errors as e:
            raise CommandError(command, str(e)) from e

        if decoder is None:
            return reply
        return decoder(reply)
