# Derived from django-redis (https://github.com/jazzband/django-redis)
# Copyright (c) 2011-2016 Andrey Antukh <niwi@niwi.nz>
# Copyright (c) 2011 Sean Bleier
# Licensed under BSD-3-Clause
#
# django-redis was used as inspiration for this project.

"""Exceptions for django-zset.

This module defines exceptions that may be raised while talking to a
sorted set. Users can catch these to handle specific error conditions.
"""

import socket
from typing import Any

# Build exception tuples from available libraries (redis-py / valkey-py).
# These are used by the executor and by omit_exception.
_connection_error_list: list[type[Exception]] = [socket.timeout]
_response_error_list: list[type[Exception]] = []

try:
    from redis.exceptions import ConnectionError as RedisConnectionError
    from redis.exceptions import ResponseError as RedisResponseError
    from redis.exceptions import TimeoutError as RedisTimeoutError

    _connection_error_list.extend([RedisConnectionError, RedisTimeoutError])
    _response_error_list.append(RedisResponseError)
except ImportError:
    pass

try:
    from valkey.exceptions import ConnectionError as ValkeyConnectionError
    from valkey.exceptions import ResponseError as ValkeyResponseError
    from valkey.exceptions import TimeoutError as ValkeyTimeoutError

    _connection_error_list.extend([ValkeyConnectionError, ValkeyTimeoutError])
    _response_error_list.append(ValkeyResponseError)
except ImportError:
    pass

_connection_errors = tuple(_connection_error_list)
_response_errors = tuple(_response_error_list)


class ConnectionInterruptedError(Exception):
    """Raised when the connection to the server fails mid-command.

    The underlying library exception is available as ``__cause__``.

    Attributes:
        connection: The client the command was sent through.
    """

    def __init__(self, connection: Any) -> None:
        self.connection = connection
        super().__init__(connection)

    def __str__(self) -> str:
        if self.__cause__ is None:
            return "Connection interrupted"
        return f"{type(self.__cause__).__name__}: {self.__cause__}"


class CommandError(Exception):
    """Raised when the server rejects a command.

    The most common cause is WRONGTYPE: the key exists but holds a value
    that isn't a sorted set.

    Attributes:
        command: The command name that was rejected.
        message: The server's error message.

    Example:
        Handling a key of the wrong type::

            from django_zset.exceptions import CommandError

            try:
                zset.add("alice", 10)
            except CommandError as e:
                logger.error("%s failed: %s", e.command, e.message)
    """

    def __init__(self, command: str, message: str) -> None:
        self.command = command
        self.message = message
        super().__init__(f"{command}: {message}")


class NotSupportedError(Exception):
    """Raised when an operation is not supported by the configured executor.

    This is raised when a Django cache alias exposes no client access
    (e.g. the locmem backend), or when an async method is called on an
    executor that was built without an async client.

    Attributes:
        operation: The operation that is not supported.
        backend: Optional name of the backend that doesn't support it.
    """

    def __init__(self, operation: str, backend: str | None = None) -> None:
        self.operation = operation
        self.backend = backend
        msg = f"Operation '{operation}' is not supported"
        if backend:
            msg += f" by {backend}"
        super().__init__(msg)


class EmptyCombinationError(ValueError):
    """Raised when a union or intersection is stored without any source sets."""

    def __init__(self, destination: str) -> None:
        self.destination = destination
        super().__init__(f"No source sets given for '{destination}'")
