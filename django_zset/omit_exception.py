from __future__ import annotations

import functools
import inspect
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

from django_zset.exceptions import ConnectionInterruptedError


def omit_exception(
    method: Callable | None = None,
    return_value: Any | None = None,
) -> Callable:
    """Decorator that intercepts connection errors and ignores them if configured.

    When applied to a sorted set operation (sync or async), this decorator
    catches ``ConnectionInterruptedError`` raised by the executor and either
    ignores it (returning return_value) or re-raises, depending on the bound
    executor's ``ignore_exceptions`` setting. Server-side errors such as
    WRONGTYPE are never ignored.

    Mutable fallbacks (``[]``, ``{}``) are copied on every use.

    Args:
        method: The method to wrap (when used without parentheses)
        return_value: Value to return when exception is ignored (default: None)

    Usage:
        @omit_exception
        def score_of(self, member): ...

        @omit_exception(return_value=[])
        async def aget(self): ...
    """
    if method is None:
        return functools.partial(omit_exception, return_value=return_value)

    def _handle_exception(self: Any, exc: Exception) -> Any:
        executor = self._executor
        if executor.ignore_exceptions:
            if executor.log_ignored_exceptions:
                executor.logger.exception("Exception ignored")
            if isinstance(return_value, list | dict):
                return type(return_value)()
            return return_value
        raise exc

    if inspect.iscoroutinefunction(method):

        @functools.wraps(method)
        async def _async_decorator(self: Any, *args: Any, **kwargs: Any) -> Any:
            try:
                return await method(self, *args, **kwargs)
            except ConnectionInterruptedError as e:
                return _handle_exception(self, e)

        return _async_decorator

    @functools.wraps(method)
    def _sync_decorator(self: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return method(self, *args, **kwargs)
        except ConnectionInterruptedError as e:
            return _handle_exception(self, e)

    return _sync_decorator
