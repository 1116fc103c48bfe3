"""Base class binding a key name to a command executor."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Self

from django_zset.omit_exception import omit_exception
from django_zset.replies import to_bool, to_str
from django_zset.types import KeyType

if TYPE_CHECKING:
    from django_zset.executor import CommandExecutor


def _to_key_type(value: Any) -> KeyType | str:
    # Module types (ReJSON-RL, TSDB-TYPE, ...) and newer builtins fall through as str
    name = to_str(value)
    try:
        return KeyType(name)
    except ValueError:
        return name


class Key:
    """A named key on a Redis-compatible server.

    Subclasses add the commands for one data structure. All commands are
    issued through the bound executor; the key itself holds no data.
    """

    def __init__(self, executor: CommandExecutor, name: str) -> None:
        self._executor = executor
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return type(self) is type(other) and self._name == other._name

    def __hash__(self) -> int:
        return hash((type(self), self._name))

    def args(self, command: str, *args: Any) -> list[Any]:
        """Build a command's argument list with this key in first position."""
        return [command, self._name, *args]

    def _execute(self, command: str, *args: Any, decoder: Any = None) -> Any:
        return self._executor.execute(*self.args(command, *args), decoder=decoder)

    async def _aexecute(self, command: str, *args: Any, decoder: Any = None) -> Any:
        return await self._executor.aexecute(*self.args(command, *args), decoder=decoder)

    def using(self, executor: CommandExecutor) -> Self:
        """Return a copy of this key bound to another executor."""
        clone = copy.copy(self)
        clone._executor = executor
        return clone

    # =========================================================================
    # Generic key commands
    # =========================================================================

    @omit_exception
    def type(self) -> KeyType | str:
        """Get the data type stored at this key.

        Types outside KeyType (module types such as ``ReJSON-RL``) are
        returned as plain strings.
        """
        return self._execute("TYPE", decoder=_to_key_type)

    @omit_exception
    async def atype(self) -> KeyType | str:
        """Get the data type stored at this key asynchronously."""
        return await self._aexecute("TYPE", decoder=_to_key_type)

    @omit_exception(return_value=False)
    def exists(self) -> bool:
        """Check whether this key exists."""
        return self._execute("EXISTS", decoder=to_bool)

    @omit_exception(return_value=False)
    async def aexists(self) -> bool:
        """Check whether this key exists asynchronously."""
        return await self._aexecute("EXISTS", decoder=to_bool)

    @omit_exception(return_value=False)
    def delete(self) -> bool:
        """Delete this key. Returns True if it existed."""
        return self._execute("DEL", decoder=to_bool)

    @omit_exception(return_value=False)
    async def adelete(self) -> bool:
        """Delete this key asynchronously."""
        return await self._aexecute("DEL", decoder=to_bool)

    @omit_exception(return_value=False)
    def expire(self, seconds: int) -> bool:
        """Set a timeout in seconds. Returns False if the key doesn't exist."""
        return self._execute("EXPIRE", int(seconds), decoder=to_bool)

    @omit_exception(return_value=False)
    async def aexpire(self, seconds: int) -> bool:
        """Set a timeout in seconds asynchronously."""
        return await self._aexecute("EXPIRE", int(seconds), decoder=to_bool)
