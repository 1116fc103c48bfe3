"""Reply decoders.

Replies may arrive raw (RESP2 bytes) or already converted by the client
library's response callbacks (floats, pairs, str with ``decode_responses``).
Every decoder here accepts both shapes.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

    from django_zset.types import ScoreT


def _text(value: Any) -> str:
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value).decode()
    return str(value)


def to_bool(value: Any) -> bool:
    """Integer reply 1/0 to bool."""
    return bool(int(value))


def to_int(value: Any) -> int:
    """Integer reply to int. Nil counts as 0."""
    if value is None:
        return 0
    return int(value)


def to_optional_int(value: Any) -> int | None:
    """Integer or nil reply (e.g. ZRANK of a missing member)."""
    if value is None:
        return None
    return int(value)


def to_float(value: Any) -> float:
    """Score reply to float. ``float()`` already understands ``b"inf"``."""
    if isinstance(value, memoryview):
        value = bytes(value)
    return float(value)


def to_optional_float(value: Any) -> float | None:
    """Score or nil reply to ``float | None``."""
    if value is None:
        return None
    return to_float(value)


def to_str(value: Any) -> str:
    """Bulk or simple string reply to str."""
    return _text(value)


def to_members(value: Any) -> list[str]:
    """Array of bulk strings to a list of members."""
    if not value:
        return []
    return [_text(member) for member in value]


def _iter_pairs(value: Any) -> Iterator[tuple[str, float]]:
    if not value:
        return
    # RESP3 and client-decoded replies come as [member, score] pairs
    if isinstance(value[0], list | tuple):
        for member, score in value:
            yield _text(member), to_float(score)
        return
    if len(value) % 2:
        msg = f"Expected member/score pairs, got {len(value)} items"
        raise ValueError(msg)
    for i in range(0, len(value), 2):
        yield _text(value[i]), to_float(value[i + 1])


def to_score_map(value: Any) -> dict[str, float]:
    """WITHSCORES reply to an ordered ``{member: score}`` dict.

    Insertion order is the server's order, so a reversed range stays reversed.
    """
    return dict(_iter_pairs(value))


def to_score_pairs(value: Any) -> list[tuple[str, float]]:
    """WITHSCORES-shaped reply (ZPOPMIN/ZPOPMAX) to a list of pairs."""
    return list(_iter_pairs(value))


def to_optional_floats(value: Any) -> list[float | None]:
    """ZMSCORE reply to a list of scores, None for missing members."""
    if not value:
        return []
    return [to_optional_float(item) for item in value]


def format_score(value: ScoreT) -> str:
    """Format a score as a command argument.

    Infinities use the server's ``+inf``/``-inf`` spelling. Finite values use
    ``repr`` so no precision is lost.
    """
    score = float(value)
    if math.isnan(score):
        msg = "Score must not be NaN"
        raise ValueError(msg)
    if math.isinf(score):
        return "+inf" if score > 0 else "-inf"
    return repr(score)
