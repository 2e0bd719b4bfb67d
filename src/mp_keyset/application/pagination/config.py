"""Application pagination – traversal options and PaginationConfig."""
from __future__ import annotations

import dataclasses
import re
from enum import Enum
from typing import Any

from mp_keyset.kernel.errors import LimitParameterError, QueryError

_DIGITS = re.compile(r"[0-9]+")


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    def reversed(self) -> "Direction":
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD


class Inclusivity(str, Enum):
    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"

    def reversed(self) -> "Inclusivity":
        return Inclusivity.INCLUSIVE if self is Inclusivity.EXCLUSIVE else Inclusivity.EXCLUSIVE


class Seekability(str, Enum):
    UNSEEKABLE = "unseekable"
    SEEKABLE = "seekable"


class PaginationOption(str, Enum):
    """Closed set of switches a paginator accepts; each maps to one config field."""

    FORWARD = "forward"
    BACKWARD = "backward"
    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"
    SEEKABLE = "seekable"
    UNSEEKABLE = "unseekable"


# option -> (field, value when enabled, value when disabled)
_OPTION_FIELDS: dict[PaginationOption, tuple[str, Enum, Enum]] = {
    PaginationOption.FORWARD: ("direction", Direction.FORWARD, Direction.BACKWARD),
    PaginationOption.BACKWARD: ("direction", Direction.BACKWARD, Direction.FORWARD),
    PaginationOption.EXCLUSIVE: ("inclusivity", Inclusivity.EXCLUSIVE, Inclusivity.INCLUSIVE),
    PaginationOption.INCLUSIVE: ("inclusivity", Inclusivity.INCLUSIVE, Inclusivity.EXCLUSIVE),
    PaginationOption.SEEKABLE: ("seekability", Seekability.SEEKABLE, Seekability.UNSEEKABLE),
    PaginationOption.UNSEEKABLE: ("seekability", Seekability.UNSEEKABLE, Seekability.SEEKABLE),
}


def option_setting(option: PaginationOption | str, enabled: bool = True) -> tuple[str, Enum]:
    """Config field name and value selected by switching *option* on or off."""
    try:
        option = PaginationOption(option)
    except ValueError:
        raise QueryError(f"Unknown pagination option: {option}", detail={"unknown": [str(option)]}) from None
    field, on, off = _OPTION_FIELDS[option]
    return field, on if enabled else off


def coerce_limit(value: Any, *, max_limit: int | None = None) -> int:
    """Return *value* as a positive ``int``.

    Accepts an ``int`` or a string of decimal digits (a rendered SQL literal).
    ``bool``, floats, ``None`` and non-positive numbers raise
    :class:`LimitParameterError`.
    """
    if isinstance(value, bool):
        raise LimitParameterError(value=value)
    if isinstance(value, str) and _DIGITS.fullmatch(value.strip()):
        value = int(value.strip())
    if not isinstance(value, int) or value <= 0:
        raise LimitParameterError(value=value)
    if max_limit is not None and value > max_limit:
        raise LimitParameterError(f"Limit must not exceed {max_limit}", value=value)
    return value


@dataclasses.dataclass(frozen=True, slots=True)
class PaginationConfig:
    """Immutable traversal settings for one pagination request."""

    limit: int
    direction: Direction = Direction.FORWARD
    inclusivity: Inclusivity = Inclusivity.EXCLUSIVE
    seekability: Seekability = Seekability.UNSEEKABLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "limit", coerce_limit(self.limit))

    @property
    def is_forward(self) -> bool:
        return self.direction is Direction.FORWARD

    @property
    def is_inclusive(self) -> bool:
        return self.inclusivity is Inclusivity.INCLUSIVE

    @property
    def is_seekable(self) -> bool:
        return self.seekability is Seekability.SEEKABLE

    def with_option(self, option: PaginationOption | str, enabled: bool = True) -> "PaginationConfig":
        field, value = option_setting(option, enabled)
        return dataclasses.replace(self, **{field: value})

    def to_dict(self) -> dict[str, Any]:
        return {
            "limit": self.limit,
            "direction": self.direction.value,
            "inclusivity": self.inclusivity.value,
            "seekability": self.seekability.value,
        }


__all__ = [
    "Direction",
    "Inclusivity",
    "PaginationConfig",
    "PaginationOption",
    "Seekability",
    "coerce_limit",
    "option_setting",
]
