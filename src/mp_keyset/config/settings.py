"""Config – Settings base class and PaginationSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_keyset.config.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class PaginationSettings(Settings):
    """Defaults applied to paginators created with ``Paginator.from_settings``.

    Read from ``KEYSET_DEFAULT_LIMIT``, ``KEYSET_MAX_LIMIT``, ``KEYSET_SEEKABLE``,
    ``KEYSET_INCLUSIVE`` and ``KEYSET_BACKWARD`` by :class:`EnvSettingsLoader`.
    """

    _prefix = "KEYSET"

    default_limit: int = 20
    max_limit: int = 1000
    seekable: bool = False
    inclusive: bool = False
    backward: bool = False

    def _validate(self) -> None:
        if self.max_limit < 1:
            raise InvalidSettingValueError("max_limit", self.max_limit, "must be >= 1")
        if not 1 <= self.default_limit <= self.max_limit:
            raise InvalidSettingValueError(
                "default_limit", self.default_limit, f"must be between 1 and {self.max_limit}"
            )


__all__ = ["PaginationSettings", "Settings"]
