from __future__ import annotations

from typing import Any

from cmdflow.exceptions.base import CmdflowError


class ConfigError(CmdflowError):
    """Raised when configuration cannot be read or fails validation.

    Attributes:
        message: Human-readable error message.
        field: Dotted path of the offending setting, if known
            (e.g. ``"library.paths"``).
        value: The rejected value, kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message)
