from __future__ import annotations


class CmdflowError(Exception):
    """Root of the cmdflow exception hierarchy.

    Everything cmdflow raises on purpose derives from this class, so the
    CLI can catch it once at the command boundary and let unexpected
    exceptions propagate.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
