"""Exceptions raised by the engine."""

from typing import NoReturn


class FatalError(RuntimeError):
    """An unrecoverable engine failure; the game should exit with ``exit_code``."""

    exit_code = 69

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(ValueError):
    """Raised when image data cannot be decoded; ``code`` identifies the failure."""

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or f"decodePNG failed with error: {code}")


def fatal_error(message: str) -> NoReturn:
    """Abort the game with ``message``."""
    raise FatalError(message)