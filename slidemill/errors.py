"""Slidemill error types."""

from __future__ import annotations


class FormatError(RuntimeError):
    """Raised when an output format cannot be built from the given options."""


class ConverterError(RuntimeError):
    """Raised when the pandoc process fails or cannot be started."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


__all__ = ["ConverterError", "FormatError"]
