"""Typed errors raised by the core. No engine imports."""

from __future__ import annotations


class MizlabError(Exception):
    """Base class for every error raised by mizlab."""


class InvalidArgumentError(MizlabError, TypeError, ValueError):
    """Argument of the wrong type or shape (fractional endpoint, malformed pattern)."""


class LengthMismatchError(MizlabError, ValueError):
    """x and y coordinate sequences differ in length."""

    def __init__(self, x_len: int, y_len: int) -> None:
        super().__init__(
            f"Coordinate sequences must have equal length (got {x_len} xs and {y_len} ys)"
        )
        self.x_len = x_len
        self.y_len = y_len
