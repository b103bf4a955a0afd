"""Errors raised while reading stylesheet source."""

from __future__ import annotations


class ParseError(ValueError):
    """Malformed CSS.  ``line`` and ``column`` are 1-based when known."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)
