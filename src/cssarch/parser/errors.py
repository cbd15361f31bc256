"""Parser error types."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when CSS source cannot be read into a stylesheet model.

    ``line`` and ``column`` are 1-based when the parser could locate the
    problem, otherwise ``None``.
    """

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)

    @property
    def location(self) -> str:
        if self.line is None:
            return ""
        if self.column is None:
            return f"{self.line}"
        return f"{self.line}:{self.column}"
