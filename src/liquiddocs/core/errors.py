"""Errors raised while parsing the content of a doc block.

Every variant carries enough context to render a diagnostic without scanning
the block again. ``offset`` is the index in the block body where the
offending annotation starts, when one is known.
"""

from __future__ import annotations

from typing import Optional


class ParseError(Exception):
    """Base class for doc block content errors."""

    summary = "Parse error"

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.offset = offset

    @property
    def detail(self) -> str:
        """Short context appended to one-line diagnostics."""
        return ""

    def describe(self, line: int, column: int) -> str:
        """Render a one-line diagnostic for the given position.

        Args:
            line: 1-indexed line of the error
            column: 1-indexed column of the error

        Returns:
            Message such as ``Unknown parameter type on 4:10: "unknown"``
        """
        message = f"{self.summary} on {line}:{column}"
        if self.detail:
            message += f": {self.detail}"
        return message

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args and self.offset == other.offset  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args, self.offset))


def _first_line(context: str) -> str:
    return context.split("\n", 1)[0].strip()


class MissingParameterName(ParseError):
    """A ``@param`` annotation without a name."""

    summary = "Missing parameter name"

    def __init__(
        self, line: int, column: int, context: str, offset: Optional[int] = None
    ) -> None:
        super().__init__(
            f"Missing parameter on {line}:{column} near this line:\n{context}", offset
        )
        self.line = line
        self.column = column
        self.context = context

    @property
    def detail(self) -> str:
        return _first_line(self.context)


class MissingOptionalClosingBracket(ParseError):
    """An optional parameter name opened with ``[`` but never closed."""

    summary = "Missing closing bracket for optional parameter"

    def __init__(self, context: str, offset: Optional[int] = None) -> None:
        super().__init__(
            f"Missing closing bracket for parameter optionality near this line:\n{context}",
            offset,
        )
        self.context = context

    @property
    def detail(self) -> str:
        return _first_line(self.context)


class UnexpectedParameterEnd(ParseError):
    """A ``@param`` annotation that ends before it is complete."""

    summary = "Unexpected parameter end"

    def __init__(self, context: str, offset: Optional[int] = None) -> None:
        super().__init__(f"Unexpected parameter end near this line:\n{context}", offset)
        self.context = context

    @property
    def detail(self) -> str:
        return _first_line(self.context)


class UnknownParameterType(ParseError):
    """A ``{type}`` that is neither built-in nor an allowed platform object."""

    summary = "Unknown parameter type"

    def __init__(self, type_name: str, offset: Optional[int] = None) -> None:
        super().__init__(f'Unknown parameter type: "{type_name}"', offset)
        self.type_name = type_name

    @property
    def detail(self) -> str:
        return f'"{self.type_name}"'


class NoDocContentFound(ParseError):
    """A doc block with no description, parameter or example."""

    summary = "No doc content found"

    def __init__(self) -> None:
        super().__init__("No doc content found")
