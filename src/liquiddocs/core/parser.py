"""Parser for the content of a single ``{% doc %}`` block.

A doc block body holds a free-form description followed by ``@param``,
``@example`` and ``@description`` annotations::

    Renders a product card.

    @param {product} product - The product to render
    @param {string} [class_name] - Extra CSS class
    @example
    {% render 'card', product: product %}

The parser makes one pass over the body and either returns a populated
:class:`~liquiddocs.core.models.DocBlock` or raises a
:class:`~liquiddocs.core.errors.ParseError` describing the first malformed
annotation.
"""

from __future__ import annotations

from typing import AbstractSet, Optional

import structlog

from liquiddocs.core.cursor import Cursor
from liquiddocs.core.errors import (
    MissingOptionalClosingBracket,
    MissingParameterName,
    NoDocContentFound,
    UnexpectedParameterEnd,
    UnknownParameterType,
)
from liquiddocs.core.models import BUILTIN_KINDS, DocBlock, Param, ParamType
from liquiddocs.core.objects import SHOPIFY_OBJECTS, is_platform_object

logger = structlog.get_logger(__name__)

ANNOTATION_MARKERS = ("@param ", "@example ", "@description ")

_EMPTY_PARAM = Param()


class DocContentParser:
    """Single-pass parser for doc block bodies.

    The parser holds no per-call state, so one instance can be shared across
    threads and reused for any number of bodies.

    Attributes:
        allowed_types: Platform object names accepted as parameter types
    """

    def __init__(self, allowed_types: AbstractSet[str] = SHOPIFY_OBJECTS) -> None:
        """Initialize the parser.

        Args:
            allowed_types: Platform object names accepted as parameter types
        """
        self.allowed_types = allowed_types
        self._log = logger.bind(component="parser")

    def parse(self, body: str) -> DocBlock:
        """Parse one doc block body.

        Args:
            body: Text between the ``doc`` and ``enddoc`` tags

        Returns:
            The parsed doc block

        Raises:
            ParseError: If an annotation is malformed, or NoDocContentFound
                if the body carries no description, parameter or example
        """
        cursor = Cursor(body)
        description = ""
        params: list[Param] = []
        examples: list[str] = []

        cursor.skip_whitespace()
        while (item := cursor.advance()) is not None:
            start, char = item

            # Text before the first annotation is the description
            if not description and char != "@":
                end = self._find_annotation(cursor)
                description = body[start:end].strip()

            if char != "@":
                continue

            # Only the first description counts
            if not description and cursor.peek_matches("description"):
                description = self._read_description(cursor)

            if cursor.peek_matches("param"):
                param = self._read_param(cursor, start)
                if param != _EMPTY_PARAM:
                    params.append(param)

            if cursor.peek_matches("example"):
                example = self._read_example(cursor)
                if example:
                    examples.append(example)

        block = DocBlock(description=description, param=params, example=examples)
        if block.is_empty:
            raise NoDocContentFound()

        self._log.debug(
            "doc_content_parsed",
            params=len(block.param),
            examples=len(block.example),
        )
        return block

    def resolve_type(self, type_name: str, offset: Optional[int] = None) -> ParamType:
        """Resolve a type name to a built-in or platform object type.

        Args:
            type_name: Trimmed name without any ``[]`` suffix
            offset: Position of the type expression, for error reporting

        Returns:
            The resolved type

        Raises:
            UnknownParameterType: If the name is not recognized
        """
        kind = BUILTIN_KINDS.get(type_name)
        if kind is not None:
            return ParamType.builtin(kind)
        if is_platform_object(type_name, self.allowed_types):
            return ParamType.platform(type_name)
        raise UnknownParameterType(type_name, offset=offset)

    def _find_annotation(self, cursor: Cursor) -> int:
        end = cursor.find_any(ANNOTATION_MARKERS)
        return len(cursor.text) if end is None else end

    def _read_description(self, cursor: Cursor) -> str:
        cursor.advance_by(len("description"))
        cursor.skip_whitespace()
        start = cursor.pos
        end = self._find_annotation(cursor)
        if end <= start:
            return ""

        text = cursor.text[start:end].strip()
        if text.startswith("-"):
            text = text[1:].strip()
        return text

    def _read_param(self, cursor: Cursor, annotation_start: int) -> Param:
        """Read a ``@param`` annotation; the cursor sits on ``param``."""
        body = cursor.text
        context = body[annotation_start:]

        cursor.advance_by(len("param"))
        cursor.skip_whitespace_until_newline()
        if cursor.at_end:
            raise UnexpectedParameterEnd(context, offset=annotation_start)

        type_ = None
        if cursor.peek() == "{":
            type_ = self._read_type(cursor, annotation_start)

        cursor.skip_whitespace_until_newline()
        if cursor.at_end:
            raise self._missing_name(body, annotation_start)

        optional = cursor.peek() == "["
        if optional:
            cursor.advance()

        name_start = cursor.pos
        cursor.skip_whitespace_until_newline()
        if optional:
            name_end = cursor.find("]")
            if name_end is None:
                raise MissingOptionalClosingBracket(context, offset=annotation_start)
        else:
            name_end = cursor.find_any((" ", "\n"))
            if name_end is None:
                name_end = len(body)

        name = body[name_start:name_end].strip()
        if optional:
            cursor.advance()

        if not name:
            raise self._missing_name(body, annotation_start)
        # An unclosed "[" that runs into a later line is reported as a bracket error
        if "\n" in name:
            raise MissingOptionalClosingBracket(context, offset=annotation_start)

        description = None
        if not cursor.at_end and cursor.peek() != "\n":
            description = self._read_param_description(cursor)

        return Param(name=name, description=description, type_=type_, optional=optional)

    def _read_type(self, cursor: Cursor, annotation_start: int) -> ParamType:
        body = cursor.text
        type_start = cursor.pos
        cursor.advance()

        type_end = cursor.find("}")
        if type_end is None:
            raise UnexpectedParameterEnd(body[annotation_start:], offset=annotation_start)

        type_name = body[type_start + 1 : type_end].strip()
        is_array = type_name.endswith("[]")
        if is_array:
            type_name = type_name[:-2].strip()

        base = self.resolve_type(type_name, offset=type_start)
        cursor.advance()
        return ParamType.array_of(base) if is_array else base

    def _read_param_description(self, cursor: Cursor) -> Optional[str]:
        cursor.skip_whitespace_until_newline()
        start = cursor.pos + 1 if cursor.peek() == "-" else cursor.pos
        end = cursor.find("\n")
        if end is None:
            end = len(cursor.text)
        if end <= start:
            return None
        return cursor.text[start:end].strip() or None

    def _read_example(self, cursor: Cursor) -> str:
        cursor.advance_by(len("example"))
        cursor.skip_whitespace_until_newline()
        start = cursor.pos
        end = self._find_annotation(cursor)
        return dedent_example(cursor.text[start:end])

    def _missing_name(self, body: str, annotation_start: int) -> MissingParameterName:
        line, column = Cursor(body).line_and_column(annotation_start)
        return MissingParameterName(
            line, column, body[annotation_start:], offset=annotation_start
        )


def dedent_example(raw: str) -> str:
    """Strip the common indentation of an ``@example`` section.

    ``raw`` starts right after the ``@example`` keyword, so its leading
    whitespace includes the newline ending that line. The remaining leading
    whitespace is the width removed from every following line; lines indented
    less lose only what they have.

    Args:
        raw: Text between ``@example`` and the next annotation

    Returns:
        Trimmed example with the indentation removed
    """
    indent = len(raw) - len(raw.lstrip())
    text = raw.strip()
    if indent == 0:
        return text

    width = indent - 1
    lines = []
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        skip = 0
        while skip < width and skip < len(line) and line[skip].isspace():
            skip += 1
        lines.append(line[skip:])
    return "\n".join(lines)


def parse_doc_content(
    body: str, allowed_types: Optional[AbstractSet[str]] = None
) -> DocBlock:
    """Parse one doc block body.

    Args:
        body: Text between the ``doc`` and ``enddoc`` tags
        allowed_types: Platform object names accepted as parameter types
            (defaults to the Shopify object list)

    Returns:
        The parsed doc block

    Raises:
        ParseError: If the body is malformed or empty
    """
    parser = DocContentParser(
        SHOPIFY_OBJECTS if allowed_types is None else allowed_types
    )
    return parser.parse(body)
