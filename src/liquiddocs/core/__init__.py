"""Core functionality for locating and parsing doc blocks."""

from liquiddocs.core.batch import DocBatchParser, parse_files, parse_text
from liquiddocs.core.cursor import Cursor, line_and_column
from liquiddocs.core.errors import (
    MissingOptionalClosingBracket,
    MissingParameterName,
    NoDocContentFound,
    ParseError,
    UnexpectedParameterEnd,
    UnknownParameterType,
)
from liquiddocs.core.models import (
    Diagnostic,
    DocBlock,
    FileInput,
    FileResult,
    Param,
    ParamKind,
    ParamType,
    ParseOutcome,
)
from liquiddocs.core.objects import SHOPIFY_OBJECTS, resolve_allowed_types
from liquiddocs.core.parser import DocContentParser, parse_doc_content
from liquiddocs.core.scanner import BlockSpan, extract_doc_blocks, find_doc_blocks

__all__ = [
    "Cursor",
    "line_and_column",
    "BlockSpan",
    "find_doc_blocks",
    "extract_doc_blocks",
    "DocContentParser",
    "parse_doc_content",
    "DocBatchParser",
    "parse_text",
    "parse_files",
    "SHOPIFY_OBJECTS",
    "resolve_allowed_types",
    "ParseError",
    "MissingParameterName",
    "MissingOptionalClosingBracket",
    "UnexpectedParameterEnd",
    "UnknownParameterType",
    "NoDocContentFound",
    "DocBlock",
    "Param",
    "ParamKind",
    "ParamType",
    "FileInput",
    "Diagnostic",
    "ParseOutcome",
    "FileResult",
]
