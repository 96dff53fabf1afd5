"""liquiddocs - extract and check {% doc %} blocks in Liquid templates."""

__version__ = "0.1.0"
__author__ = "liquiddocs contributors"
__license__ = "MIT"

from liquiddocs.core.batch import DocBatchParser, parse_files, parse_text
from liquiddocs.core.errors import ParseError
from liquiddocs.core.models import (
    DocBlock,
    FileInput,
    FileResult,
    Param,
    ParamType,
    ParseOutcome,
)
from liquiddocs.core.parser import DocContentParser, parse_doc_content
from liquiddocs.core.scanner import extract_doc_blocks, find_doc_blocks

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "extract_doc_blocks",
    "find_doc_blocks",
    "parse_doc_content",
    "DocContentParser",
    "DocBatchParser",
    "parse_text",
    "parse_files",
    "ParseError",
    "DocBlock",
    "Param",
    "ParamType",
    "FileInput",
    "FileResult",
    "ParseOutcome",
]
