"""Parse doc blocks across whole templates and batches of files.

Errors never cross a block boundary: a malformed block becomes a
:class:`~liquiddocs.core.models.Diagnostic` and its siblings, as well as the
other files of the batch, are still parsed.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Optional

import structlog

from liquiddocs.core.cursor import line_and_column
from liquiddocs.core.errors import ParseError
from liquiddocs.core.models import Diagnostic, FileInput, FileResult, ParseOutcome
from liquiddocs.core.objects import SHOPIFY_OBJECTS
from liquiddocs.core.parser import DocContentParser
from liquiddocs.core.scanner import BlockSpan, find_doc_blocks

logger = structlog.get_logger(__name__)


class DocBatchParser:
    """Parse every doc block of one or more templates.

    Attributes:
        parser: Content parser used for each block
    """

    def __init__(self, allowed_types: AbstractSet[str] = SHOPIFY_OBJECTS) -> None:
        """Initialize the batch parser.

        Args:
            allowed_types: Platform object names accepted as parameter types
        """
        self.parser = DocContentParser(allowed_types)
        self._log = logger.bind(component="batch")

    def parse_text(self, content: str, path: Optional[str] = None) -> Optional[ParseOutcome]:
        """Parse all doc blocks of a template.

        Args:
            content: Full template text
            path: File path, only used for logging

        Returns:
            Successes and diagnostics, or None if the template has no doc block
        """
        spans = find_doc_blocks(content)
        if spans is None:
            self._log.debug("no_doc_blocks", path=path)
            return None

        outcome = ParseOutcome()
        for span in spans:
            try:
                outcome.success.append(self.parser.parse(span.text(content)))
            except ParseError as e:
                diagnostic = self._to_diagnostic(content, span, e)
                outcome.errors.append(diagnostic)
                self._log.debug(
                    "block_parse_failed",
                    path=path,
                    line=diagnostic.line,
                    column=diagnostic.column,
                    error=type(e).__name__,
                )

        self._log.debug(
            "file_parsed",
            path=path,
            blocks=len(spans),
            errors=len(outcome.errors),
        )
        return outcome

    def parse_files(self, files: Iterable[FileInput]) -> list[FileResult]:
        """Parse a batch of files, one result per file in input order.

        Args:
            files: Files with their content

        Returns:
            Result per file
        """
        results = []
        for file in files:
            docs = self.parse_text(file.content, path=file.path)
            results.append(FileResult(path=file.path, docs=docs))
        return results

    def _to_diagnostic(self, content: str, span: BlockSpan, error: ParseError) -> Diagnostic:
        # Error offsets are relative to the block body
        offset = span.start + (error.offset or 0)
        line, column = line_and_column(content, offset)
        return Diagnostic(line=line, column=column, message=error.describe(line, column))


def parse_text(
    content: str, allowed_types: AbstractSet[str] = SHOPIFY_OBJECTS
) -> ParseOutcome:
    """Convenience function to parse all doc blocks of a template.

    Args:
        content: Full template text
        allowed_types: Platform object names accepted as parameter types

    Returns:
        Successes and diagnostics (both empty when there is no doc block)
    """
    outcome = DocBatchParser(allowed_types).parse_text(content)
    return outcome if outcome is not None else ParseOutcome()


def parse_files(
    files: Iterable[FileInput], allowed_types: AbstractSet[str] = SHOPIFY_OBJECTS
) -> list[FileResult]:
    """Convenience function to parse a batch of files.

    Args:
        files: Files with their content
        allowed_types: Platform object names accepted as parameter types

    Returns:
        Result per file, in input order
    """
    return DocBatchParser(allowed_types).parse_files(files)
