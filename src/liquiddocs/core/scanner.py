"""Locate ``{% doc %}`` blocks in Liquid template text.

The scanner makes a single left-to-right pass over a template. It only looks
at tag openers: ``raw`` and ``comment`` regions are skipped as opaque text,
inline ``{% # %}`` comments are stepped over, and every ``doc`` tag yields the
span between its ``%}`` and the ``{%`` of the matching ``enddoc`` tag.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from liquiddocs.core.cursor import Cursor


class BlockSpan(NamedTuple):
    """Position of one doc block body inside a template.

    Attributes:
        start: Index just after the ``doc`` tag's ``%}``
        end: Index of the ``{%`` of the ``enddoc`` tag
    """

    start: int
    end: int

    def text(self, content: str) -> str:
        """Slice the block body out of the template it was found in."""
        return content[self.start : self.end]


def find_doc_blocks(content: str) -> Optional[list[BlockSpan]]:
    """Find the spans of all doc block bodies in a template.

    Args:
        content: Full template text

    Returns:
        Spans in source order, or None when the template has no doc block
    """
    # Every "enddoc" in the text raises the early-exit threshold, so spurious
    # matches only cost extra scanning.
    possible_blocks = content.count("enddoc")
    if possible_blocks == 0 or "{%" not in content:
        return None

    cursor = Cursor(content)
    spans: list[BlockSpan] = []

    while (item := cursor.advance()) is not None:
        if item[1] == "{" and cursor.peek() == "%":
            cursor.advance()
            cursor.skip_dash()
            cursor.skip_whitespace()

            if cursor.peek_matches("#"):
                if cursor.find("%}") is not None:
                    cursor.advance_by(2)
                continue

            if cursor.peek_matches("raw"):
                cursor.skip_to_tag("endraw", past_close=True)
                continue

            if cursor.peek_matches("comment"):
                cursor.skip_to_tag("endcomment", past_close=True)
                continue

            if cursor.peek_matches("doc"):
                cursor.advance_by(3)
                start = cursor.skip_to_tag_close()
                if start is None:
                    return None
                end = cursor.skip_to_tag("enddoc", past_close=False)
                if end is None:
                    return None
                spans.append(BlockSpan(start, end))

        if len(spans) == possible_blocks:
            break

    return spans or None


def extract_doc_blocks(content: str) -> Optional[list[str]]:
    """Extract the bodies of all doc blocks without the wrapping tags.

    Args:
        content: Full template text

    Returns:
        Block bodies in source order, or None when there are none
    """
    spans = find_doc_blocks(content)
    if spans is None:
        return None
    return [span.text(content) for span in spans]
