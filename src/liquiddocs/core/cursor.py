"""Character cursor shared by the tag scanner and the content parser.

The cursor walks a string left to right and exposes the small set of
primitives both scanners are built from. Positions are ``str`` indices into
the original text; the cursor never copies the text.
"""

from __future__ import annotations

from typing import Optional, Sequence


class Cursor:
    """Forward-only cursor over a text buffer with one character lookahead.

    Attributes:
        text: The text being scanned
        pos: Index of the next character to be consumed
    """

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, len={len(self.text)})"

    @property
    def at_end(self) -> bool:
        """Check if every character has been consumed."""
        return self.pos >= len(self.text)

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def advance(self) -> Optional[tuple[int, str]]:
        """Consume the next character.

        Returns:
            ``(index, character)`` or None at the end of the text
        """
        if self.pos >= len(self.text):
            return None
        item = (self.pos, self.text[self.pos])
        self.pos += 1
        return item

    def advance_by(self, count: int) -> None:
        """Consume up to ``count`` characters."""
        self.pos = min(self.pos + count, len(self.text))

    def find(self, needle: str) -> Optional[int]:
        """Move to the next occurrence of ``needle``.

        The cursor stops on the first character of the match, or at the end
        of the text when there is none.

        Returns:
            Index of the match, or None
        """
        if not needle:
            return None
        index = self.text.find(needle, self.pos)
        if index == -1:
            self.pos = len(self.text)
            return None
        self.pos = index
        return index

    def find_any(self, needles: Sequence[str]) -> Optional[int]:
        """Move to the earliest occurrence of any of ``needles``.

        Returns:
            Index of the earliest match, or None
        """
        best = -1
        for needle in needles:
            index = self.text.find(needle, self.pos)
            if index != -1 and (best == -1 or index < best):
                best = index
        if best == -1:
            self.pos = len(self.text)
            return None
        self.pos = best
        return best

    def skip_whitespace(self) -> None:
        """Move to the next non-whitespace character."""
        text = self.text
        while self.pos < len(text) and text[self.pos].isspace():
            self.pos += 1

    def skip_whitespace_until_newline(self) -> None:
        """Move to the next non-whitespace character, stopping at a newline."""
        text = self.text
        while self.pos < len(text) and text[self.pos].isspace() and text[self.pos] != "\n":
            self.pos += 1

    def skip_dash(self) -> None:
        """Skip a whitespace-control dash."""
        if self.peek() == "-":
            self.pos += 1

    def peek_matches(self, word: str) -> bool:
        """Check if the upcoming text is ``word`` followed by a word boundary.

        The comparison ignores ASCII case. The character after the word must
        not be an ASCII letter or digit; the end of the text is a boundary.
        """
        end = self.pos + len(word)
        if end > len(self.text) or self.pos >= len(self.text):
            return False
        if self.text[self.pos:end].lower() != word.lower():
            return False
        if end == len(self.text):
            return True
        following = self.text[end]
        return not (following.isascii() and following.isalnum())

    def skip_to_tag_close(self) -> Optional[int]:
        """Consume a tag's closing ``%}`` (optionally ``-%}``).

        Only whitespace and a dash may precede the delimiter.

        Returns:
            Index just after the delimiter, or None if it is not next
        """
        self.skip_whitespace()
        self.skip_dash()
        if self.peek() == "%":
            self.pos += 1
            if self.peek() == "}":
                self.pos += 1
                return self.pos
        return None

    def skip_to_tag(self, tag: str, past_close: bool) -> Optional[int]:
        """Move to the next ``{% tag %}``.

        Args:
            tag: Tag name to look for
            past_close: Consume the whole tag and return the index after its
                ``%}`` instead of the index of its ``{%``

        Returns:
            Requested index, or None when the tag never appears
        """
        while (tag_start := self.find("{%")) is not None:
            self.advance_by(2)
            self.skip_dash()
            self.skip_whitespace()

            if self.peek_matches(tag):
                if past_close:
                    self.advance_by(len(tag))
                    return self.skip_to_tag_close()
                return tag_start

        return None

    def line_and_column(self, offset: int) -> tuple[int, int]:
        """Get the 1-indexed line and column of ``offset`` in the text."""
        return line_and_column(self.text, offset)


def line_and_column(text: str, offset: int) -> tuple[int, int]:
    """Get the 1-indexed line and column of an index into ``text``.

    Columns count characters (``str`` indices), not UTF-8 bytes. Both agree
    for ASCII templates.

    Args:
        text: Text the offset points into
        offset: Index of the character

    Returns:
        ``(line, column)`` tuple
    """
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    last_newline = text.rfind("\n", 0, offset)
    return line, offset - (last_newline + 1) + 1
