# -*- coding: utf-8 -*-
"""Positional text scanner used by the .DAT grammar.

A :class:`Segment` is the immutable source text plus a name for diagnostics.
A :class:`SegmentParser` walks a cursor over it: patterns are always matched
*at* the cursor (never searched for further ahead), and every failure is
turned into a :class:`~compass_dat.errors.GrammarViolation` pointing at the
offending span.
"""

import re
from bisect import bisect_right
from dataclasses import dataclass
from functools import cached_property
from re import Pattern
from typing import NamedTuple

from compass_dat.errors import GrammarViolation
from compass_dat.errors import SourceLocation

END_OF_LINE: Pattern[str] = re.compile(r"\r\n?|\n")
INLINE_WHITESPACE: Pattern[str] = re.compile(
    r"[ \t\v\u00a0\u1680\u2000-\u200a\u202f\u205f\u3000\ufeff]+"
)
WHITESPACE: Pattern[str] = re.compile(r"\s+")
NON_WHITESPACE: Pattern[str] = re.compile(r"\S+")


class Span(NamedTuple):
    """A piece of the source text and where it came from."""

    value: str
    start: int
    end: int


@dataclass(frozen=True)
class Segment:
    """Source text with a name used in error messages.

    Attributes:
        value: The complete text
        source: The source file name or identifier
    """

    value: str
    source: str = "<string>"

    @cached_property
    def line_starts(self) -> list[int]:
        return [0] + [m.end() for m in END_OF_LINE.finditer(self.value)]

    def line_text(self, line: int) -> str:
        """Return the text of a 0-based line, without its terminator."""
        start = self.line_starts[line]
        eol = END_OF_LINE.search(self.value, start)
        return self.value[start : eol.start() if eol else len(self.value)]

    def location(self, start: int, end: int | None = None) -> SourceLocation:
        """Build the source location of the span ``[start, end)``."""
        line = bisect_right(self.line_starts, start) - 1
        column = start - self.line_starts[line]
        length = (end - start) if end is not None and end > start else 1
        return SourceLocation(
            source=self.source,
            line=line,
            column=column,
            text=self.line_text(line),
            length=length,
        )


class SegmentParser:
    """Cursor over a :class:`Segment`.

    The cursor (``index``) can be read and assigned freely, which is how the
    grammar backs off after looking ahead.
    """

    def __init__(self, segment: Segment | str, source: str = "<string>") -> None:
        if isinstance(segment, str):
            segment = Segment(value=segment, source=source)
        self.segment = segment
        self.index = 0

    @property
    def text(self) -> str:
        return self.segment.value

    def is_at_end(self) -> bool:
        return self.index >= len(self.text)

    def is_at_end_of_line(self) -> bool:
        return self.is_at_end() or self.text[self.index] in "\r\n"

    def current_char(self) -> str:
        """Return the character under the cursor, or ``""`` at the end."""
        return self.text[self.index : self.index + 1]

    def error(
        self,
        message: str,
        start: int | None = None,
        end: int | None = None,
    ) -> GrammarViolation:
        """Build (not raise) a violation for the span ``[start, end)``."""
        if start is None:
            start = self.index
        return GrammarViolation(message, self.segment.location(start, end))

    def peek(self, pattern: Pattern[str]) -> re.Match[str] | None:
        """Match ``pattern`` at the cursor without consuming anything."""
        return pattern.match(self.text, self.index)

    def skip(self, pattern: Pattern[str]) -> bool:
        """Consume ``pattern`` if it matches at the cursor."""
        match = self.peek(pattern)
        if match is None:
            return False
        self.index = match.end()
        return True

    def match(
        self,
        pattern: Pattern[str],
        message: str | None = None,
    ) -> re.Match[str] | None:
        """Consume and return a match of ``pattern`` at the cursor.

        Raises:
            GrammarViolation: If nothing matches and ``message`` is given
        """
        match = self.peek(pattern)
        if match is None:
            if message is not None:
                raise self.error(message)
            return None
        self.index = match.end()
        return match

    def next_delimited(self, delimiter: Pattern[str]) -> Span:
        """Consume text up to the next ``delimiter`` (or the end).

        The delimiter itself is consumed but not returned.
        """
        start = self.index
        found = delimiter.search(self.text, start)
        if found is None:
            self.index = len(self.text)
            return Span(self.text[start:], start, self.index)
        self.index = found.end()
        return Span(self.text[start : found.start()], start, found.start())

    def rest_of_line(self) -> Span:
        """Consume the rest of the current line including its terminator."""
        return self.next_delimited(END_OF_LINE)

    def next_token(self, message: str) -> Span:
        """Consume a run of non-whitespace and the inline whitespace after it.

        Tokens never extend past the end of the current line.

        Raises:
            GrammarViolation: If there is no token before the end of the line
        """
        match = self.peek(NON_WHITESPACE)
        if match is None:
            raise self.error(message)
        self.index = match.end()
        self.skip(INLINE_WHITESPACE)
        return Span(match.group(), match.start(), match.end())

    def expect_ignore_case(self, literal: str) -> Span:
        """Consume ``literal`` (case-insensitively) or raise."""
        start = self.index
        end = start + len(literal)
        if self.text[start:end].upper() != literal.upper():
            raise self.error(f"expected {literal}")
        self.index = end
        return Span(self.text[start:end], start, end)
