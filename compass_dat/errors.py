# -*- coding: utf-8 -*-
"""Error handling for Compass .DAT parsing.

Parsing is fail-fast: the first grammar violation aborts the parse and is
raised as a :class:`GrammarViolation` carrying the offending source span.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """Tracks the source location of a span of text for error reporting.

    Attributes:
        source: The source file name or identifier
        line: Line number (0-based)
        column: Column number (0-based)
        text: The full text of the line containing the span
        length: Number of characters in the span (at least one caret is drawn)
    """

    source: str
    line: int
    column: int
    text: str
    length: int = 1

    def __str__(self) -> str:
        """Format as human-readable location string."""
        return f"({self.source}, line {self.line + 1}, col {self.column + 1})"

    def pointer(self) -> str:
        """Render the line text with a caret marker under the span."""
        carets = "^" * max(1, min(self.length, len(self.text) - self.column))
        # Tabs keep their width so the carets line up in a terminal
        indent = "".join(c if c == "\t" else " " for c in self.text[: self.column])
        return f"{self.text}\n{indent}{carets}"


class GrammarViolation(Exception):  # noqa: N818
    """Exception raised when the input does not match the .DAT grammar.

    Attributes:
        message: Error message
        location: Source location of the offending span
    """

    def __init__(self, message: str, location: SourceLocation | None = None):
        self.message = message
        self.location = location
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as message, location and caret pointer."""
        if self.location:
            return f"{self.message} {self.location}\n{self.location.pointer()}"
        return self.message
