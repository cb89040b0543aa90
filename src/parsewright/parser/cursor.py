"""Cursor infrastructure for backtracking parsers.

Two types cooperate:

    Cursor      - immutable view of the remaining input (source + offset).
                  Snapshots are O(1) and never share mutable state.
    ParseState  - the mutable holder threaded through one run. Parsers
                  consume input by reassigning ``state.cursor``.

Backtracking is therefore plain reassignment:

    >>> state = ParseState.of("abc")
    >>> snapshot = state.cursor
    >>> state.cursor = state.cursor.advance(2)
    >>> state.remaining
    'c'
    >>> state.cursor = snapshot  # restore
    >>> state.remaining
    'abc'

Line Ending Support:
    compute_line_col() uses \\n as the line delimiter. CRLF input works
    because the \\n is still present; CR-only input reports a single line.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from parsewright.constants import MAX_DEPTH
from parsewright.core.depth_guard import DepthGuard

__all__ = ["Cursor", "ParseState"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    A cursor never observes characters before its position. Every
    consuming operation returns a NEW cursor; the original is unchanged.

    Example:
        >>> cursor = Cursor("hello")
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int = 0

    def __post_init__(self) -> None:
        """Validate that the position lies within the source."""
        if not 0 <= self.pos <= len(self.source):
            msg = f"Cursor.pos must be within 0..{len(self.source)}, got {self.pos}"
            raise ValueError(msg)

    @property
    def is_eof(self) -> bool:
        """True when no input remains.

        Note: This is the preferred way to check for EOF.
              Use this in while loops: `while not cursor.is_eof:`
        """
        return self.pos >= len(self.source)

    @property
    def is_empty(self) -> bool:
        """Alias for is_eof, reading as "the remaining input is empty"."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    @property
    def remaining(self) -> str:
        """The unconsumed input as an owned string."""
        return self.source[self.pos :]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> Cursor:
        """Return new cursor advanced by count positions (clamped at EOF).

        Example:
            >>> cursor = Cursor("hello")
            >>> cursor.advance(3).remaining
            'lo'
            >>> cursor.advance(10).is_eof
            True
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def startswith(self, prefix: str) -> bool:
        """Check whether the remaining input begins with prefix.

        No substring is allocated.
        """
        return self.source.startswith(prefix, self.pos)

    def take_while(self, predicate: Callable[[str], bool]) -> tuple[str, Cursor]:
        """Split off the longest prefix whose characters satisfy predicate.

        Returns:
            (prefix, cursor after prefix). The prefix may be empty, in which
            case the returned cursor is this cursor.

        Example:
            >>> text, rest = Cursor("abc123").take_while(str.isalpha)
            >>> text, rest.remaining
            ('abc', '123')
        """
        source = self.source
        end = self.pos
        length = len(source)
        while end < length and predicate(source[end]):
            end += 1
        if end == self.pos:
            return "", self
        return source[self.pos : end], Cursor(source, end)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos.

        Store the start cursor, advance, then slice:

            >>> start = Cursor("hello world")
            >>> _, cursor = start.take_while(str.isalpha)
            >>> start.slice_to(cursor.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(slots=True)
class ParseState:
    """Mutable parse state for a single run.

    Holds the current cursor and the per-run depth guard. Parser values
    themselves carry no state, so one grammar can serve any number of
    independent ParseState instances.

    Mutability Note:
        Intentionally mutable. Parsers advance the input by assigning a new
        Cursor to ``cursor``; combinators restore by assigning a snapshot.

    Attributes:
        cursor: Remaining input
        depth: Nesting guard consulted by lazy()
    """

    cursor: Cursor
    depth: DepthGuard = field(default_factory=DepthGuard)

    @classmethod
    def of(cls, source: str, *, max_depth: int = MAX_DEPTH) -> ParseState:
        """Create state positioned at the start of source."""
        return cls(Cursor(source), DepthGuard(max_depth=max_depth))

    @property
    def remaining(self) -> str:
        """The unconsumed input as an owned string."""
        return self.cursor.remaining

    @property
    def is_empty(self) -> bool:
        """True when no input remains."""
        return self.cursor.is_eof
