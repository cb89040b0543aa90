"""Depth limiting for recursive grammars.

Recursive grammars reference themselves through lazy(), so nesting in the
input (parentheses, brackets, indentation levels) becomes recursion in the
parser. DepthGuard bounds that recursion per run to prevent stack overflow
from adversarial input.

Thread-safe: uses explicit state, no thread-local storage. Each run owns its
guard through its ParseState.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from parsewright.constants import MAX_DEPTH, RECURSION_RESERVE_FRAMES
from parsewright.diagnostics import ParsewrightError

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(ParsewrightError):
    """Raised when maximum grammar nesting depth is exceeded.

    Not a ParseError: combinators never catch it, so alternation cannot
    mask it by trying another branch. It always reaches the caller of run().

    Attributes:
        max_depth: The limit that was exceeded
    """

    def __init__(self, max_depth: int) -> None:
        message = (
            f"Maximum grammar nesting depth ({max_depth}) exceeded. "
            "Input is nested too deeply for this grammar."
        )
        super().__init__(message)
        self.max_depth = max_depth


@dataclass(slots=True)
class DepthGuard:
    """Per-run counter of active lazy() entries.

    Each lazy() call enters the guard of the running ParseState before
    delegating to the deferred parser, so the count equals the current
    nesting depth of the grammar.

    Usage:
        state = ParseState.of(source, max_depth=50)
        with state.depth:
            value = inner.func(state)

    Mutable on purpose: the count changes on __enter__/__exit__.

    Attributes:
        max_depth: Deepest allowed nesting, clamped to the recursion limit
        current_depth: Number of guarded sections currently entered
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter one nesting level.

        The limit is checked before the count changes. __exit__ does not run
        when __enter__ raises, so a failed entry must leave the count as it was.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(self.max_depth)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Alias for current_depth."""
        return self.current_depth


def depth_clamp(requested_depth: int, reserve_frames: int = RECURSION_RESERVE_FRAMES) -> int:
    """Limit a requested nesting depth to what the interpreter stack allows.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Frames kept free for run(), combinators and callers

    Returns:
        requested_depth, or sys.getrecursionlimit() - reserve_frames when
        that is smaller (a WARNING is logged)

    Example:
        >>> depth_clamp(50)
        50
    """
    limit = sys.getrecursionlimit()
    max_safe_depth = limit - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested grammar depth %d exceeds recursion limit %d; "
            "Clamping to %d. Raise sys.setrecursionlimit() for deeper grammars.",
            requested_depth,
            limit,
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
