"""Tests for core/depth_guard.py and its use by lazy() grammars.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

import pytest

from parsewright.constants import MAX_DEPTH
from parsewright.core.depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp
from parsewright.diagnostics import EitherError, IncompleteParse
from parsewright.parser.core import Parser
from parsewright.parser.cursor import ParseState
from parsewright.parser.primitives import lazy, succeed, token

# Parenthesis nesting depth, e.g. "((()))" -> 3.
NESTED: Parser[int] = (
    token("(") >> lazy(lambda: NESTED, "nested") << token(")")
).map(lambda depth: depth + 1) | succeed(0)

# ============================================================================
# Construction
# ============================================================================


class TestDepthGuardConstruction:
    """Test DepthGuard construction and defaults."""

    def test_default_construction(self) -> None:
        """DepthGuard uses MAX_DEPTH by default."""
        guard = DepthGuard()

        assert guard.max_depth == MAX_DEPTH
        assert guard.current_depth == 0

    def test_custom_max_depth(self) -> None:
        """DepthGuard accepts custom max_depth."""
        guard = DepthGuard(max_depth=50)

        assert guard.max_depth == 50
        assert guard.depth == 0

    def test_post_init_clamps_max_depth(self) -> None:
        """__post_init__ clamps max_depth against recursion limit."""
        limit = sys.getrecursionlimit()
        guard = DepthGuard(max_depth=limit + 1000)

        assert guard.max_depth == limit - 50


# ============================================================================
# Context Manager
# ============================================================================


class TestDepthGuardContextManager:
    """Test DepthGuard as context manager."""

    def test_nested(self) -> None:
        """Nested entries increment depth; exits restore it."""
        guard = DepthGuard(max_depth=10)

        with guard:
            assert guard.current_depth == 1
            with guard:
                assert guard.current_depth == 2

        assert guard.current_depth == 0

    def test_raises_when_exceeded(self) -> None:
        """Entering beyond max_depth raises DepthLimitExceededError."""
        guard = DepthGuard(max_depth=3)

        with guard, guard, guard:  # noqa: SIM117
            with pytest.raises(DepthLimitExceededError) as exc_info:
                with guard:
                    pass

        assert exc_info.value.max_depth == 3
        assert "3" in str(exc_info.value)

    def test_depth_restored_on_error(self) -> None:
        """Depth is restored even if an exception occurs inside."""
        guard = DepthGuard(max_depth=10)
        test_error_msg = "Test error"

        with guard:
            try:
                with guard:
                    raise ValueError(test_error_msg)
            except ValueError:
                pass
            assert guard.current_depth == 1

        assert guard.current_depth == 0

    def test_state_not_corrupted_on_enter_failure(self) -> None:
        """current_depth is unchanged when __enter__ raises."""
        guard = DepthGuard(max_depth=2)

        with guard, guard:
            with pytest.raises(DepthLimitExceededError), guard:
                pass
            assert guard.current_depth == 2

        assert guard.current_depth == 0

    def test_returns_self(self) -> None:
        """__enter__ returns self for 'as' binding."""
        guard = DepthGuard()

        with guard as entered:
            assert entered is guard


# ---------------------------------------------------------------------------
# depth_clamp
# ---------------------------------------------------------------------------


class TestDepthClamp:
    """Test depth_clamp() utility function."""

    def test_returns_value_within_limit(self) -> None:
        """depth_clamp returns requested depth when within limit."""
        assert depth_clamp(50) == 50

    def test_custom_reserve_frames(self) -> None:
        """depth_clamp respects custom reserve_frames parameter."""
        limit = sys.getrecursionlimit()

        assert depth_clamp(limit, reserve_frames=100) == limit - 100

    def test_logs_warning_on_clamp(self, caplog: pytest.LogCaptureFixture) -> None:
        """depth_clamp logs warning when clamping occurs."""
        limit = sys.getrecursionlimit()
        with caplog.at_level(logging.WARNING):
            depth_clamp(limit + 500)

        assert any("Clamping" in record.message for record in caplog.records)

    def test_no_warning_within_limit(self, caplog: pytest.LogCaptureFixture) -> None:
        """depth_clamp does not log when within limit."""
        with caplog.at_level(logging.WARNING):
            depth_clamp(10)

        assert not caplog.records


# ============================================================================
# lazy() grammars
# ============================================================================


class TestLazyGrammars:
    """Test recursive grammars guarded by the run's DepthGuard."""

    @pytest.mark.parametrize(("source", "depth"), [("", 0), ("()", 1), ("((()))", 3)])
    def test_recursive_grammar(self, source: str, depth: int) -> None:
        """Self-referencing grammars parse nested input."""
        assert NESTED.complete().run(source) == depth

    def test_unbalanced_input(self) -> None:
        """Unclosed nesting falls back to the empty branch."""
        assert NESTED.run_partial("(((") == (0, "(((")

        with pytest.raises(IncompleteParse):
            NESTED.complete().run("(((")

    def test_depth_limit(self) -> None:
        """Nesting beyond the budget raises DepthLimitExceededError."""
        source = "(" * 25 + ")" * 25
        state = ParseState.of(source, max_depth=20)

        with pytest.raises(DepthLimitExceededError) as exc_info:
            NESTED.run(state)

        assert exc_info.value.max_depth == 20
        assert state.depth.depth == 0
        assert state.remaining == source

    def test_depth_limit_is_not_masked_by_alternation(self) -> None:
        """Alternation does not try another branch after a depth failure."""
        grammar = NESTED | succeed(-1)

        with pytest.raises(DepthLimitExceededError):
            grammar.run(ParseState.of("(" * 10, max_depth=5))

    def test_within_budget(self) -> None:
        """Nesting exactly at the budget succeeds."""
        state = ParseState.of("(" * 20 + ")" * 20, max_depth=20)

        assert NESTED.run(state) == 20

    def test_factory_called_once(self) -> None:
        """The factory runs on first use only."""
        calls: list[int] = []

        def factory() -> Parser[str]:
            calls.append(1)
            return token("x")

        parser = lazy(factory)

        assert calls == []
        assert parser.many().run("xxx") == ["x", "x", "x"]
        assert calls == [1]

    def test_errors_from_lazy_parsers(self) -> None:
        """Parse failures inside lazy grammars propagate normally."""
        with pytest.raises(EitherError):
            (token("[") >> lazy(lambda: token("x")) | token("]")).run("[y")
