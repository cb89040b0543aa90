"""Tests for the ParseError hierarchy, TokenExpectation and ErrorCode.

Python 3.13+.
"""

from __future__ import annotations

import pickle

import pytest

from parsewright.core import DepthLimitExceededError
from parsewright.diagnostics import (
    ContextualError,
    EitherError,
    ErrorCode,
    ExpectedAlphaNumericString,
    ExpectedCharacter,
    ExpectedCharactersSatisfyingPredicate,
    ExpectedNumber,
    ExpectedTerminationSequence,
    ExpectedToken,
    ExpectedType,
    ExpectedWhitespace,
    IncompleteParse,
    ParseError,
    ParsewrightError,
    TokenExpectation,
)
from parsewright.enums import ExpectationKind
from parsewright.parser.cursor import Cursor

# ============================================================================
# TOKEN EXPECTATION
# ============================================================================


class TestTokenExpectation:
    """Test TokenExpectation construction and rendering."""

    def test_one(self) -> None:
        """one() wraps a single token."""
        expectation = TokenExpectation.one("a")

        assert expectation.kind is ExpectationKind.ONE
        assert expectation.tokens == ("a",)
        assert str(expectation) == "'a'"

    def test_one_of_quotes_each_token(self) -> None:
        """one_of() renders a quoted list."""
        assert str(TokenExpectation.one_of(["foo", "bar"])) == "['foo', 'bar']"

    def test_sequence_renders_unquoted(self) -> None:
        """sequence() renders tokens without quotes."""
        assert str(TokenExpectation.sequence(["key", "=", "value"])) == "[key, =, value]"

    def test_one_of_accepts_any_iterable(self) -> None:
        """Generators are materialized into a tuple."""
        expectation = TokenExpectation.one_of(token for token in "xy")

        assert expectation.tokens == ("x", "y")

    def test_one_requires_exactly_one_token(self) -> None:
        """A ONE expectation with several tokens is rejected."""
        with pytest.raises(ValueError, match="exactly one token"):
            TokenExpectation(ExpectationKind.ONE, ("a", "b"))

    def test_equality(self) -> None:
        """Expectations compare by kind and tokens."""
        assert TokenExpectation.one_of(["a"]) != TokenExpectation.one("a")
        assert TokenExpectation.sequence(["a", "b"]) == TokenExpectation.sequence(("a", "b"))


# ============================================================================
# MESSAGES
# ============================================================================


class TestLeafMessages:
    """Test one-line messages of leaf errors."""

    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (ExpectedCharacter("x"), "Expected Character 'x'"),
            (ExpectedWhitespace(), "Expected Whitespace"),
            (ExpectedTerminationSequence(), "Expected Termination Sequence"),
            (ExpectedToken("let"), "Expected Token 'let'"),
            (ExpectedToken(TokenExpectation.one_of(["a", "b"])), "Expected Token ['a', 'b']"),
            (ExpectedType("Date"), "Expected Type 'Date'"),
            (ExpectedNumber(), "Expected Number"),
            (ExpectedAlphaNumericString(), "Expected AlphaNumericString"),
            (
                ExpectedCharactersSatisfyingPredicate(),
                "Expected Characters Satisfying Predicate",
            ),
        ],
    )
    def test_message_and_str(self, error: ParseError, message: str) -> None:
        """Leaf errors describe themselves with their message."""
        assert error.message == message
        assert str(error) == message
        assert error.describe() == message

    def test_incomplete_parse_message(self) -> None:
        """IncompleteParse reports the remaining input on its own line."""
        error = IncompleteParse(Cursor("42a", 2))

        assert error.remaining == "a"
        assert str(error) == "Incomplete Parse - Remaining: \na"


# ============================================================================
# NESTED DESCRIPTIONS
# ============================================================================


class TestNestedDescriptions:
    """Test indentation of composite error descriptions."""

    def test_contextual(self) -> None:
        """Contextual errors indent their inner error by two spaces."""
        error = ContextualError("list", ExpectedNumber())

        assert str(error) == "- Parsing Error in list:\n  Expected Number"

    def test_either(self) -> None:
        """Either errors number and indent both branches."""
        error = EitherError(ExpectedNumber(), ExpectedToken("X"))

        assert str(error) == (
            "Parsing Failed in Either:\n"
            "  1. Expected Number\n"
            "  2. Expected Token 'X'"
        )

    def test_nested_contexts_accumulate_indentation(self) -> None:
        """Each nesting level adds two spaces."""
        error = ContextualError(
            "document",
            ContextualError("entry", EitherError(ExpectedNumber(), ExpectedWhitespace())),
        )

        assert str(error) == (
            "- Parsing Error in document:\n"
            "  - Parsing Error in entry:\n"
            "    Parsing Failed in Either:\n"
            "      1. Expected Number\n"
            "      2. Expected Whitespace"
        )


# ============================================================================
# STRUCTURAL EQUALITY
# ============================================================================


class TestStructuralEquality:
    """Errors compare as values, not identities."""

    def test_same_kind_same_payload(self) -> None:
        """Equal payloads give equal errors and equal hashes."""
        first = ContextualError("a", EitherError(ExpectedNumber(), ExpectedToken("x")))
        second = ContextualError("a", EitherError(ExpectedNumber(), ExpectedToken("x")))

        assert first == second
        assert hash(first) == hash(second)

    def test_string_shorthand_equals_explicit_one(self) -> None:
        """ExpectedToken("x") is ExpectedToken(TokenExpectation.one("x"))."""
        assert ExpectedToken("x") == ExpectedToken(TokenExpectation.one("x"))

    def test_different_kinds_differ(self) -> None:
        """Payload-free errors of different kinds are not equal."""
        assert ExpectedNumber() != ExpectedWhitespace()
        assert ExpectedCharacter("a") != ExpectedToken("a")

    def test_different_payloads_differ(self) -> None:
        """Same kind with a different payload is not equal."""
        assert ContextualError("a", ExpectedNumber()) != ContextualError("b", ExpectedNumber())

    def test_incomplete_parse_compares_snapshots(self) -> None:
        """IncompleteParse equality follows its cursor snapshot."""
        assert IncompleteParse(Cursor("42a", 2)) == IncompleteParse(Cursor("42a", 2))
        assert IncompleteParse(Cursor("42a", 2)) != IncompleteParse(Cursor("42a", 1))

    def test_not_equal_to_other_types(self) -> None:
        """Comparison with non-errors is False, not an exception."""
        assert ExpectedNumber() != "Expected Number"

    def test_usable_in_sets(self) -> None:
        """Hashable errors deduplicate in sets."""
        errors = {ExpectedNumber(), ExpectedNumber(), ExpectedToken("a")}

        assert len(errors) == 2

    def test_repr(self) -> None:
        """repr shows the constructor form."""
        assert repr(ExpectedNumber()) == "ExpectedNumber()"
        assert repr(ContextualError("x", ExpectedNumber())) == (
            "ContextualError('x', ExpectedNumber())"
        )

    def test_pickle_round_trip(self) -> None:
        """Error trees survive pickling."""
        error = ContextualError("a", EitherError(ExpectedToken("x"), ExpectedType("T")))

        assert pickle.loads(pickle.dumps(error)) == error

    @pytest.mark.parametrize(
        "error",
        [
            ExpectedNumber(),
            ExpectedToken(TokenExpectation.one_of(["a", "b"])),
            IncompleteParse(Cursor("42a", 2)),
            ContextualError("a", EitherError(ExpectedCharacter("x"), ExpectedType("T"))),
        ],
    )
    def test_copy(self, error: ParseError) -> None:
        """copy() gives an equal, distinct, never-raised error."""
        with pytest.raises(ParseError):
            raise error

        duplicate = error.copy()

        assert duplicate == error
        assert duplicate is not error
        assert type(duplicate) is type(error)
        assert duplicate.__traceback__ is None


# ============================================================================
# HIERARCHY AND CODES
# ============================================================================


class TestHierarchy:
    """Test the exception hierarchy and error codes."""

    def test_parse_errors_are_parsewright_errors(self) -> None:
        """Every ParseError derives from the package base."""
        assert isinstance(ExpectedNumber(), ParsewrightError)
        assert isinstance(ExpectedNumber(), Exception)

    def test_depth_limit_is_not_a_parse_error(self) -> None:
        """DepthLimitExceededError escapes combinators that catch ParseError."""
        error = DepthLimitExceededError(5)

        assert isinstance(error, ParsewrightError)
        assert not isinstance(error, ParseError)
        assert error.max_depth == 5
        assert "(5)" in str(error)

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ExpectedCharacter("x"), ErrorCode.EXPECTED_CHARACTER),
            (ExpectedToken("x"), ErrorCode.EXPECTED_TOKEN),
            (IncompleteParse(Cursor("x")), ErrorCode.INCOMPLETE_PARSE),
            (ContextualError("c", ExpectedNumber()), ErrorCode.CONTEXTUAL),
            (EitherError(ExpectedNumber(), ExpectedNumber()), ErrorCode.EITHER),
        ],
    )
    def test_codes(self, error: ParseError, code: ErrorCode) -> None:
        """Each kind carries its catalogue code."""
        assert error.code is code

    def test_codes_are_unique(self) -> None:
        """No two kinds share a numeric code."""
        values = [code.value for code in ErrorCode]

        assert len(values) == len(set(values))

    def test_composite_codes(self) -> None:
        """Only Contextual and Either are composite."""
        composite = {code for code in ErrorCode if code.is_composite}

        assert composite == {ErrorCode.CONTEXTUAL, ErrorCode.EITHER}
