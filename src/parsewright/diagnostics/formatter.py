"""Parse error formatting service.

Centralizes rendering of ParseError trees with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
import textwrap
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from parsewright.constants import DEFAULT_MAX_CONTENT_LENGTH, INDENT_WIDTH
from parsewright.enums import OutputFormat

from .errors import ContextualError, EitherError, IncompleteParse, ParseError

__all__ = [
    "ErrorFormatter",
    "OutputFormat",
]


def _indent(text: str, size: int = INDENT_WIDTH) -> str:
    return textwrap.indent(text, " " * size)


@dataclass(frozen=True, slots=True)
class ErrorFormatter:
    """Parse error formatting service.

    Renders a ParseError tree into human-readable or machine-readable output.
    Nested ContextualError and EitherError nodes are rendered recursively.

    Attributes:
        output_format: Output style (text, simple, json)
        sanitize: Truncate input excerpts to prevent information leakage
        max_content_length: Maximum excerpt length when sanitizing

    Example:
        >>> error = ContextualError("header", EitherError(ExpectedNumber(), ExpectedToken("X")))
        >>> print(ErrorFormatter().format(error))
        - Parsing Error in header:
          Parsing Failed in Either:
            1. Expected Number
            2. Expected Token 'X'

        >>> print(ErrorFormatter(output_format=OutputFormat.SIMPLE).format(error))
        header: (EXPECTED_NUMBER: Expected Number | EXPECTED_TOKEN: Expected Token 'X')

        >>> print(ErrorFormatter(output_format=OutputFormat.JSON).format(ExpectedNumber()))
        {"code": "EXPECTED_NUMBER", "code_value": 1006, "message": "Expected Number"}
    """

    output_format: OutputFormat = OutputFormat.TEXT
    sanitize: bool = False
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH

    def format(self, error: ParseError) -> str:
        """Format a single error tree.

        Args:
            error: Error to format

        Returns:
            Formatted error string
        """
        match self.output_format:
            case OutputFormat.TEXT:
                return self._format_text(error)
            case OutputFormat.SIMPLE:
                return self._format_simple(error)
            case OutputFormat.JSON:
                return json.dumps(self.to_dict(error), ensure_ascii=False)

    def format_all(self, errors: Iterable[ParseError]) -> str:
        """Format multiple errors separated by blank lines."""
        return "\n\n".join(self.format(error) for error in errors)

    def to_dict(self, error: ParseError) -> dict[str, Any]:
        """Convert an error tree to nested plain dictionaries.

        Composite errors nest their children under "context"/"error" or
        "first"/"second". IncompleteParse adds the 1-indexed line and column
        of the unconsumed input along with its character offset.
        """
        data: dict[str, Any] = {
            "code": error.code.name,
            "code_value": error.code.value,
            "message": error.message,
        }
        match error:
            case ContextualError():
                data["context"] = error.label
                data["error"] = self.to_dict(error.error)
            case EitherError():
                data["first"] = self.to_dict(error.first)
                data["second"] = self.to_dict(error.second)
            case IncompleteParse():
                line, column = error.cursor.compute_line_col()
                data["message"] = "Incomplete Parse"
                data["remaining"] = self._maybe_sanitize(error.remaining)
                data["offset"] = error.cursor.pos
                data["line"] = line
                data["column"] = column
        return data

    def _format_text(self, error: ParseError) -> str:
        """Format as an indented tree.

        Example output:
            - Parsing Error in list:
              Parsing Failed in Either:
                1. Expected Number
                2. Expected Token 'X'
        """
        match error:
            case ContextualError():
                return f"- {error.message}:\n{_indent(self._format_text(error.error))}"
            case EitherError():
                branches = (
                    f"1. {self._format_text(error.first)}\n"
                    f"2. {self._format_text(error.second)}"
                )
                return f"{error.message}:\n{_indent(branches)}"
            case IncompleteParse():
                remaining = self._maybe_sanitize(error.remaining)
                return f"Incomplete Parse - Remaining: \n{remaining}"
            case _:
                return error.message

    def _format_simple(self, error: ParseError) -> str:
        """Format on a single line.

        Example output:
            value: (EXPECTED_NUMBER: Expected Number | EXPECTED_TOKEN: Expected Token 'X')
        """
        match error:
            case ContextualError():
                return f"{error.label}: {self._format_simple(error.error)}"
            case EitherError():
                return (
                    f"({self._format_simple(error.first)} | "
                    f"{self._format_simple(error.second)})"
                )
            case IncompleteParse():
                line, column = error.cursor.compute_line_col()
                remaining = self._maybe_sanitize(error.remaining)
                return (
                    f"{error.code.name}: Incomplete Parse at line {line}, "
                    f"column {column} - Remaining: {remaining!r}"
                )
            case _:
                return f"{error.code.name}: {error.message}"

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
