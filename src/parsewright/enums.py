"""Enumerations for parsewright type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ExpectationKind(StrEnum):
    """Shape of the token expectation carried by ExpectedToken.

    StrEnum provides automatic string conversion: str(ExpectationKind.ONE) == "one"
    """

    ONE = "one"
    """A single literal token: 'a'"""

    ONE_OF = "one_of"
    """Any one of several alternatives: ['foo', 'bar']"""

    SEQUENCE = "sequence"
    """Several tokens in order: [key, =, value]"""


class OutputFormat(StrEnum):
    """Output format options for error formatting."""

    TEXT = "text"  # Indented multi-line tree (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


__all__ = [
    "ExpectationKind",
    "OutputFormat",
]
