"""Error code catalogue.

Numeric codes give every parse failure kind a stable identifier for logs,
JSON output and tooling, independent of the human-readable message.

Python 3.13+. Zero external dependencies.
"""

from enum import Enum

__all__ = ["ErrorCode"]


class ErrorCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Expectation failures (a primitive did not find what it needs)
        2000-2999: Input completeness failures
        3000-3999: Composite failures (wrap or combine other errors)
    """

    # Expectation failures (1000-1999)
    EXPECTED_CHARACTER = 1001
    EXPECTED_WHITESPACE = 1002
    EXPECTED_TERMINATION_SEQUENCE = 1003
    EXPECTED_TOKEN = 1004
    EXPECTED_TYPE = 1005
    EXPECTED_NUMBER = 1006
    EXPECTED_ALPHANUMERIC_STRING = 1007
    EXPECTED_CHARACTERS_SATISFYING_PREDICATE = 1008

    # Input completeness failures (2000-2999)
    INCOMPLETE_PARSE = 2001

    # Composite failures (3000-3999)
    CONTEXTUAL = 3001
    EITHER = 3002

    @property
    def is_composite(self) -> bool:
        """True for codes whose errors carry nested errors."""
        return self.value >= 3000
