"""Shared constants for parsewright.

Single source of truth for the limits and character classes used by the
primitive parsers and the diagnostics layer. Kept in a leaf module so every
subpackage can import it without cycles.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "RECURSION_RESERVE_FRAMES",
    # Character classes
    "ASCII_DIGITS",
    "NEWLINE_CHARACTERS",
    "CRLF",
    # Formatting
    "DEFAULT_MAX_CONTENT_LENGTH",
    "INDENT_WIDTH",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum number of nested lazy() grammar references active in a single run.
# Recursive grammars (parenthesized expressions, nested lists) recurse once per
# nesting level, so this bounds stack usage for adversarial input.
MAX_DEPTH: int = 100

# Stack frames kept free below sys.getrecursionlimit() when clamping MAX_DEPTH.
# Each grammar level costs several Python frames (alternative, atomic, bind).
RECURSION_RESERVE_FRAMES: int = 50

# ============================================================================
# CHARACTER CLASSES
# ============================================================================

# ASCII digits only. str.isdigit() accepts superscripts and other scripts,
# which int() may reject.
ASCII_DIGITS: str = "0123456789"

# Characters treated as a line break by space() and newline().
NEWLINE_CHARACTERS: frozenset[str] = frozenset(
    ("\n", "\r", "\v", "\f", "\u0085", "\u2028", "\u2029")
)

# Windows line ending, consumed as a single line break.
CRLF: str = "\r\n"

# ============================================================================
# FORMATTING
# ============================================================================

# Truncation limit applied by ErrorFormatter(sanitize=True).
DEFAULT_MAX_CONTENT_LENGTH: int = 100

# Indentation applied per nesting level in error descriptions.
INDENT_WIDTH: int = 2
