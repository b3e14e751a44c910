"""
Custom error types for the markdown compiler.

Compilation itself degrades silently on unusual documents; these errors cover
bad caller input, bad configuration and internal range-arithmetic bugs.
"""

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class DocsMarkdownError(Exception):
    """Base exception for all markdown compiler errors."""

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(DocsMarkdownError):
    """Raised when caller input validation fails."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(DocsMarkdownError):
    """Raised when an environment setting cannot be used."""

    def __init__(self, variable: str, value: str, reason: str):
        super().__init__(f"Invalid value for {variable}={value!r}: {reason}")
        self.variable = variable
        self.value = value
        self.reason = reason


# =============================================================================
# Internal Errors
# =============================================================================


class InvariantViolationError(DocsMarkdownError):
    """
    Raised when a computed range breaks the index invariants.

    This always indicates a compiler bug, never a problem with the input document.
    """

    def __init__(self, message: str, start: int | None = None, end: int | None = None, limit: int | None = None):
        super().__init__(message)
        self.start = start
        self.end = end
        self.limit = limit
