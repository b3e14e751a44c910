"""Core utilities for the markdown compiler: errors, configuration, helpers."""

from core.config import CompilerConfig, get_compiler_config, reload_compiler_config
from core.errors import (
    ConfigurationError,
    DocsMarkdownError,
    InvariantViolationError,
    ValidationError,
)
from core.utils import truncate_utf8, utf8_length, validate_positive_int

__all__ = [
    "CompilerConfig",
    "ConfigurationError",
    "DocsMarkdownError",
    "get_compiler_config",
    "InvariantViolationError",
    "reload_compiler_config",
    "truncate_utf8",
    "utf8_length",
    "validate_positive_int",
    "ValidationError",
]
