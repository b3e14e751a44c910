"""
Compiler Configuration Management.

Reads the environment once into a `CompilerConfig` instance and exposes it
through a module-level singleton, so every compile call in a process agrees on
fonts, bullet presets and rule glyphs.
"""

import logging
import os
from typing import Any

from core.errors import ConfigurationError
from core.utils import parse_bool_env

logger = logging.getLogger(__name__)

# =============================================================================
# Defaults
# =============================================================================

# Monospace family applied to code spans and code blocks
DEFAULT_CODE_FONT_FAMILY = "Consolas"

# Bullet list presets for the Google Docs API
DEFAULT_BULLET_PRESET = "BULLET_DISC_CIRCLE_SQUARE"
DEFAULT_NUMBERED_PRESET = "NUMBERED_DECIMAL_ALPHA_ROMAN"

# Thematic breaks render as one line of this glyph
DEFAULT_RULE_GLYPH = "─"  # U+2500 BOX DRAWINGS LIGHT HORIZONTAL
DEFAULT_RULE_WIDTH = 39

ENV_PREFIX = "DOCS_MARKDOWN_"


class CompilerConfig:
    """
    Centralized compiler configuration.

    Every setting can be overridden through a `DOCS_MARKDOWN_*` environment
    variable; invalid overrides raise `ConfigurationError` at load time.
    """

    def __init__(self):
        self.code_font_family = self._get_str("CODE_FONT_FAMILY", DEFAULT_CODE_FONT_FAMILY)
        self.bullet_preset = self._get_preset("BULLET_PRESET", DEFAULT_BULLET_PRESET, "BULLET_")
        self.numbered_preset = self._get_preset("NUMBERED_PRESET", DEFAULT_NUMBERED_PRESET, "NUMBERED_")
        self.rule_glyph = self._get_str("RULE_GLYPH", DEFAULT_RULE_GLYPH)
        self.rule_width = self._get_positive_int("RULE_WIDTH", DEFAULT_RULE_WIDTH)
        self.tasklists_enabled = parse_bool_env(os.getenv(f"{ENV_PREFIX}ENABLE_TASKLISTS", "true"))

    @staticmethod
    def _get_str(name: str, default: str) -> str:
        variable = f"{ENV_PREFIX}{name}"
        value = os.getenv(variable, default)
        if not value:
            raise ConfigurationError(variable, value, "must not be empty")
        return value

    @classmethod
    def _get_preset(cls, name: str, default: str, prefix: str) -> str:
        value = cls._get_str(name, default)
        if not value.startswith(prefix):
            raise ConfigurationError(f"{ENV_PREFIX}{name}", value, f"preset must start with {prefix}")
        return value

    @staticmethod
    def _get_positive_int(name: str, default: int) -> int:
        variable = f"{ENV_PREFIX}{name}"
        raw = os.getenv(variable)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError(variable, raw, "must be an integer") from None
        if value < 1:
            raise ConfigurationError(variable, raw, "must be positive")
        return value

    @property
    def rule_line(self) -> str:
        """The full thematic-break line, trailing newline included."""
        return self.rule_glyph * self.rule_width + "\n"

    def bullet_preset_for(self, ordered: bool) -> str:
        """Return the bullet preset for an ordered or unordered list."""
        return self.numbered_preset if ordered else self.bullet_preset

    def get_environment_summary(self) -> dict[str, Any]:
        """
        Get a summary of the effective configuration.

        Returns:
            Dictionary with every setting after environment overrides.
        """
        return {
            "code_font_family": self.code_font_family,
            "bullet_preset": self.bullet_preset,
            "numbered_preset": self.numbered_preset,
            "rule_glyph": self.rule_glyph,
            "rule_width": self.rule_width,
            "tasklists_enabled": self.tasklists_enabled,
        }


# Global configuration instance
_compiler_config: CompilerConfig | None = None


def get_compiler_config() -> CompilerConfig:
    """
    Get the global compiler configuration instance.

    Returns:
        The singleton compiler configuration instance
    """
    global _compiler_config
    if _compiler_config is None:
        _compiler_config = CompilerConfig()
        logger.debug(f"Loaded compiler config: {_compiler_config.get_environment_summary()}")
    return _compiler_config


def reload_compiler_config() -> CompilerConfig:
    """
    Reload the compiler configuration from environment variables.

    This is useful for testing or when environment variables change.

    Returns:
        The reloaded compiler configuration instance
    """
    global _compiler_config
    _compiler_config = CompilerConfig()
    return _compiler_config
