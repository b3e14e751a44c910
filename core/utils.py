import logging

from core.errors import ValidationError

logger = logging.getLogger(__name__)


def validate_positive_int(value: int, param_name: str, max_value: int | None = None) -> int:
    """Validate a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{param_name} must be a positive integer")

    if max_value is not None and value > max_value:
        raise ValidationError(f"{param_name} cannot exceed {max_value}")

    return value


def parse_bool_env(raw: str) -> bool:
    """Interpret an environment flag the way the rest of the config layer does."""
    return raw.strip().lower() in ("1", "true", "yes", "on")


def utf8_length(text: str) -> int:
    """Return the UTF-8 encoded size of text in bytes."""
    return len(text.encode("utf-8"))


def truncate_utf8(text: str, max_bytes: int) -> str:
    """
    Truncate text to at most max_bytes of UTF-8 without splitting a character.

    Args:
        text: The text to truncate.
        max_bytes: Byte budget; values <= 0 return an empty string.

    Returns:
        The longest prefix of text whose UTF-8 encoding fits in max_bytes.
    """
    if max_bytes <= 0:
        return ""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    # A cut inside a multi-byte sequence leaves an incomplete tail that "ignore" drops
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")
    logger.debug(f"Truncated {len(encoded)} bytes to {utf8_length(truncated)} (budget {max_bytes})")
    return truncated
