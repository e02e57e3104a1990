"""Language code validation and effective-language detection."""

from .detector import (
    DetectionContext,
    detect,
    is_valid_language_code,
    parse_locale,
    sanitize_language_code,
)

__all__ = [
    "DetectionContext",
    "detect",
    "is_valid_language_code",
    "parse_locale",
    "sanitize_language_code",
]
