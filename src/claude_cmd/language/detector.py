"""Language detection for claude-cmd.

The effective language is resolved from five layered sources, highest
precedence first:

1. ``--language`` CLI flag
2. ``CLAUDE_CMD_LANG`` environment variable
3. Project configuration ``preferredLanguage``
4. User configuration ``preferredLanguage``
5. POSIX locale (``LC_ALL``, ``LC_MESSAGES``, ``LANG``)

An empty or invalid value at one level is skipped. When nothing usable is
found the fallback is English. :func:`detect` never raises.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from claude_cmd.core.config import FALLBACK_LANGUAGE
from claude_cmd.errors import ClaudeCmdError, InvalidLanguageCodeError, InvalidLocaleError

logger = logging.getLogger(__name__)

_LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2,3}$")
_LOCALE_SEPARATOR_RE = re.compile(r"[_-]")


@dataclass(frozen=True)
class DetectionContext:
    """Every language source, in precedence order. Empty means unset."""

    cli_flag: str = ""
    env_var: str = ""
    project_config: str = ""
    user_config: str = ""
    posix_locale: str = ""


def is_valid_language_code(code: Any) -> bool:
    """Return True when *code* is exactly 2-3 lowercase ASCII letters."""
    return isinstance(code, str) and bool(_LANGUAGE_CODE_RE.fullmatch(code))


def sanitize_language_code(code: Any) -> str:
    """Normalize *code* to lowercase, or return ``""`` if it is not valid."""
    if not isinstance(code, str) or not code:
        return ""
    normalized = code.strip().lower()
    if not is_valid_language_code(normalized):
        return ""
    return normalized


def parse_locale(locale: str) -> str:
    """Extract the language code from a POSIX locale string.

    ``en_US.UTF-8@euro`` -> ``en``. The special locales ``C`` and ``POSIX``
    are rejected.

    Raises:
        InvalidLocaleError: empty input, ``C``/``POSIX`` or no language part
        InvalidLanguageCodeError: the language part is not 2-3 letters
    """
    trimmed = (locale or "").strip()
    if not trimmed:
        raise InvalidLocaleError("locale string cannot be empty", locale)

    if trimmed.upper() in {"C", "POSIX"}:
        raise InvalidLocaleError("special locale names 'C' and 'POSIX' are not supported", locale)

    value = trimmed.split("@", 1)[0]
    value = value.split(".", 1)[0]
    language_part = _LOCALE_SEPARATOR_RE.split(value, maxsplit=1)[0]
    if not language_part:
        raise InvalidLocaleError("invalid locale format: missing language component", locale)

    language = language_part.lower()
    if not is_valid_language_code(language):
        raise InvalidLanguageCodeError("invalid language code: must be 2-3 lowercase letters", language)
    return language


def detect(context: DetectionContext) -> str:
    """Return the winning language code for *context*; defaults to ``en``."""
    for source in (context.cli_flag, context.env_var, context.project_config, context.user_config):
        if source:
            language = sanitize_language_code(source)
            if language:
                return language
            logger.debug("Ignoring invalid language value %r", source)

    if context.posix_locale:
        try:
            return parse_locale(context.posix_locale)
        except ClaudeCmdError as exc:
            logger.debug("Ignoring locale %r: %s", context.posix_locale, exc)

    return FALLBACK_LANGUAGE


__all__ = [
    "DetectionContext",
    "detect",
    "is_valid_language_code",
    "parse_locale",
    "sanitize_language_code",
]
