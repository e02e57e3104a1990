"""Static configuration shared across claude-cmd components."""

from __future__ import annotations

DEFAULT_REPOSITORY_URL = (
    "https://raw.githubusercontent.com/claude-code-commands/commands/refs/heads/main"
)

# Environment variables
LANGUAGE_ENV_VAR = "CLAUDE_CMD_LANG"
CACHE_DIR_ENV_VAR = "CLAUDE_CMD_CACHE_DIR"
CONFIG_DIR_ENV_VAR = "CLAUDE_CMD_CONFIG_DIR"
LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")

FALLBACK_LANGUAGE = "en"

# Cache
MANIFEST_CACHE_MAX_AGE_MS = 60 * 60 * 1000
MANIFEST_CACHE_FILENAME = "manifest.json"

# HTTP
DEFAULT_HTTP_TIMEOUT = 5.0

# Files
CONFIG_FILENAME = "config.claude-cmd.json"
COMMAND_FILE_SUFFIX = ".md"
MAX_SCAN_DEPTH = 10
LOCAL_MANIFEST_VERSION = "1.0.0"

KNOWN_LANGUAGES = {
    "en": "English",
    "fr": "Français",
    "es": "Español",
    "de": "Deutsch",
    "it": "Italiano",
    "pt": "Português",
    "ja": "日本語",
    "ko": "한국어",
    "zh": "中文",
    "ru": "Русский",
    "pl": "Polski",
    "nl": "Nederlands",
    "sv": "Svenska",
    "no": "Norsk",
    "da": "Dansk",
    "fi": "Suomi",
    "tr": "Türkçe",
    "ar": "العربية",
    "he": "עברית",
    "hi": "हिन्दी",
}


def language_name(code: str) -> str:
    """Return the display name for a language code, or the code upper-cased."""
    return KNOWN_LANGUAGES.get(code, code.upper())
