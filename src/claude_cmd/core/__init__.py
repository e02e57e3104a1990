"""Core utilities and configuration exports."""

from .config import (
    DEFAULT_REPOSITORY_URL,
    FALLBACK_LANGUAGE,
    KNOWN_LANGUAGES,
    LANGUAGE_ENV_VAR,
    LOCALE_ENV_VARS,
    MANIFEST_CACHE_MAX_AGE_MS,
    language_name,
)
from .paths import (
    get_cache_dir,
    get_personal_commands_dir,
    get_project_commands_dir,
    get_project_config_path,
    get_user_config_path,
)

__all__ = [
    "DEFAULT_REPOSITORY_URL",
    "FALLBACK_LANGUAGE",
    "KNOWN_LANGUAGES",
    "LANGUAGE_ENV_VAR",
    "LOCALE_ENV_VARS",
    "MANIFEST_CACHE_MAX_AGE_MS",
    "language_name",
    "get_cache_dir",
    "get_personal_commands_dir",
    "get_project_commands_dir",
    "get_project_config_path",
    "get_user_config_path",
]
