"""User/project configuration documents and precedence resolution."""

from .resolver import ConfigResolver, merge_configs, posix_locale_from_env
from .store import (
    PREFERRED_LANGUAGE_KEY,
    REPOSITORY_URL_KEY,
    ConfigStore,
    is_valid_url,
    validate_config,
)

__all__ = [
    "ConfigResolver",
    "ConfigStore",
    "PREFERRED_LANGUAGE_KEY",
    "REPOSITORY_URL_KEY",
    "is_valid_url",
    "merge_configs",
    "posix_locale_from_env",
    "validate_config",
]
