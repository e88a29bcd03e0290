"""
Configuration for conventional_changelog.

:mod:`conventional_changelog.config.configuration` defines the immutable
configuration value and its defaults; :mod:`conventional_changelog.config.loader`
reads the optional per-repository settings file.
"""

from .configuration import (  # noqa: F401
    BREAKING_CHANGES,
    ConfigError,
    Configuration,
    TypeDefinition,
)
from .loader import load_configuration, load_settings  # noqa: F401
