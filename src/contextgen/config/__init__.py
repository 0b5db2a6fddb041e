"""Configuration exports."""

from contextgen.config.loader import (
    DEFAULT_CONFIG_PATH,
    PROFILE_ENV_VAR,
    load_context_config,
    resolve_profile,
)
from contextgen.config.mapper import MappedConfig, expand_shorthand, map_config
from contextgen.config.models import ContentConfig, ContextConfig, HistoryConfig

__all__ = [
    "ContentConfig",
    "ContextConfig",
    "DEFAULT_CONFIG_PATH",
    "HistoryConfig",
    "MappedConfig",
    "PROFILE_ENV_VAR",
    "expand_shorthand",
    "load_context_config",
    "map_config",
    "resolve_profile",
]
