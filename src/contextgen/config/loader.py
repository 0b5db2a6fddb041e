"""Configuration file loading and override resolution."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import orjson
import yaml

from contextgen.config.models import ContextConfig

DEFAULT_CONFIG_PATH = Path("contextgen.json")
PROFILE_ENV_VAR = "CONTEXTGEN_PROFILE"
_YAML_SUFFIXES = {".yaml", ".yml"}


def _load_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        data = yaml.safe_load(text) or {}
    else:
        data = orjson.loads(text) if text.strip() else {}
    if not isinstance(data, dict):
        raise ValueError("Configuration file must deserialize to a mapping")
    return data


def load_context_config(path: Path | None = None) -> tuple[ContextConfig, Path]:
    """Load and validate a config file; returns it with its containing directory."""
    config_path = (path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    raw = _load_mapping(config_path)
    return ContextConfig.model_validate(raw), config_path.parent


def resolve_profile(
    cli_profile: str | None,
    env: Mapping[str, str] | None = None,
) -> str | None:
    """Apply precedence for the profile name: CLI > env."""
    if cli_profile:
        return cli_profile
    active_env = os.environ if env is None else env
    return active_env.get(PROFILE_ENV_VAR) or None
