"""Configuration loading: layered YAML files plus environment overrides."""

import os
from pathlib import Path
from typing import Any, Iterator

import yaml
from pydantic import ValidationError

from doctalk.config.schema import DocTalkConfig
from doctalk.core.exceptions import ConfigError
from doctalk.utils.logging import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "DOCTALK"
BASE_CONFIG = "base.yaml"


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge `override` into a copy of `base`.

    Nested mappings are merged key by key; any other value in `override`
    replaces the one in `base`. Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml(path: Path) -> dict[str, Any]:
    """Read one YAML mapping.

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return data


def env_overrides(prefix: str = ENV_PREFIX, environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Nested overrides from variables named PREFIX__SECTION__KEY.

    DOCTALK__ASR__MODEL_SIZE=small -> {"asr": {"model_size": "small"}}
    """
    environ = os.environ if environ is None else environ
    marker = f"{prefix}__"
    overrides: dict[str, Any] = {}

    for name, raw in environ.items():
        if not name.startswith(marker):
            continue

        *sections, key = name[len(marker):].lower().split("__")
        target = overrides
        for section in sections:
            target = target.setdefault(section, {})
        target[key] = _parse_scalar(raw)
        logger.debug(f"Env override {name}={raw}")

    return overrides


def apply_env_overrides(config: dict[str, Any], prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Return a copy of config with environment overrides merged in."""
    return deep_merge(config, env_overrides(prefix))


def _parse_scalar(raw: str) -> Any:
    """Interpret an environment string as bool, null, int, float or str."""
    lowered = raw.strip().lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    if lowered in ("null", "none", "~"):
        return None

    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def _config_files(config_dir: Path, env: str | None, config_path: Path | str | None) -> Iterator[Path]:
    """Config files to merge, lowest precedence first."""
    base = config_dir / BASE_CONFIG
    if base.is_file():
        yield base

    if env:
        overlay = config_dir / f"{env}.yaml"
        if overlay.is_file():
            yield overlay
        else:
            logger.debug(f"No {overlay.name} in {config_dir}")

    if config_path:
        yield Path(config_path)


def load_config(
    config_path: Path | str | None = None,
    env: str | None = None,
    config_dir: Path | str = "configs",
) -> DocTalkConfig:
    """Build the validated configuration.

    Precedence, lowest first: schema defaults, <config_dir>/base.yaml,
    <config_dir>/<env>.yaml, config_path, DOCTALK__* environment variables.
    Missing base/env files are skipped; a missing config_path is an error.

    Raises:
        ConfigError: If a file cannot be read or the result does not validate
    """
    merged: dict[str, Any] = {}
    for path in _config_files(Path(config_dir), env, config_path):
        logger.debug(f"Loading config: {path}")
        merged = deep_merge(merged, load_yaml(path))

    merged = apply_env_overrides(merged)

    try:
        return DocTalkConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
