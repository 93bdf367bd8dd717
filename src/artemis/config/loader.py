"""Load ARTEMIS configuration from YAML, the environment and CLI overrides."""

import re
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml
from envyaml import EnvYAML

from .models import Config

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/artemis/config.yaml")

_ENV_WITH_DEFAULT = re.compile(r"^\$([A-Z_][A-Z0-9_]*):(.+)$")


def _resolve_defaults(value: Any) -> Any:
    """Replace leftover ``$VAR:fallback`` strings with their fallback.

    EnvYAML substitutes variables that are set and leaves the rest untouched,
    so anything still matching the pattern here had no value in the environment.
    """
    if isinstance(value, dict):
        return {key: _resolve_defaults(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve_defaults(item) for item in value]
    if isinstance(value, str):
        match = _ENV_WITH_DEFAULT.match(value)
        return match.group(2) if match else value
    return value


def _read_yaml(path: Path) -> dict[str, Any]:
    env_config = EnvYAML(str(path), strict=False)

    # EnvYAML also exposes the whole environment; keep top-level YAML keys only
    top_level = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    data = {key: env_config[key] for key in top_level if key in env_config}
    return _resolve_defaults(data)


def _set_dotted(data: dict[str, Any], dotted_key: str, value: Any) -> None:
    *parents, leaf = dotted_key.split(".")
    node = data
    for part in parents:
        node = node.setdefault(part, {})
    node[leaf] = value


def load_config(config_path: Optional[Path] = None, overrides: Optional[dict[str, Any]] = None) -> Config:
    """
    Build the validated configuration.

    An explicit ``config_path`` must exist. Without one, the default file is
    used when present, otherwise settings come from ``ARTEMIS_*`` environment
    variables alone.

    Args:
        config_path: YAML file to read; supports ``$VAR`` and ``$VAR:default``
        overrides: Values from the command line, keyed like ``state.db_path``
    """
    path = (config_path or DEFAULT_CONFIG_PATH).expanduser()

    if path.exists():
        config_data = _read_yaml(path)
        logger.debug("Loaded configuration file", path=str(path))
    elif config_path is not None:
        raise FileNotFoundError(f"Configuration file not found: {path}")
    else:
        config_data = {}
        logger.debug("No configuration file, using environment", path=str(path))

    for key, value in (overrides or {}).items():
        _set_dotted(config_data, key, value)

    return Config(**config_data)
