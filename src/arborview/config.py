"""
Configuration loading.

Settings come from ``.arborview/config.yaml`` when it exists, then from
ARBORVIEW_* environment variables, then from command line flags. The file
only ever holds settings; session state is never written to disk.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".arborview/config.yaml")
DEFAULT_SERVICE_URL = "http://localhost:8080"

ENV_PREFIX = "ARBORVIEW_"


class ArborviewConfig(BaseModel):
    """Client settings."""
    service_url: str = DEFAULT_SERVICE_URL
    timeout: Optional[float] = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    def to_yaml(self) -> str:
        return yaml.dump(self.model_dump(), sort_keys=False, default_flow_style=False)


def _read_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    return data


def _read_env() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name in ArborviewConfig.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is None:
            continue
        # An empty timeout means "wait forever"
        values[name] = None if name == "timeout" and raw.strip().lower() in ("", "none") else raw
    return values


def load_config(path: Optional[Path] = None, **overrides: Any) -> ArborviewConfig:
    """
    Build the effective configuration.

    Args:
        path: Config file; defaults to ``.arborview/config.yaml``.
        **overrides: Values from the command line. None means "not given".

    Raises:
        ValueError: The file or a value in it is invalid.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    data = _read_file(config_path)
    data.update(_read_env())
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = ArborviewConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    logger.debug(f"Loaded configuration from {config_path}: {config.model_dump()}")
    return config
