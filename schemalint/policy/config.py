from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from schemalint.core.errors import ConfigError

from .config_schema import CLIConfig

DEFAULT_CONFIG_NAME = "schemalint.yml"


def load_cli_config(path: Optional[str]) -> CLIConfig:
    """Load schemalint.yml; a missing file yields the defaults."""
    if not path:
        return CLIConfig()
    p = Path(path)
    if not p.exists():
        return CLIConfig()
    try:
        cfg_raw = yaml.safe_load(p.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    if not isinstance(cfg_raw, dict):
        raise ConfigError(f"config {path} must be a mapping")
    try:
        return CLIConfig(**cfg_raw)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(x) for x in err["loc"])
        raise ConfigError(f"invalid config {path}: {loc}: {err['msg']}") from e
