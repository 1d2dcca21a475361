"""YAML configuration loading utilities."""

import os
from pathlib import Path

import yaml

from grugtok.config.models import GrugTokConfig

CONFIG_ENV_VAR = "GRUGTOK_CONFIG"


def load_config(path: Path | str) -> GrugTokConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated GrugTokConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    return GrugTokConfig.model_validate(raw or {})


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parent.parent.parent.parent / "configs" / "default.yaml"


def resolve_config(path: Path | str | None = None) -> GrugTokConfig:
    """Load the config from ``path``, ``$GRUGTOK_CONFIG`` or ``configs/default.yaml``.

    Built-in defaults are used only when none of those is available.
    """
    chosen = path or os.environ.get(CONFIG_ENV_VAR)
    if chosen:
        return load_config(chosen)
    default_path = get_default_config_path()
    if default_path.exists():
        return load_config(default_path)
    return GrugTokConfig()
