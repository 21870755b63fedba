"""Configuration loader."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel, SavedCollection

CONFIG_ENV_VAR = "PIPEDASH_CONFIG"


def default_config_path() -> Path:
    """Config path from the environment, or the per-user default."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "pipedash" / "config.yaml"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None, model: Optional[ConfigModel] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = default_config_path()
        self.config_path = config_path
        self._config: Optional[ConfigModel] = model

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def pipeline_dir(self) -> Path:
        """Get pipeline root path."""
        return Path(self.config.pipeline_dir).expanduser()

    @property
    def script_path(self) -> Path:
        """Pipeline entry point script."""
        return self.pipeline_dir / "scripts" / "pipeline.py"

    @property
    def raw_pdfs_dir(self) -> Path:
        """Directory holding copied source PDFs, one folder per collection."""
        return self.pipeline_dir / "raw-pdfs"

    @property
    def manifests_dir(self) -> Path:
        """Directory holding generated manifests."""
        return self.pipeline_dir / "data" / "manifests"

    def remember_collection(self, collection: SavedCollection) -> None:
        """Upsert a saved collection and persist the config."""
        self.config.upsert_collection(collection)
        self.save()

    def save(self) -> None:
        """Write the current config back to disk."""
        save_config(self.config, self.config_path)


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
