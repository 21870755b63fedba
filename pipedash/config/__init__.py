"""Configuration management for pipedash."""

from .loader import Config, default_config_path, load_config, save_config
from .models import SOURCE_TYPE_LABELS, ConfigModel, SavedCollection, SourceType

__all__ = [
    "Config",
    "ConfigModel",
    "SavedCollection",
    "SourceType",
    "SOURCE_TYPE_LABELS",
    "default_config_path",
    "load_config",
    "save_config",
]
