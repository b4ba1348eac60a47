"""Configuration management for todo-tui."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "~/.todo-tui"


@dataclass
class ConfigModel:
    """Global configuration model for todo-tui."""

    # File paths
    data_dir: str = DEFAULT_DATA_DIR
    data_file: str = "todos.md"
    persist: bool = True

    # List behavior
    wrap_cursor: bool = False
    hide_completed: bool = False
    max_name_length: int = 50
    max_description_length: int = 255

    # UI
    palette: str = "blue"
    lock_color: bool = False
    use_emoji: bool = True

    # Logging
    log_level: str = "WARNING"
    log_file: str = "todo-tui.log"

    def __post_init__(self):
        self.data_dir = os.path.expanduser(self.data_dir)

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("config file must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_data_path(self) -> Path:
        """Get the todo list file path; absolute ``data_file`` wins."""
        data_file = Path(os.path.expanduser(self.data_file))
        if data_file.is_absolute():
            return data_file
        return Path(self.data_dir) / data_file

    def get_log_path(self) -> Path:
        log_file = Path(os.path.expanduser(self.log_file))
        if log_file.is_absolute():
            return log_file
        return Path(self.data_dir) / log_file


class Config:
    """Configuration manager for todo-tui."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file or create default."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    config = ConfigModel.from_yaml(f.read())
                logger.info(f"Loaded configuration from {config_path}")
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}")
                logger.warning("Using default configuration.")
        else:
            cls.save(config, config_path)

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> bool:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(config.to_yaml())
            logger.info(f"Configuration saved to {config_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")
            return False

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)

    @classmethod
    def reset(cls) -> None:
        """Drop the cached configuration."""
        cls._instance = None


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    return Config.save(config, config_path)
