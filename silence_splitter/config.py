"""
Configuration handling for the silence splitter
"""
import copy
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError


class Config:
    """Application configuration: defaults, then YAML file, then CLI arguments"""

    DEFAULT_CONFIG = {
        'input': None,
        'output_dir': None,
        'min_silence': None,
        'noise_db': None,
        'suggested_min_silence': 2.0,
        'suggested_noise_db': -40.0,
        'min_segment': 0.01,
        'continue_numbering': True,
        'assume_yes': False,
        'log_level': 'INFO',
        'audio_extensions': ['mp3', 'wav', 'flac', 'aac', 'm4a', 'ogg'],
        'ffmpeg': {
            'binary': None,
            'timeout': None,
            'split_mode': 'copy',   # 'copy' (lossless) or 'reencode' (pydub)
        },
    }

    NESTED_KEYS = ('ffmpeg',)

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize the configuration

        Args:
            config_file: Path to a YAML configuration file (optional)
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str) -> None:
        """
        Load configuration from a YAML file

        Args:
            config_file: Path to the configuration file
        """
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading configuration file: {e}") from e

        if not file_config:
            return
        if not isinstance(file_config, dict):
            raise ConfigError("Error loading configuration file: top level must be a mapping")
        for key, value in file_config.items():
            if key in self.NESTED_KEYS and isinstance(value, dict):
                self._deep_merge(self.config.setdefault(key, {}), value)
            else:
                self.config[key] = value

    def _deep_merge(self, base: dict, update: dict) -> None:
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def update_from_args(self, args: Dict[str, Any]) -> None:
        """
        Update the configuration from CLI arguments.
        CLI arguments take precedence over the file; ``None`` means "not given".

        Dotted keys such as ``ffmpeg.split_mode`` address nested sections.
        """
        for key, value in args.items():
            if value is None:
                continue
            if '.' in key:
                section, name = key.split('.', 1)
                self.config.setdefault(section, {})[name] = value
            else:
                self.config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return a configuration value; dotted keys read nested sections"""
        if '.' in key:
            section, name = key.split('.', 1)
            value = self.config.get(section)
            if isinstance(value, dict):
                return value.get(name, default)
            return default
        return self.config.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self.config)


def find_default_config(directory: Optional[str] = None) -> Optional[str]:
    """Return ``config.yml`` or ``config.yaml`` from ``directory`` if present"""
    directory = directory or os.getcwd()
    for name in ('config.yml', 'config.yaml'):
        candidate = os.path.join(directory, name)
        if os.path.exists(candidate):
            return candidate
    return None
