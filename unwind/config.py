#!/usr/bin/env python3
"""
unwind Configuration Management
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .utils.logger import get_logger

logger = get_logger(__name__)


class Config:
    """Configuration manager for unwind"""

    DEFAULT_CONFIG = {
        "general": {"verbose": False},
        "scenarios": {
            "workdir": "",
            "dividend": 98.0,
            "divisor": 0.0,
            "status": 404,
        },
        "execution": {"max_workers": 4},
        "output": {"json_indent": 2},
    }

    def __init__(self, config_path: Optional[str] = None, create: bool = True):
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.config_path = config_path or self._get_default_config_path()

        # Load configuration if exists
        if os.path.exists(self.config_path):
            self.load_config()
        elif create:
            self.save_config()  # Create default config

    def _get_default_config_path(self) -> str:
        """Get default configuration file path"""
        return str(Path.home() / ".unwind" / "config.json")

    def load_config(self):
        """Load configuration from file"""
        try:
            with open(self.config_path, "r") as f:
                user_config = json.load(f)
            if not isinstance(user_config, dict):
                raise ValueError("top-level JSON value must be an object")
            self._merge_config(user_config)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load config from {self.config_path}: {e}")

    def save_config(self):
        """Save configuration to file"""
        try:
            config_dir = Path(self.config_path).parent
            config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, "w") as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def _merge_config(self, user_config: Dict[str, Any]):
        """Merge user configuration with defaults"""
        for section, settings in user_config.items():
            if section in self.config and isinstance(settings, dict):
                self.config[section].update(settings)
            else:
                self.config[section] = settings

    def apply_overrides(self, overrides: Dict[str, Any]):
        """Apply in-memory overrides without touching the config file"""
        self._merge_config(copy.deepcopy(overrides))

    def get(self, section: str, key: str = None, default=None):
        """Get configuration value"""
        if key is None:
            return self.config.get(section, default)
        return self.config.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value):
        """Set configuration value"""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value

    def get_workdir(self) -> Path:
        """Directory used by the file scenarios, defaulting to ~/.unwind/work"""
        workdir = self.get("scenarios", "workdir")
        if not workdir:
            return Path.home() / ".unwind" / "work"
        return Path(workdir).expanduser()

    def __getitem__(self, key):
        """Allow dict-like access"""
        return self.config[key]

    def __contains__(self, key):
        """Allow 'in' operator"""
        return key in self.config
