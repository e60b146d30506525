"""Switcher Configuration - Single Authority for Runtime Settings

Loads switcher.yaml once and exposes typed values. The CLI may point it at a
different file before first use.

RESPONSIBILITY:
- Load switcher.yaml (or an explicit path)
- Provide get() singleton
- Expose typed config values (data file, matching mode, logging, prompt)

DOES NOT:
- Touch the rules file (RuleMemory's job)
- Configure logging handlers (the CLI does that once at startup)
- Know about commands
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "switcher.yaml"


class SwitcherConfig:
    """Singleton switcher configuration authority.

    Usage:
        config = SwitcherConfig.get()
        data_file = config.data_file
        strict = config.strict_wildcards
    """

    _instance: Optional["SwitcherConfig"] = None
    _config: Dict[str, Any] = {}
    _config_path: Path = DEFAULT_CONFIG_PATH

    # Defaults (used if yaml missing or invalid)
    DEFAULTS = {
        "storage": {
            "data_file": "~/.browser_switcher/rules.json",
        },
        "matching": {
            "strict_wildcards": False,
        },
        "logging": {
            "level": "WARNING",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
        "interactive": {
            "prompt": "> ",
        },
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load()
        return cls._instance

    @classmethod
    def get(cls) -> "SwitcherConfig":
        """Get singleton instance."""
        return cls()

    @classmethod
    def use_file(cls, config_path: Path) -> "SwitcherConfig":
        """Point the singleton at another YAML file and (re)load it."""
        cls._config_path = Path(config_path)
        if cls._instance is not None:
            cls._instance._load()
        return cls.get()

    @classmethod
    def reset(cls) -> None:
        """Reset singleton (for testing)."""
        cls._instance = None
        cls._config = {}
        cls._config_path = DEFAULT_CONFIG_PATH

    def _load(self) -> None:
        """Load configuration from the YAML file."""
        config_path = self._config_path

        raw_config: Dict[str, Any] = {}

        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    raw_config = yaml.safe_load(f) or {}
                    logging.info(f"Loaded switcher config from {config_path}")
            except (OSError, yaml.YAMLError) as e:
                logging.warning(f"Failed to load {config_path.name}: {e}, using defaults")
        else:
            logging.info(f"No switcher config found at {config_path}, using defaults")

        if not isinstance(raw_config, dict):
            logging.warning(f"Ignoring {config_path.name}: top level is not a mapping")
            raw_config = {}

        # Merge with defaults (deep merge for nested dicts)
        self._config = self._deep_merge(self.DEFAULTS, raw_config)

        logging.debug(f"SwitcherConfig loaded: {self._config}")

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @property
    def data_file(self) -> Path:
        """Location of the persisted browsers/rules document."""
        raw = self._config["storage"]["data_file"]
        return Path(str(raw)).expanduser()

    @property
    def strict_wildcards(self) -> bool:
        """Whether '*.suffix' patterns require a dot boundary before the suffix."""
        return bool(self._config["matching"]["strict_wildcards"])

    @property
    def log_level(self) -> str:
        return str(self._config["logging"]["level"]).upper()

    @property
    def log_format(self) -> str:
        return str(self._config["logging"]["format"])

    @property
    def prompt(self) -> str:
        return str(self._config["interactive"]["prompt"])

    def reload(self) -> None:
        """Force reload configuration (for testing)."""
        self._load()
