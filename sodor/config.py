"""
Config system - Layered typed configuration with validation.

Sources merge with precedence (later overrides earlier):
config files (YAML/JSON) < .env file < SODOR_* environment < overrides
"""

from typing import Any, Dict, Optional, Type, get_type_hints
from dataclasses import dataclass, fields, is_dataclass, MISSING
from pathlib import Path
import json
import logging
import os

from dotenv import dotenv_values

from .faults import ConfigInvalidFault

logger = logging.getLogger("sodor.config")


class Config:
    """Base class for typed configuration classes."""
    pass


@dataclass
class RoutingConfig(Config):
    """
    Route derivation settings.

    Attributes:
        default_method: Verb used by actions without a method tag
        index_action: Action name treated as root without a Root tag
        warn_unreachable: Log a warning for special actions with no route
    """
    default_method: str = "get"
    index_action: str = "index"
    warn_unreachable: bool = True

    def __post_init__(self):
        from .controller.decorators import HTTP_METHODS

        self.default_method = str(self.default_method).lower()
        if self.default_method not in HTTP_METHODS:
            raise ConfigInvalidFault(
                "routing.default_method",
                f"'{self.default_method}' is not one of {', '.join(HTTP_METHODS)}",
            )
        if not self.index_action:
            raise ConfigInvalidFault("routing.index_action", "must not be empty")


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources with precedence:
    overrides > environment variables > .env file > config files
    """

    def __init__(self, env_prefix: str = "SODOR_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "SODOR_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from multiple sources.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        if paths:
            for pattern in paths:
                loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        from glob import glob

        matched = glob(pattern)
        if not matched:
            logger.debug("No config files match %s", pattern)

        for path_str in sorted(matched):
            path = Path(path_str)

            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.warning("Ignoring config file with unknown suffix: %s", path)

    def _load_json_file(self, path: Path):
        """Load config from JSON file."""
        with open(path) as f:
            data = json.load(f)
            self._merge_dict(self.config_data, data)

    def _load_yaml_file(self, path: Path):
        """Load config from YAML file."""
        import yaml
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        env_path = Path(path)
        if not env_path.exists():
            logger.debug("Env file %s not found", env_path)
            return

        for key, value in dotenv_values(env_path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _load_from_env(self):
        """Load config from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert SODOR_ROUTING__DEFAULT_METHOD to nested dict."""
        key = key[len(self.env_prefix):]

        # Double underscore separates nesting levels
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data

        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def get_config(self, section: str, config_class: Type[Config]) -> Config:
        """
        Get and validate one configuration section.

        Args:
            section: Top-level key holding the section
            config_class: Config dataclass to instantiate

        Returns:
            Validated config instance
        """
        data = self.get(section, {})
        if not isinstance(data, dict):
            raise ConfigInvalidFault(section, f"expected a mapping, got {type(data).__name__}")
        return self._instantiate_dataclass(config_class, data, section)

    def routing_config(self) -> RoutingConfig:
        return self.get_config("routing", RoutingConfig)

    def _instantiate_dataclass(self, config_class: Type, data: dict, section: str):
        """Instantiate dataclass config with validation."""
        if not is_dataclass(config_class):
            raise TypeError(f"{config_class.__name__} is not a dataclass")

        kwargs = {}
        hints = get_type_hints(config_class)

        for field_info in fields(config_class):
            name = field_info.name
            field_type = hints.get(name, field_info.type)

            if name in data:
                value = data[name]
                if not self._check_type(value, field_type):
                    raise ConfigInvalidFault(
                        f"{section}.{name}",
                        f"expected {getattr(field_type, '__name__', field_type)}, "
                        f"got {type(value).__name__}",
                    )
                kwargs[name] = value
            elif field_info.default is not MISSING:
                kwargs[name] = field_info.default
            elif field_info.default_factory is not MISSING:
                kwargs[name] = field_info.default_factory()
            else:
                raise ConfigInvalidFault(f"{section}.{name}", "required value not provided")

        unknown = set(data) - {f.name for f in fields(config_class)}
        if unknown:
            logger.warning("Unknown keys in config section '%s': %s", section, ", ".join(sorted(unknown)))

        return config_class(**kwargs)

    def _check_type(self, value: Any, expected_type: Type) -> bool:
        """Basic type checking. RoutingConfig fields are plain str and bool."""
        return isinstance(value, expected_type)

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self.config_data.copy()
