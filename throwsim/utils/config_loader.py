"""YAML configuration and scene file loading."""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .logger import get_logger


logger = get_logger("throwsim.config")

INCLUDE_PREFIX = "!include "


def _read_yaml(path: Path) -> Any:
    """Parse a YAML file, reporting syntax errors as ValueError."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e


class ConfigLoader:
    """Load, merge and save YAML configuration files."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory used to resolve bare file names.
        """
        self.config_dir = Path(config_dir) if config_dir else Path("configs")
        self._cache: Dict[str, Dict] = {}

    def resolve(self, config_path: Union[str, Path]) -> Path:
        """
        Resolve a config path.

        Absolute paths and paths that exist relative to the working directory
        are used as-is; anything else is looked up under config_dir.
        """
        config_path = Path(config_path)

        if config_path.is_absolute() or config_path.exists():
            return config_path
        if config_path.parts[:1] == self.config_dir.parts[:1]:
            return config_path

        return self.config_dir / config_path

    def load(
        self,
        config_path: Union[str, Path],
        use_cache: bool = True,
    ) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to config file.
            use_cache: Whether to use cached config.

        Returns:
            Configuration dictionary (a private copy).

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid YAML or its top level is not a mapping.
        """
        config_path = self.resolve(config_path)
        cache_key = str(config_path)

        if use_cache and cache_key in self._cache:
            return copy.deepcopy(self._cache[cache_key])

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        config = _read_yaml(config_path)

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError(
                f"Config file {config_path} must contain a mapping, "
                f"got {type(config).__name__}"
            )

        config = self._process_includes(config, config_path.parent)
        logger.debug(f"Loaded config {config_path}")

        if use_cache:
            self._cache[cache_key] = config

        return copy.deepcopy(config)

    def _process_includes(self, config: Any, base_dir: Path) -> Any:
        """
        Replace "!include <file>" string values with the file's contents.

        Args:
            config: Configuration value (nested dicts are walked).
            base_dir: Base directory for relative includes.

        Returns:
            Processed configuration.
        """
        if not isinstance(config, dict):
            return config

        result = {}

        for key, value in config.items():
            if isinstance(value, str) and value.startswith(INCLUDE_PREFIX):
                include_path = base_dir / value[len(INCLUDE_PREFIX):].strip()
                if not include_path.exists():
                    raise FileNotFoundError(f"Included file not found: {include_path}")
                result[key] = self._process_includes(_read_yaml(include_path), include_path.parent)
            elif isinstance(value, dict):
                result[key] = self._process_includes(value, base_dir)
            else:
                result[key] = value

        return result

    def merge(
        self,
        base: Dict[str, Any],
        override: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Deep merge two configurations. Override wins on conflicts.

        Args:
            base: Base configuration.
            override: Override configuration.

        Returns:
            Merged configuration. Neither input is modified.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def save(
        self,
        config: Dict[str, Any],
        path: Union[str, Path],
    ) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration dictionary.
            path: Output file path. Parent directories are created.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)

    def clear_cache(self) -> None:
        """Clear configuration cache."""
        self._cache.clear()


def load_config(
    config_path: Union[str, Path],
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to config file.
        overrides: Optional overrides to apply.

    Returns:
        Configuration dictionary.
    """
    loader = ConfigLoader()
    config = loader.load(config_path)

    if overrides:
        config = loader.merge(config, overrides)

    return config


def get_nested(
    config: Dict[str, Any],
    key: str,
    default: Any = None,
) -> Any:
    """
    Get nested config value using dot notation.

    Args:
        config: Configuration dictionary.
        key: Dot-separated key (e.g., 'render.scale').
        default: Default value if key not found.

    Returns:
        Config value or default.
    """
    value = config

    for k in key.split("."):
        if not isinstance(value, dict) or k not in value:
            return default
        value = value[k]

    return value


def set_nested(
    config: Dict[str, Any],
    key: str,
    value: Any,
) -> None:
    """
    Set nested config value using dot notation, creating parents as needed.

    Args:
        config: Configuration dictionary.
        key: Dot-separated key.
        value: Value to set.
    """
    *parents, leaf = key.split(".")
    current = config

    for k in parents:
        current = current.setdefault(k, {})

    current[leaf] = value
