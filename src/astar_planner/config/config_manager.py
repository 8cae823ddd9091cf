"""Hydra-backed loading of the planner configuration."""

import logging
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).parent / "conf"


class ConfigManager:
    """Loads, adjusts and validates one planner configuration."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding ``config.yaml``. If None, uses the
                defaults shipped with the package.
        """
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        logger.debug(f"Configuration manager initialized with config_dir: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose the configuration, applying Hydra overrides.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra override strings, e.g. ``search.frontier=heap``
            validate: Whether to validate the composed configuration

        Returns:
            Composed configuration

        Raises:
            ConfigValidationError: If validation is requested and fails
        """
        # Hydra keeps a process-wide instance
        GlobalHydra.instance().clear()

        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=config_name, overrides=overrides or [])

        if validate:
            validate_config(cfg)

        self.config = cfg
        logger.info(f"Configuration loaded: {config_name}"
                    + (f" with overrides {overrides}" if overrides else ""))
        return cfg

    def get_config(self) -> Optional[DictConfig]:
        """Currently loaded configuration, or None before ``load_config``."""
        return self.config

    def _require_config(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``grid.heuristic``."""
        return OmegaConf.select(self._require_config(), key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        """Set a dotted key, adding it when the composed config lacks it."""
        config = self._require_config()
        with open_dict(config):
            OmegaConf.update(config, key, value, merge=False)
        logger.debug(f"Parameter set: {key} = {value}")

    def apply(self, values: Dict[str, Any], validate: bool = True) -> DictConfig:
        """Set every non-None value in ``values`` and re-validate.

        Command line flags arrive here so they pass the same checks as the
        YAML and the ``--config`` overrides.
        """
        config = self._require_config()
        for key, value in values.items():
            if value is not None:
                self.set_parameter(key, value)
        if validate:
            validate_config(config)
        return config

    def to_yaml(self, resolve: bool = True) -> str:
        """Render the current configuration as YAML."""
        if self.config is None:
            return ""
        return OmegaConf.to_yaml(self.config, resolve=resolve)


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Compose a configuration with a throwaway ConfigManager."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)
