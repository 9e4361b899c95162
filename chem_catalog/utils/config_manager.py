"""
Configuration management for the catalog.

Handles loading, updating, and persisting configuration including data
sources, safety score parameters and display settings.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional
import yaml

from chem_catalog.linking.types import ScoringConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages catalog configuration.

    Provides methods to load, query, update, and persist configuration.
    Values missing from a loaded file fall back to DEFAULT_CONFIG.
    """

    DEFAULT_CONFIG = {
        'data': {
            'chemicals_source': 'data/chemicals.json',
            'products_source': 'data/products.json',
            'storage_path': 'data/catalog_store.db',
            'request_timeout': 10,
        },
        'scoring': {
            'organic_clean': 100,
            'conventional_clean': 85,
            'organic_base': 70,
            'conventional_base': 60,
            'penalty_per_chemical': 10,
        },
        'bands': {
            'good': 80,
            'moderate': 60,
        },
        'display': {
            'max_alternatives': 3,
            'placeholder_image': 'https://via.placeholder.com/300x200?text=No+Image',
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path and config_path.exists():
            self.load_config(config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            FileNotFoundError: If config file does not exist
            yaml.YAMLError: If config file is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f)

            if not loaded_config:
                logger.warning(f"Empty config file at {path}, using defaults")
                self.config = copy.deepcopy(self.DEFAULT_CONFIG)
            else:
                self.config = self._merge_with_defaults(loaded_config)

            self.config_path = path
            logger.info(f"Loaded configuration from {path}")

            return self.config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

    def get(self, section: str, name: str) -> Any:
        """
        Get a configuration value.

        Raises:
            KeyError: If the section or key is not found
        """
        if name not in self.config.get(section, {}):
            raise KeyError(f"Parameter '{section}.{name}' not found in configuration")

        return self.config[section][name]

    def get_data_param(self, name: str) -> Any:
        return self.get('data', name)

    def get_display_param(self, name: str) -> Any:
        return self.get('display', name)

    def get_scoring_param(self, name: str) -> int:
        return int(self.get('scoring', name))

    def update_scoring_param(self, name: str, value: int) -> None:
        """
        Update a scoring parameter.

        Raises:
            ValueError: If value is out of range, or would let a base score
                exceed its clean score
        """
        if not 0 <= value <= 100:
            raise ValueError(f"Scoring value must be between 0 and 100, got {value}")

        candidate = copy.deepcopy(self.config)
        candidate.setdefault('scoring', {})[name] = value
        ScoringConfig.from_config(candidate)

        self.config.setdefault('scoring', {})
        old_value = self.config['scoring'].get(name)
        self.config['scoring'][name] = value

        logger.info(f"Updated scoring '{name}': {old_value} -> {value}")

    def save_config(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save to (uses self.config_path if not provided)

        Raises:
            ValueError: If no path provided and no config_path set
        """
        save_path = path or self.config_path

        if not save_path:
            raise ValueError("No path provided and no config_path set")

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)

            with open(save_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(
                    self.config,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2
                )

            logger.info(f"Saved configuration to {save_path}")

        except Exception as e:
            logger.error(f"Failed to save configuration: {e}")
            raise

    def get_all_config(self) -> dict[str, Any]:
        """Get a copy of the complete configuration dictionary."""
        return copy.deepcopy(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = copy.deepcopy(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    def validate_config(self) -> list[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        scoring = self.config.get('scoring', {})
        for name, value in scoring.items():
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"Scoring '{name}' must be an integer, got {type(value)}")
            elif not 0 <= value <= 100:
                errors.append(f"Scoring '{name}' must be between 0 and 100, got {value}")

        for base, clean in (('organic_base', 'organic_clean'),
                            ('conventional_base', 'conventional_clean')):
            base_value, clean_value = scoring.get(base), scoring.get(clean)
            if isinstance(base_value, int) and isinstance(clean_value, int) \
                    and base_value > clean_value:
                errors.append(f"Scoring '{base}' must not exceed '{clean}'")

        bands = self.config.get('bands', {})
        good, moderate = bands.get('good'), bands.get('moderate')
        if isinstance(good, int) and isinstance(moderate, int) and moderate > good:
            errors.append("Band 'moderate' must not exceed band 'good'")

        display = self.config.get('display', {})
        max_alternatives = display.get('max_alternatives')
        if max_alternatives is not None:
            if not isinstance(max_alternatives, int) or max_alternatives < 0:
                errors.append("max_alternatives must be a non-negative integer")

        return errors
