"""Shared utilities."""

from chem_catalog.utils.config_manager import ConfigManager

__all__ = ["ConfigManager"]
