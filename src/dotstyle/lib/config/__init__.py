"""Configuration discovery and parsing helpers."""

from dotstyle.lib.config.settings import DotstyleConfig, load_config

__all__ = ["DotstyleConfig", "load_config"]
