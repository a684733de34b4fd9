"""
Storage Layer.

This package handles the configuration file that supplies the server host and
login credentials.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
