"""
Local package for AppWatch.

Holds the configuration loader, the error types and the supervisor package.
"""

from .config import MonitorConfig, load_config, resolve_config_path

__all__ = ["MonitorConfig", "load_config", "resolve_config_path"]
