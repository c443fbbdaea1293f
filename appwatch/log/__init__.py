"""
Logging module for AppWatch.
This module provides the root logger setup for the supervisor process.
"""

from .setup import setup_logging

__all__ = ["setup_logging"]
