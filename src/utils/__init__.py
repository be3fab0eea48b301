"""
Utility helpers for content fingerprinting.
"""

from .logging_setup import setup_logging, setup_logging_from_config
from .resource_monitor import ResourceMonitor

__all__ = ["setup_logging", "setup_logging_from_config", "ResourceMonitor"]
