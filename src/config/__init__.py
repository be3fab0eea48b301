"""
Configuration package for content fingerprinting.
"""

from .settings import AppConfig

__all__ = ["AppConfig"]
