"""
Configuration module for pathtree.

Uses pydantic-settings for environment variable loading.
"""

from pathtree.config.settings import Settings

__all__ = ["Settings"]
