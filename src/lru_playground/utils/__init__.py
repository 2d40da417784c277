"""Utility module for application configuration."""

from .config import AppConfig, CacheConfig, ServerConfig

__all__ = [
    "AppConfig",
    "CacheConfig",
    "ServerConfig",
]
