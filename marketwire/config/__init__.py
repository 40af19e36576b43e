"""Configuration management for the news pipeline."""

from .loader import Config, load_config, load_sources, save_config, save_sources
from .models import ConfigModel, IngestionConfig, LLMConfig, PostgresConfig, ServerConfig

__all__ = [
    "Config",
    "ConfigModel",
    "IngestionConfig",
    "LLMConfig",
    "PostgresConfig",
    "ServerConfig",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]
