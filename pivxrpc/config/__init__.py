"""Configuration module for pivxrpc."""

from pivxrpc.config.loader import get_config_path, load_config, save_config
from pivxrpc.config.schema import ClientConfig

__all__ = ["ClientConfig", "get_config_path", "load_config", "save_config"]
