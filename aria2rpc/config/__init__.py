"""Configuration module for aria2rpc."""

from aria2rpc.config.loader import get_config_path, get_data_dir, load_config, save_config
from aria2rpc.config.schema import Aria2Config, ClientConfig

__all__ = ["Aria2Config", "ClientConfig", "load_config", "save_config", "get_config_path", "get_data_dir"]
