from .singleton import SingletonMeta
from .env_settings import EnvironmentSettings, env_settings, cast_env_value
from .logger import logger

__all__ = ["SingletonMeta", "EnvironmentSettings", "env_settings", "cast_env_value", "logger"]
