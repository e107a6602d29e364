"""
Client Configuration Service
Declares, validates and serves the consumer and producer option sets.
"""

from .src.base_config import Config
from .src.consumer_config import ConsumerConfig, get_consumer_config
from .src.producer_config import ProducerConfig, get_producer_config
from .src.schemas import ConfigRole, OptionType, OptionSpec, ConfigSnapshot
from .src.validator import (
    ConfigError,
    ConfigValidationError,
    UnknownOptionError,
    ConfigFileError,
)
from .src.config_loader import ConfigLoader, bootstrap_configs

__version__ = "0.1.0"
__all__ = [
    "Config",
    "ConsumerConfig",
    "ProducerConfig",
    "get_consumer_config",
    "get_producer_config",
    "ConfigRole",
    "OptionType",
    "OptionSpec",
    "ConfigSnapshot",
    "ConfigError",
    "ConfigValidationError",
    "UnknownOptionError",
    "ConfigFileError",
    "ConfigLoader",
    "bootstrap_configs",
]
