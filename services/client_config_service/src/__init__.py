"""
Client Configuration Source Package
Contains the option store, accessor dispatch and role configurations.
"""

from .base_config import Config, normalize_option_name, option_setter
from .consumer_config import ConsumerConfig, get_consumer_config
from .producer_config import ProducerConfig, get_producer_config
from .schemas import (
    ConfigRole,
    OptionType,
    OptionSpec,
    ConfigSnapshot,
)
from .validator import (
    ConfigError,
    ConfigValidationError,
    UnknownOptionError,
    ConfigFileError,
    validate_config_structure,
    generate_config_checksum,
)
from .config_loader import ConfigLoader, bootstrap_configs

__all__ = [
    # Configurations
    "Config",
    "ConsumerConfig",
    "ProducerConfig",
    "get_consumer_config",
    "get_producer_config",
    "normalize_option_name",
    "option_setter",

    # Schemas
    "ConfigRole",
    "OptionType",
    "OptionSpec",
    "ConfigSnapshot",

    # Errors and validation
    "ConfigError",
    "ConfigValidationError",
    "UnknownOptionError",
    "ConfigFileError",
    "validate_config_structure",
    "generate_config_checksum",

    # Bootstrap
    "ConfigLoader",
    "bootstrap_configs",
]
