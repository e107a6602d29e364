import os
import yaml
from typing import Any, Dict, Mapping, Optional, Tuple

from shared.common_utils.env_settings import env_settings
from shared.common_utils.logger import logger
from services.client_config_service.config.env_settings import ClientConfigSettings, settings

from .base_config import Config, to_snake_case
from .consumer_config import ConsumerConfig
from .producer_config import ProducerConfig
from .schemas import ConfigRole, OptionSpec, OptionType
from .validator import ConfigError, ConfigFileError, ConfigValidationError, validate_config_structure

BOOTSTRAP_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        ConfigRole.CONSUMER.value: {"type": ["object", "null"]},
        ConfigRole.PRODUCER.value: {"type": ["object", "null"]},
    },
    "additionalProperties": False,
}

_CAST_TYPES = {
    OptionType.STRING: str,
    OptionType.INT: int,
    OptionType.BOOL: bool,
    OptionType.LIST: list,
}


def env_key(prefix: str, option: str) -> str:
    return f"{prefix}{to_snake_case(option).upper()}"


class ConfigLoader:
    """
    Applies file and environment supplied values to the role configurations.

    Every value goes through ``Config.set`` so explicit setters validate it
    exactly as they would a call made in code.
    """

    def __init__(
        self,
        client_settings: Optional[ClientConfigSettings] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.settings = client_settings or settings
        self.environ = environ

    def load_file(self, config_path: str) -> Dict[str, Dict[str, Any]]:
        """Load and structurally validate a YAML bootstrap file."""
        resolved_config_path = os.path.abspath(config_path)

        try:
            with open(resolved_config_path, "r") as f:
                document = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigFileError(f"Configuration file not found at {resolved_config_path}")
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Could not parse configuration file {resolved_config_path}: {e}")

        if document is None:
            document = {}
        validate_config_structure(document, BOOTSTRAP_SCHEMA)

        logger.info(f"Configuration loaded from {resolved_config_path}")
        return {role: values or {} for role, values in document.items()}

    def apply(self, config: Config, values: Mapping[str, Any]) -> None:
        """Set each option in order, stopping at the first rejected one."""
        for name, value in values.items():
            try:
                config.set(name, value)
            except ConfigError as e:
                logger.error(f"Failed to apply '{name}' to the {config.role.value} configuration: {e}")
                raise
        if values:
            logger.info(f"Applied {len(values)} option(s) to the {config.role.value} configuration")

    def apply_environment(self, config: Config, prefix: str) -> Dict[str, Any]:
        """
        Apply ``<PREFIX><OPTION_IN_UPPER_SNAKE>`` environment variables.

        Raw strings are cast with the option's declared type before being
        set. Returns the applied values keyed by option name.
        """
        values: Dict[str, Any] = {}
        for spec in config.describe_options(include_runtime=True):
            key = env_key(prefix, spec.name)
            try:
                value = env_settings.get(key, self._cast_type(spec), environ=self.environ)
            except ValueError as e:
                raise ConfigValidationError(str(e), option=spec.name) from e
            if value is not None:
                values[spec.name] = value

        self.apply(config, values)
        return values

    def bootstrap(self) -> Tuple[ConsumerConfig, ProducerConfig]:
        """
        Populate both role singletons from CONFIG_PATH and the environment.

        Environment values are applied after the file, so they win.
        """
        logger.setLevel(self.settings.LOG_LEVEL)
        consumer, producer = ConsumerConfig(), ProducerConfig()

        document: Dict[str, Dict[str, Any]] = {}
        if self.settings.CONFIG_PATH:
            document = self.load_file(self.settings.CONFIG_PATH)

        self.apply(consumer, document.get(ConfigRole.CONSUMER.value, {}))
        self.apply(producer, document.get(ConfigRole.PRODUCER.value, {}))
        self.apply_environment(consumer, self.settings.CONSUMER_ENV_PREFIX)
        self.apply_environment(producer, self.settings.PRODUCER_ENV_PREFIX)

        logger.info("Client configurations bootstrapped")
        return consumer, producer

    @staticmethod
    def _cast_type(spec: OptionSpec) -> type:
        if spec.type == OptionType.ENUM:
            return int if spec.enum_type is not None and issubclass(spec.enum_type, int) else str
        return _CAST_TYPES[spec.type]


def bootstrap_configs(
    client_settings: Optional[ClientConfigSettings] = None,
) -> Tuple[ConsumerConfig, ProducerConfig]:
    """Bootstrap the role configurations using the process settings."""
    return ConfigLoader(client_settings).bootstrap()
