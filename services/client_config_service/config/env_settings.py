from typing import Optional
from pydantic_settings import BaseSettings


class ClientConfigSettings(BaseSettings):
    # Service settings
    SERVICE_NAME: str = "client_config_service"
    SERVICE_VERSION: str = "0.1.0"

    # Logging settings
    LOG_LEVEL: str = "INFO"

    # Bootstrap settings
    CONFIG_PATH: Optional[str] = None
    CONSUMER_ENV_PREFIX: str = "KAFKA_CONSUMER_"
    PRODUCER_ENV_PREFIX: str = "KAFKA_PRODUCER_"

    # Reject set() calls for option names no role declares
    STRICT_OPTION_NAMES: bool = False


# Global settings instance
settings = ClientConfigSettings()
