from typing import Optional, Tuple

from shared.common_utils.logger import logger
from shared.common_utils.singleton import SingletonMeta
from shared.protocol_constants import Compression

from .base_config import Config, option_setter
from .schemas import ConfigRole, OptionSpec, OptionType
from .validator import validate_bool, validate_enum_value, validate_integer_range

COMPRESSION_OPTIONS: Tuple[Compression, ...] = tuple(Compression)

PRODUCER_OPTIONS: Tuple[OptionSpec, ...] = (
    OptionSpec(name="requiredAck", type=OptionType.INT, default=1,
               description="Acks the leader waits for, -1 for all in-sync replicas"),
    OptionSpec(name="timeout", type=OptionType.INT, default=5000,
               description="Time the broker waits for the required acks"),
    OptionSpec(name="isAsyn", type=OptionType.BOOL, default=False),
    OptionSpec(name="requestTimeout", type=OptionType.INT, default=6000),
    OptionSpec(name="produceInterval", type=OptionType.INT, default=100),
    OptionSpec(name="compression", type=OptionType.ENUM, default=Compression.NONE,
               enum_type=Compression),
)


class ProducerConfig(Config, metaclass=SingletonMeta):
    """Process-wide producer configuration."""

    role = ConfigRole.PRODUCER
    EXT_OPTIONS = PRODUCER_OPTIONS

    def __init__(self, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        logger.info("Producer configuration initialized")

    @option_setter("requestTimeout")
    def set_request_timeout(self, request_timeout: int) -> int:
        return validate_integer_range("requestTimeout", request_timeout, 1, 900000)

    @option_setter("produceInterval")
    def set_produce_interval(self, produce_interval: int) -> int:
        return validate_integer_range("produceInterval", produce_interval, 1, 900000)

    @option_setter("timeout")
    def set_timeout(self, timeout: int) -> int:
        return validate_integer_range("timeout", timeout, 1, 900000)

    @option_setter("requiredAck")
    def set_required_ack(self, required_ack: int) -> int:
        return validate_integer_range("requiredAck", required_ack, -1, 1000)

    @option_setter("isAsyn")
    def set_is_asyn(self, asyn: bool) -> bool:
        return validate_bool("isAsyn", asyn)

    @option_setter("compression")
    def set_compression(self, compression: int) -> Compression:
        return validate_enum_value(
            "compression",
            compression,
            Compression,
            f"Compression must be one of {[c.name for c in COMPRESSION_OPTIONS]} ({[c.value for c in COMPRESSION_OPTIONS]})",
        )


def get_producer_config() -> ProducerConfig:
    """Returns the process-wide producer configuration."""
    return ProducerConfig()
