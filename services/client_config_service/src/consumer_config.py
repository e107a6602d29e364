from typing import Any, Dict, List, Optional, Tuple

from shared.common_utils.logger import logger
from shared.common_utils.singleton import SingletonMeta
from shared.protocol_constants import ConsumeMode, OffsetReset

from .base_config import Config, option_setter
from .schemas import ConfigRole, OptionSpec, OptionType
from .validator import (
    ConfigValidationError,
    validate_enum_value,
    validate_integer_range,
    validate_non_empty_collection,
    validate_non_empty_string,
)

CONSUMER_OPTIONS: Tuple[OptionSpec, ...] = (
    OptionSpec(name="groupId", type=OptionType.STRING, default="",
               description="Consumer group to join, required"),
    OptionSpec(name="sessionTimeout", type=OptionType.INT, default=30000),
    OptionSpec(name="rebalanceTimeout", type=OptionType.INT, default=30000),
    OptionSpec(name="topics", type=OptionType.LIST, default=[],
               description="Topics to subscribe to, required"),
    OptionSpec(name="offsetReset", type=OptionType.ENUM, default=OffsetReset.LATEST,
               enum_type=OffsetReset),
    OptionSpec(name="maxBytes", type=OptionType.INT, default=65536,
               description="Maximum bytes per partition fetch"),
    OptionSpec(name="maxWaitTime", type=OptionType.INT, default=100),
    OptionSpec(name="isBatchExecute", type=OptionType.BOOL, default=False),
)


class ConsumerConfig(Config, metaclass=SingletonMeta):
    """Process-wide consumer configuration."""

    role = ConfigRole.CONSUMER
    EXT_OPTIONS = CONSUMER_OPTIONS
    RUNTIME_OPTIONS = (
        OptionSpec(name="consumeMode", type=OptionType.ENUM, default=ConsumeMode.AFTER_COMMIT_OFFSET,
                   enum_type=ConsumeMode),
    )

    CONSUME_AFTER_COMMIT_OFFSET = ConsumeMode.AFTER_COMMIT_OFFSET
    CONSUME_BEFORE_COMMIT_OFFSET = ConsumeMode.BEFORE_COMMIT_OFFSET

    def __init__(self, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        # not part of the option store, clear() leaves it alone
        self._runtime_options: Dict[str, Any] = {
            "consumeMode": ConsumeMode.AFTER_COMMIT_OFFSET,
        }
        logger.info("Consumer configuration initialized")

    def get_group_id(self) -> str:
        group_id = self.get_raw("groupId")

        if not isinstance(group_id, str) or group_id.strip() == "":
            raise ConfigValidationError(
                "Get group id value is invalid, must set it to a non-empty string", option="groupId"
            )

        return group_id.strip()

    @option_setter("groupId")
    def set_group_id(self, group_id: str) -> str:
        return validate_non_empty_string(
            "groupId", group_id, "Set group id value is invalid, must set it to a non-empty string"
        )

    @option_setter("sessionTimeout")
    def set_session_timeout(self, session_timeout: int) -> int:
        return validate_integer_range("sessionTimeout", session_timeout, 1, 3600000)

    @option_setter("rebalanceTimeout")
    def set_rebalance_timeout(self, rebalance_timeout: int) -> int:
        return validate_integer_range("rebalanceTimeout", rebalance_timeout, 1, 3600000)

    @option_setter("offsetReset")
    def set_offset_reset(self, offset_reset: str) -> OffsetReset:
        return validate_enum_value(
            "offsetReset",
            offset_reset,
            OffsetReset,
            "Set offset reset value is invalid, must set it `latest` or `earliest`",
        )

    def get_topics(self) -> List[str]:
        topics = self.get_raw("topics")

        if not topics:
            raise ConfigValidationError(
                "Get consumer topics value is invalid, must set it not empty", option="topics"
            )

        return topics

    @option_setter("topics")
    def set_topics(self, topics: List[str]) -> List[str]:
        return validate_non_empty_collection(
            "topics", topics, "Set consumer topics value is invalid, must set it to a non-empty list"
        )

    def get_consume_mode(self) -> ConsumeMode:
        with self._lock:
            return self._runtime_options["consumeMode"]

    def set_consume_mode(self, mode: int) -> None:
        mode = validate_enum_value(
            "consumeMode",
            mode,
            ConsumeMode,
            'Invalid consume mode given, it must be either "ConsumeMode.AFTER_COMMIT_OFFSET" or '
            '"ConsumeMode.BEFORE_COMMIT_OFFSET"',
        )
        with self._lock:
            self._runtime_options["consumeMode"] = mode
        logger.debug(f"[{self.role.value}] consumeMode = {mode.name}")

    def get_runtime_options(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._runtime_options)


def get_consumer_config() -> ConsumerConfig:
    """Returns the process-wide consumer configuration."""
    return ConsumerConfig()
