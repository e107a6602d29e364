import pytest

from services.client_config_service import (
    Config,
    ConfigValidationError,
    ConsumerConfig,
)
from shared.protocol_constants import ConsumeMode, OffsetReset


def test_role_defaults_extend_base_defaults(consumer_config):
    assert consumer_config.get("offsetReset") == "latest"
    assert "offsetReset" not in Config().get_default_configs()
    assert consumer_config.get("clientId") == "kafka-client"
    assert consumer_config.get("sessionTimeout") == 30000
    assert consumer_config.get("maxBytes") == 65536
    assert consumer_config.get("maxWaitTime") == 100
    assert consumer_config.get("isBatchExecute") is False


def test_group_id_is_required(consumer_config):
    with pytest.raises(ConfigValidationError) as exc_info:
        consumer_config.getGroupId()
    assert exc_info.value.option == "groupId"

    with pytest.raises(ConfigValidationError):
        consumer_config.setGroupId("")
    with pytest.raises(ConfigValidationError):
        consumer_config.get_group_id()


def test_group_id_is_trimmed(consumer_config):
    consumer_config.setGroupId("  my-group  ")
    assert consumer_config.getGroupId() == "my-group"
    assert consumer_config.get("groupId") == "my-group"


def test_rejected_group_id_keeps_previous_value(consumer_config):
    consumer_config.set_group_id("orders")
    with pytest.raises(ConfigValidationError):
        consumer_config.set("groupId", "   ")
    assert consumer_config.get_group_id() == "orders"


def test_topics_are_required(consumer_config):
    with pytest.raises(ConfigValidationError):
        consumer_config.getTopics()
    with pytest.raises(ConfigValidationError):
        consumer_config.setTopics([])
    with pytest.raises(ConfigValidationError):
        consumer_config.get_topics()


@pytest.mark.parametrize("topics", ["orders", {"orders": 1}, None, 3])
def test_topics_must_be_a_collection(consumer_config, topics):
    with pytest.raises(ConfigValidationError):
        consumer_config.set_topics(topics)
    assert consumer_config.get_raw("topics") == []


def test_topics_round_trip(consumer_config):
    consumer_config.set_topics(("orders", "payments"))
    assert consumer_config.getTopics() == ["orders", "payments"]


def test_topics_default_is_not_shared(consumer_config):
    consumer_config.get_raw("topics").append("leaked")
    assert consumer_config.get_default_configs()["topics"] == []


def test_returned_topics_do_not_alias_the_store(consumer_config):
    consumer_config.set_topics(["orders"])

    consumer_config.get_topics().clear()
    consumer_config.getTopics().append("")
    consumer_config.get("topics").append("")
    consumer_config.get_raw("topics").append("")

    assert consumer_config.get_all_configs()["topics"] == ["orders"]
    assert consumer_config.get_topics() == ["orders"]


@pytest.mark.parametrize("option", ["sessionTimeout", "rebalanceTimeout"])
def test_group_timeouts_accept_edges(consumer_config, option):
    assert consumer_config.set(option, 1) is True
    assert consumer_config.set(option, 3600000) is True
    assert consumer_config.get(option) == 3600000


@pytest.mark.parametrize("option", ["sessionTimeout", "rebalanceTimeout"])
@pytest.mark.parametrize("value", [0, 3600001])
def test_group_timeouts_reject_out_of_range(consumer_config, option, value):
    with pytest.raises(ConfigValidationError):
        consumer_config.set(option, value)
    assert consumer_config.get(option) == 30000


def test_offset_reset(consumer_config):
    consumer_config.setOffsetReset("earliest")
    assert consumer_config.getOffsetReset() == OffsetReset.EARLIEST

    with pytest.raises(ConfigValidationError):
        consumer_config.setOffsetReset("smallest")
    assert consumer_config.getOffsetReset() == "earliest"


def test_unvalidated_consumer_options_use_generic_path(consumer_config):
    assert consumer_config.setMaxBytes(1024) is True
    assert consumer_config.setIsBatchExecute(True) is True
    assert consumer_config.get_all_configs() == {"maxBytes": 1024, "isBatchExecute": True}


def test_consume_mode_defaults_to_after_commit(consumer_config):
    assert consumer_config.get_consume_mode() == ConsumeMode.AFTER_COMMIT_OFFSET
    assert consumer_config.getConsumeMode() == ConsumerConfig.CONSUME_AFTER_COMMIT_OFFSET
    assert ConsumerConfig.CONSUME_AFTER_COMMIT_OFFSET == 1
    assert ConsumerConfig.CONSUME_BEFORE_COMMIT_OFFSET == 2


def test_consume_mode_lives_outside_option_store(consumer_config):
    assert consumer_config.setConsumeMode(2) is True
    assert consumer_config.get_consume_mode() is ConsumeMode.BEFORE_COMMIT_OFFSET
    assert "consumeMode" not in consumer_config.get_all_configs()
    assert "consumeMode" not in consumer_config.get_default_configs()

    consumer_config.clear()
    assert consumer_config.get_consume_mode() == ConsumeMode.BEFORE_COMMIT_OFFSET
    assert consumer_config.snapshot().runtime_options == {"consumeMode": ConsumeMode.BEFORE_COMMIT_OFFSET}


@pytest.mark.parametrize("mode", [0, 3, "1", True])
def test_consume_mode_rejects_unknown_modes(consumer_config, mode):
    with pytest.raises(ConfigValidationError):
        consumer_config.set_consume_mode(mode)
    assert consumer_config.get_consume_mode() == ConsumeMode.AFTER_COMMIT_OFFSET


def test_clear_reverts_consumer_options(consumer_config):
    consumer_config.set_group_id("orders")
    consumer_config.set_offset_reset("earliest")
    consumer_config.clear()
    assert consumer_config.get("offsetReset") == "latest"
    with pytest.raises(ConfigValidationError):
        consumer_config.get_group_id()
