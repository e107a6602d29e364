import pytest
import yaml
from pathlib import Path

from services.client_config_service import ConsumerConfig, ProducerConfig
from shared.protocol_constants import ConsumeMode


@pytest.fixture
def consumer_config():
    """Consumer singleton with no explicit options and the default consume mode."""
    config = ConsumerConfig()
    config.clear()
    config.set_consume_mode(ConsumeMode.AFTER_COMMIT_OFFSET)
    yield config
    config.clear()
    config.set_consume_mode(ConsumeMode.AFTER_COMMIT_OFFSET)


@pytest.fixture
def producer_config():
    """Producer singleton with no explicit options."""
    config = ProducerConfig()
    config.clear()
    yield config
    config.clear()


@pytest.fixture
def credential_file(tmp_path) -> Path:
    """An existing file usable as a cert, key, CA bundle or keytab."""
    path = tmp_path / "client.pem"
    path.write_text("-----BEGIN CERTIFICATE-----\n")
    return path


@pytest.fixture
def write_config(tmp_path):
    """Writes a YAML bootstrap file and returns its path."""
    def _write(content, filename: str = "client.yaml") -> Path:
        config_path = tmp_path / filename
        with open(config_path, "w") as f:
            yaml.dump(content, f)
        return config_path

    return _write
