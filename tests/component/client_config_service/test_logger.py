import pytest
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from shared.common_utils.logger import logger, resolve_timezone


def test_resolve_timezone_returns_known_zone():
    assert resolve_timezone("Asia/Jerusalem") == ZoneInfo("Asia/Jerusalem")


@pytest.mark.parametrize("name", ["Mars/Olympus_Mons", "../etc/passwd", "", None])
def test_resolve_timezone_falls_back_to_utc(name):
    assert resolve_timezone(name) is UTC


def test_local_time_uses_record_timestamp_in_configured_zone(monkeypatch):
    monkeypatch.setattr(logger, "timezone", ZoneInfo("Asia/Tokyo"))
    timestamp = datetime(2024, 1, 1, 0, 0, tzinfo=UTC).timestamp()

    local = logger.local_time(timestamp)

    assert (local.tm_year, local.tm_mon, local.tm_mday, local.tm_hour) == (2024, 1, 1, 9)
