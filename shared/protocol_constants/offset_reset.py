from enum import Enum


class OffsetReset(str, Enum):
    """Where a consumer group starts when it has no committed offset."""
    LATEST = "latest"
    EARLIEST = "earliest"
