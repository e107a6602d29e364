from enum import IntEnum


class ConsumeMode(IntEnum):
    """When fetched messages are handed to the consumer callback."""
    AFTER_COMMIT_OFFSET = 1
    BEFORE_COMMIT_OFFSET = 2
