from enum import IntEnum


class Compression(IntEnum):
    """Message-set compression codecs, by their attribute bits on the wire."""
    NONE = 0
    GZIP = 1
    SNAPPY = 2
