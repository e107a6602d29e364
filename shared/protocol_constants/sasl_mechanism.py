from enum import Enum


class SaslMechanism(str, Enum):
    """SASL authentication mechanisms."""
    PLAIN = "PLAIN"
    GSSAPI = "GSSAPI"
    SCRAM_SHA_256 = "SCRAM_SHA_256"
    SCRAM_SHA_512 = "SCRAM_SHA_512"
