from enum import Enum


class SecurityProtocol(str, Enum):
    """Transport security understood by the connection layer."""
    PLAINTEXT = "PLAINTEXT"
    SSL = "SSL"
    SASL_PLAINTEXT = "SASL_PLAINTEXT"
    SASL_SSL = "SASL_SSL"
