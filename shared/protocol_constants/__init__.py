"""Constant enumerations shared by the configuration and protocol layers."""

from .security_protocol import SecurityProtocol
from .sasl_mechanism import SaslMechanism
from .compression import Compression
from .consume_mode import ConsumeMode
from .offset_reset import OffsetReset

__all__ = [
    "SecurityProtocol",
    "SaslMechanism",
    "Compression",
    "ConsumeMode",
    "OffsetReset",
]
