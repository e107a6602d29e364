from typing import Any, Dict, List, Mapping, Optional, Tuple, Type
from enum import Enum
import hashlib
import json
import os
import re

import jsonschema

BROKER_PATTERN = re.compile(r"^\S+:\d+$")
VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*$")


class ConfigError(Exception):
    pass


class ConfigValidationError(ConfigError, ValueError):
    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.option = option


class UnknownOptionError(ConfigError, KeyError):
    def __init__(self, option: str):
        super().__init__(option)
        self.option = option

    def __str__(self) -> str:
        return f"Unknown configuration option '{self.option}'"


class ConfigFileError(ConfigError):
    pass


def validate_config_structure(config: Dict[str, Any], schema: Dict[str, Any]) -> None:
    """
    Validates a configuration against a JSON schema.
    """
    try:
        jsonschema.validate(instance=config, schema=schema)
    except jsonschema.exceptions.ValidationError as e:
        raise ConfigValidationError(f"Configuration validation failed: {e.message}")


def generate_config_checksum(config: Dict[str, Any]) -> str:
    """
    Generates a checksum for a configuration dictionary.
    """
    config_str = json.dumps(config, sort_keys=True, default=str)
    return hashlib.sha256(config_str.encode()).hexdigest()


def validate_non_empty_string(option: str, value: Any, message: str) -> str:
    """
    Returns ``value`` with surrounding whitespace removed, or raises when
    nothing is left.
    """
    if not isinstance(value, str) or value.strip() == "":
        raise ConfigValidationError(message, option=option)
    return value.strip()


def validate_integer_range(option: str, value: Any, minimum: int, maximum: int) -> int:
    """
    Validates that an integer lies within ``minimum .. maximum`` inclusive.
    Booleans are not accepted as integers.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigValidationError(
            f"Option '{option}' must be an integer, got {type(value).__name__}", option=option
        )
    if value < minimum or value > maximum:
        raise ConfigValidationError(
            f"Set {option} value is invalid, must set it {minimum} .. {maximum}", option=option
        )
    return value


def validate_bool(option: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigValidationError(
            f"Option '{option}' must be a boolean, got {type(value).__name__}", option=option
        )
    return value


def validate_enum_value(option: str, value: Any, enum_type: Type[Enum], message: Optional[str] = None) -> Enum:
    """
    Resolves ``value`` to a member of ``enum_type``.

    Members and their raw values are accepted. The raw value must already
    have the enum's base type, so ``"1"`` is not a valid compression id.
    """
    allowed = [member.value for member in enum_type]
    message = message or f"Option '{option}' must be one of {allowed}, got {value!r}"

    base_type = int if issubclass(enum_type, int) else str
    if isinstance(value, bool) or not isinstance(value, base_type):
        raise ConfigValidationError(message, option=option)
    try:
        return enum_type(value)
    except ValueError:
        raise ConfigValidationError(message, option=option)


def validate_file_path(option: str, value: Any, message: str) -> str:
    """
    Validates that ``value`` names an existing regular file.
    """
    if not isinstance(value, str) or not os.path.isfile(value):
        raise ConfigValidationError(message, option=option)
    return value


def validate_broker_list(option: str, value: Any) -> str:
    """
    Validates a comma-separated ``host:port`` list.

    Malformed entries are tolerated as long as at least one entry is well
    formed; the trimmed string is returned unchanged otherwise.
    """
    message = (
        'Broker list must be a comma-separated list of brokers (format: "host:port"), '
        "with at least one broker"
    )
    if not isinstance(value, str):
        raise ConfigValidationError(message, option=option)

    broker_list = value.strip()
    brokers = [broker for broker in broker_list.split(",") if BROKER_PATTERN.match(broker.strip())]
    if not brokers:
        raise ConfigValidationError(message, option=option)
    return broker_list


def parse_version(version: str) -> Tuple[int, ...]:
    if not VERSION_PATTERN.match(version):
        raise ValueError(f"'{version}' is not a dotted numeric version")
    return tuple(int(part) for part in version.split("."))


def compare_versions(left: str, right: str) -> int:
    """
    Compares two dotted versions, padding the shorter one with zeros.
    Returns -1, 0 or 1.
    """
    left_parts, right_parts = parse_version(left), parse_version(right)
    width = max(len(left_parts), len(right_parts))
    left_parts += (0,) * (width - len(left_parts))
    right_parts += (0,) * (width - len(right_parts))
    return (left_parts > right_parts) - (left_parts < right_parts)


def validate_min_version(option: str, value: Any, minimum: str) -> str:
    message = f"Set broker version value is invalid, must be a non-empty version string >= {minimum}"
    if not isinstance(value, str):
        raise ConfigValidationError(message, option=option)

    version = value.strip()
    try:
        too_old = compare_versions(version, minimum) < 0
    except ValueError:
        raise ConfigValidationError(message, option=option)
    if too_old:
        raise ConfigValidationError(message, option=option)
    return version


def validate_non_empty_collection(option: str, value: Any, message: str) -> List[Any]:
    """
    Validates a non-empty list, tuple or set. Strings and mappings are
    rejected even though they are iterable.
    """
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigValidationError(message, option=option)
    if not value:
        raise ConfigValidationError(message, option=option)
    return list(value)
