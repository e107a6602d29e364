import copy
import re
from datetime import datetime, UTC
from functools import wraps
from threading import RLock
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from shared.common_utils.logger import logger
from shared.protocol_constants import SaslMechanism, SecurityProtocol
from services.client_config_service.config.env_settings import settings

from .schemas import ConfigRole, ConfigSnapshot, OptionSpec, OptionType
from .validator import (
    ConfigValidationError,
    UnknownOptionError,
    generate_config_checksum,
    validate_broker_list,
    validate_enum_value,
    validate_file_path,
    validate_integer_range,
    validate_min_version,
    validate_non_empty_string,
)

MIN_BROKER_VERSION = "0.8.0"
SECRET_MASK = "******"

ALLOW_SECURITY_PROTOCOLS: Tuple[SecurityProtocol, ...] = tuple(SecurityProtocol)
ALLOW_MECHANISMS: Tuple[SaslMechanism, ...] = tuple(SaslMechanism)

_ACCESSOR_PATTERN = re.compile(r"^(get|set)_?([A-Za-z][A-Za-z0-9_]*)$")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_option_name(name: str) -> str:
    """Maps ``client_id``, ``ClientId`` and ``clientId`` to ``clientId``."""
    if "_" in name:
        parts = [part for part in name.split("_") if part]
        if not parts:
            return ""
        head, rest = parts[0], parts[1:]
        return head[:1].lower() + head[1:] + "".join(part[:1].upper() + part[1:] for part in rest)
    return name[:1].lower() + name[1:]


def to_snake_case(option: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", option).lower()


def option_setter(option: str) -> Callable[[Callable[..., Any]], Callable[..., None]]:
    """
    Turns a validating method into an explicit setter for ``option``.

    The decorated method receives the candidate value and returns the value
    to store; raising ConfigValidationError leaves the store untouched.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., None]:
        @wraps(func)
        def wrapper(self: "Config", value: Any) -> None:
            try:
                accepted = func(self, value)
            except ConfigValidationError as e:
                logger.warning(f"[{self.role.value}] Rejected value for '{option}': {e}")
                raise
            self._store(option, accepted)

        return wrapper

    return decorator


BASE_OPTIONS: Tuple[OptionSpec, ...] = (
    OptionSpec(name="clientId", type=OptionType.STRING, default="kafka-client",
               description="Client identifier sent with every request"),
    OptionSpec(name="brokerVersion", type=OptionType.STRING, default="0.10.1.0",
               description="Broker protocol version to speak"),
    OptionSpec(name="metadataBrokerList", type=OptionType.STRING, default="",
               description="Bootstrap brokers as host:port,host:port"),
    OptionSpec(name="messageMaxBytes", type=OptionType.INT, default=1000000),
    OptionSpec(name="metadataRequestTimeoutMs", type=OptionType.INT, default=60000),
    OptionSpec(name="metadataRefreshIntervalMs", type=OptionType.INT, default=300000),
    OptionSpec(name="metadataMaxAgeMs", type=OptionType.INT, default=-1),
    OptionSpec(name="securityProtocol", type=OptionType.ENUM, default=SecurityProtocol.PLAINTEXT,
               enum_type=SecurityProtocol),
    # derived from securityProtocol by the connection layer
    OptionSpec(name="sslEnable", type=OptionType.BOOL, default=False),
    OptionSpec(name="sslLocalCert", type=OptionType.STRING, default=""),
    OptionSpec(name="sslLocalPk", type=OptionType.STRING, default=""),
    OptionSpec(name="sslVerifyPeer", type=OptionType.BOOL, default=False),
    OptionSpec(name="sslPassphrase", type=OptionType.STRING, default="", secret=True),
    OptionSpec(name="sslCafile", type=OptionType.STRING, default=""),
    OptionSpec(name="sslPeerName", type=OptionType.STRING, default=""),
    OptionSpec(name="saslMechanism", type=OptionType.ENUM, default=SaslMechanism.PLAIN,
               enum_type=SaslMechanism),
    OptionSpec(name="saslUsername", type=OptionType.STRING, default=""),
    OptionSpec(name="saslPassword", type=OptionType.STRING, default="", secret=True),
    OptionSpec(name="saslKeytab", type=OptionType.STRING, default=""),
    OptionSpec(name="saslPrincipal", type=OptionType.STRING, default=""),
)


class Config:
    """
    Option container shared by the consumer and producer configurations.

    Values are resolved from the explicitly assigned options first and from
    the merged default table second. Any option can be read or written
    through ``get``/``set`` or through accessor attributes such as
    ``getClientId()`` and ``set_client_id(value)``; a ``get_<option>`` or
    ``set_<option>`` method defined on the class takes precedence over the
    generic resolution.
    """

    role: ConfigRole = ConfigRole.BASE
    OPTIONS: Tuple[OptionSpec, ...] = BASE_OPTIONS
    EXT_OPTIONS: Tuple[OptionSpec, ...] = ()
    RUNTIME_OPTIONS: Tuple[OptionSpec, ...] = ()

    def __init__(self, strict: Optional[bool] = None):
        specs: Dict[str, OptionSpec] = {spec.name: spec for spec in self.OPTIONS}
        specs.update({spec.name: spec for spec in self.EXT_OPTIONS})

        self._specs: Mapping[str, OptionSpec] = MappingProxyType(specs)
        self._defaults: Mapping[str, Any] = MappingProxyType(
            {name: spec.default for name, spec in specs.items()}
        )
        self._runtime_specs: Mapping[str, OptionSpec] = MappingProxyType(
            {spec.name: spec for spec in self.RUNTIME_OPTIONS}
        )
        self._options: Dict[str, Any] = {}
        self._lock = RLock()
        self._strict = settings.STRICT_OPTION_NAMES if strict is None else strict

    def __getattr__(self, attr: str) -> Callable[..., Any]:
        if attr.startswith("_"):
            raise AttributeError(attr)

        match = _ACCESSOR_PATTERN.match(attr)
        if match is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{attr}'")

        kind, suffix = match.groups()
        option = normalize_option_name(suffix)
        if kind == "get":
            return lambda: self.get(option)
        return lambda *values: self.set(option, *values)

    def get(self, name: str) -> Any:
        """
        Returns the value of ``name``.

        Raises UnknownOptionError when the option is neither assigned nor
        present in the default table.
        """
        option = normalize_option_name(name)
        getter = self._explicit_accessor("get", option)
        if getter is not None:
            return getter()
        return self.get_raw(option)

    def get_raw(self, name: str) -> Any:
        """Store-then-default lookup that skips explicit getters."""
        option = normalize_option_name(name)
        with self._lock:
            if option in self._options:
                return copy.copy(self._options[option])
            if option in self._defaults:
                return copy.copy(self._defaults[option])
        raise UnknownOptionError(option)

    def set(self, name: str, *values: Any) -> bool:
        """
        Assigns a single value to ``name``.

        Returns False without touching the store when zero or several values
        are given. Explicit setters raise ConfigValidationError on invalid
        values; other options accept any value.
        """
        if len(values) != 1:
            logger.warning(
                f"[{self.role.value}] Ignoring set of '{name}': expected exactly one value, got {len(values)}"
            )
            return False

        option = normalize_option_name(name)
        setter = self._explicit_accessor("set", option)
        if setter is not None:
            setter(values[0])
            return True

        if option not in self._specs:
            if self._strict:
                logger.warning(f"[{self.role.value}] Rejected undeclared option '{option}'")
                raise UnknownOptionError(option)
            logger.warning(
                f"[{self.role.value}] Option '{option}' is not declared, storing it without validation"
            )

        self._store(option, values[0])
        return True

    def clear(self) -> None:
        """Drops every explicit assignment so that defaults apply again."""
        with self._lock:
            self._options.clear()
        logger.info(f"[{self.role.value}] Explicit options cleared")

    def get_all_configs(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._options)

    def get_default_configs(self) -> Dict[str, Any]:
        return copy.deepcopy(dict(self._defaults))

    def describe_options(self, include_runtime: bool = False) -> List[OptionSpec]:
        specs = list(self._specs.values())
        if include_runtime:
            specs.extend(self._runtime_specs.values())
        return specs

    def get_runtime_options(self) -> Dict[str, Any]:
        return {}

    def snapshot(self) -> ConfigSnapshot:
        """Point-in-time view of the configuration with secrets masked."""
        with self._lock:
            options = self._mask(self._options)
            effective = self._mask({**self._defaults, **self._options})
            runtime_options = self.get_runtime_options()

        return ConfigSnapshot(
            role=self.role,
            options=options,
            defaults=self._mask(self._defaults),
            runtime_options=runtime_options,
            checksum=generate_config_checksum(effective),
            taken_at=datetime.now(UTC).isoformat(),
        )

    def _explicit_accessor(self, kind: str, option: str) -> Optional[Callable[..., Any]]:
        if option not in self._specs and option not in self._runtime_specs:
            return None
        attr = f"{kind}_{to_snake_case(option)}"
        if callable(getattr(type(self), attr, None)):
            return getattr(self, attr)
        return None

    def _store(self, option: str, value: Any) -> None:
        with self._lock:
            self._options[option] = value
        logger.debug(f"[{self.role.value}] {option} = {self._display(option, value)}")

    def _is_secret(self, option: str) -> bool:
        spec = self._specs.get(option)
        return spec is not None and spec.secret

    def _display(self, option: str, value: Any) -> Any:
        if self._is_secret(option) and value:
            return SECRET_MASK
        return value

    def _mask(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {name: copy.deepcopy(self._display(name, value)) for name, value in values.items()}

    @option_setter("clientId")
    def set_client_id(self, client_id: str) -> str:
        return validate_non_empty_string(
            "clientId", client_id, "Set clientId value is invalid, must be a non-empty string."
        )

    @option_setter("brokerVersion")
    def set_broker_version(self, version: str) -> str:
        return validate_min_version("brokerVersion", version, MIN_BROKER_VERSION)

    @option_setter("metadataBrokerList")
    def set_metadata_broker_list(self, broker_list: str) -> str:
        return validate_broker_list("metadataBrokerList", broker_list)

    @option_setter("messageMaxBytes")
    def set_message_max_bytes(self, message_max_bytes: int) -> int:
        return validate_integer_range("messageMaxBytes", message_max_bytes, 1000, 1000000000)

    @option_setter("metadataRequestTimeoutMs")
    def set_metadata_request_timeout_ms(self, timeout_ms: int) -> int:
        return validate_integer_range("metadataRequestTimeoutMs", timeout_ms, 10, 900000)

    @option_setter("metadataRefreshIntervalMs")
    def set_metadata_refresh_interval_ms(self, interval_ms: int) -> int:
        return validate_integer_range("metadataRefreshIntervalMs", interval_ms, 10, 3600000)

    @option_setter("metadataMaxAgeMs")
    def set_metadata_max_age_ms(self, max_age_ms: int) -> int:
        return validate_integer_range("metadataMaxAgeMs", max_age_ms, 1, 86400000)

    @option_setter("sslLocalCert")
    def set_ssl_local_cert(self, local_cert: str) -> str:
        return validate_file_path("sslLocalCert", local_cert, "Set ssl local cert file is invalid")

    @option_setter("sslLocalPk")
    def set_ssl_local_pk(self, local_pk: str) -> str:
        return validate_file_path("sslLocalPk", local_pk, "Set ssl local private key file is invalid")

    @option_setter("sslCafile")
    def set_ssl_cafile(self, cafile: str) -> str:
        return validate_file_path("sslCafile", cafile, "Set ssl ca file is invalid")

    @option_setter("saslKeytab")
    def set_sasl_keytab(self, keytab: str) -> str:
        return validate_file_path("saslKeytab", keytab, "Set sasl gssapi keytab file is invalid")

    @option_setter("securityProtocol")
    def set_security_protocol(self, protocol: str) -> SecurityProtocol:
        return validate_enum_value(
            "securityProtocol",
            protocol,
            SecurityProtocol,
            f"Invalid security protocol given, must be one of {[p.value for p in ALLOW_SECURITY_PROTOCOLS]}",
        )

    @option_setter("saslMechanism")
    def set_sasl_mechanism(self, mechanism: str) -> SaslMechanism:
        return validate_enum_value(
            "saslMechanism",
            mechanism,
            SaslMechanism,
            f"Invalid sasl mechanism given, must be one of {[m.value for m in ALLOW_MECHANISMS]}",
        )
