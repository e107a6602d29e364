import os
from dotenv import load_dotenv, find_dotenv
from typing import Any, List, Mapping, Optional

from .singleton import SingletonMeta

_TRUE_VALUES = ('true', '1', 't', 'y', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'f', 'n', 'no', 'off')


def cast_env_value(key: str, raw_value: str, var_type: type = str) -> Any:
    """
    Casts a raw environment string to ``var_type``.

    Supported types are str, int, bool and list (comma-separated, blank
    items dropped). Raises ValueError when the value cannot be cast.
    """
    if var_type == str:
        return raw_value
    if var_type == int:
        try:
            return int(raw_value.strip())
        except ValueError:
            raise ValueError(
                f"Environment variable '{key}' with value '{raw_value}' could not be cast to int."
            )
    if var_type == bool:
        val_lower = raw_value.strip().lower()
        if val_lower in _TRUE_VALUES:
            return True
        if val_lower in _FALSE_VALUES:
            return False
        raise ValueError(
            f"Environment variable '{key}' with value '{raw_value}' could not be reliably cast to bool."
        )
    if var_type == list:
        items: List[str] = [item.strip() for item in raw_value.split(',')]
        return [item for item in items if item]
    raise TypeError(f"Unsupported type '{var_type.__name__}'. Use str, int, bool, or list.")


class EnvironmentSettings(metaclass=SingletonMeta):
    _loaded: bool = False

    def __init__(self) -> None:
        if not EnvironmentSettings._loaded:
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                load_dotenv(dotenv_path=dotenv_path, override=False)
            EnvironmentSettings._loaded = True

    def get(
        self,
        key: str,
        var_type: type = str,
        default: Optional[Any] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Reads ``key`` from ``environ`` (the process environment by default)
        and casts it to ``var_type``. Returns ``default`` when it is unset.
        """
        source = os.environ if environ is None else environ
        raw_value = source.get(key)
        if raw_value is None:
            return default
        return cast_env_value(key, raw_value, var_type)


env_settings = EnvironmentSettings()
