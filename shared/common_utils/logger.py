from os import environ
from datetime import datetime, tzinfo, UTC
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from logging import StreamHandler, Logger, NOTSET
from typing import Optional
from colorlog import ColoredFormatter

from .singleton import SingletonMeta

DEFAULT_TIMEZONE = "UTC"


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Returns the zone called ``name``, or UTC when it is empty or unknown."""
    if not name:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return UTC


class KafkaClientLogger(Logger, metaclass=SingletonMeta):
    _initialized = False

    def __init__(self):
        if KafkaClientLogger._initialized:
            return

        super().__init__(name="KafkaClientLogger", level=environ.get("LOG_LEVEL", NOTSET))

        timezone_name = environ.get("LOG_TIMEZONE", DEFAULT_TIMEZONE)
        self.timezone = resolve_timezone(timezone_name)

        formatter = ColoredFormatter(
            "%(log_color)s%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%d-%m-%Y, %H:%M:%S",
            log_colors={
                "DEBUG": "blue",
                "INFO": "",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        # only this formatter, other loggers in the process keep their clock
        formatter.converter = self.local_time

        console_handler = StreamHandler()
        console_handler.setFormatter(formatter)
        self.addHandler(console_handler)

        KafkaClientLogger._initialized = True

        if self.timezone is UTC and timezone_name not in ("", DEFAULT_TIMEZONE):
            self.warning(f"Unknown LOG_TIMEZONE '{timezone_name}', logging in UTC")

    def local_time(self, timestamp: Optional[float] = None):
        if timestamp is None:
            return datetime.now(tz=self.timezone).timetuple()
        return datetime.fromtimestamp(timestamp, tz=self.timezone).timetuple()


logger = KafkaClientLogger()
