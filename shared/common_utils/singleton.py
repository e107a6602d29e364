from threading import RLock
from typing import Any, Dict


class SingletonMeta(type):
    """
    One instance per class. Constructor arguments only apply to the call
    that builds the instance; later calls return it unchanged.
    """

    _instance: Dict[type, Any] = {}
    _lock = RLock()

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        if cls not in cls._instance:
            with SingletonMeta._lock:
                # another thread may have won the race while we waited
                if cls not in cls._instance:
                    cls._instance[cls] = super().__call__(*args, **kwargs)
                    return cls._instance[cls]

        if args or kwargs:
            from .logger import logger

            logger.warning(
                f"{cls.__name__} is already initialized, ignoring constructor arguments "
                f"args={args} kwargs={kwargs}"
            )
        return cls._instance[cls]
