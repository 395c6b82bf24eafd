"""
Registry pattern utility.

Usage example::

    from psd_import.registry import new_registry

    TYPES, register = new_registry()

    @register(Tag.UNICODE_LAYER_NAME)
    class UnicodeLayerName:
        ...

    reader = TYPES[Tag.UNICODE_LAYER_NAME]
"""

from typing import Any, Callable, TypeVar

T = TypeVar("T")


def new_registry() -> tuple[dict, Callable]:
    """
    Returns an empty dict and a @register decorator.
    """
    registry: dict = {}

    def register(key: Any) -> Callable[[T], T]:
        def decorator(obj: T) -> T:
            registry[key] = obj
            return obj

        return decorator

    return registry, register
