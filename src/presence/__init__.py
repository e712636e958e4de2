from presence.logging_config import configure_logging, reset_logging
from presence.core.values import ABSENT, AbsentType, is_absent, is_present
from presence.core.container import (
    EMPTY,
    Container,
    ContainerFactory,
    Empty,
    Present,
    empty,
    maybe,
    wrap,
)
from presence.errors import DEFAULT_MESSAGE, ValueNotPresentError, resolve_error

configure_logging()

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "AbsentType",
    "Container",
    "ContainerFactory",
    "DEFAULT_MESSAGE",
    "EMPTY",
    "Empty",
    "Present",
    "ValueNotPresentError",
    "configure_logging",
    "empty",
    "is_absent",
    "is_present",
    "maybe",
    "reset_logging",
    "resolve_error",
    "wrap",
]
