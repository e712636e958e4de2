from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from loguru import logger

from presence.core.values import is_present
from presence.errors import MessageOrSupplier, resolve_error

T = TypeVar("T")
U = TypeVar("U")

# Values of these types compare by value; everything else by identity.
_SCALARS = (str, bytes, int, float, complex, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strict_equals(a: Any, b: Any) -> bool:
    # int and float are one kind of number; nan never equals itself
    if _is_number(a) and _is_number(b):
        return a == b
    if a is b:
        return True
    if isinstance(a, _SCALARS) and type(a) is type(b):
        return a == b
    return False


def _json_ready(value: Any, path: frozenset = frozenset()) -> Any:
    """Replace non-finite floats with None, as JSON has no token for them."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (dict, list, tuple)):
        if id(value) in path:
            raise ValueError("Circular reference detected")
        path = path | {id(value)}
        if isinstance(value, dict):
            return {key: _json_ready(item, path) for key, item in value.items()}
        return [_json_ready(item, path) for item in value]
    return value


def _render(value: Any) -> str:
    if isinstance(value, (bool, int, float, complex)):
        return str(value)
    try:
        return json.dumps(_json_ready(value), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.debug("Falling back to str() rendering for {kind}: {exc}", kind=type(value).__name__, exc=exc)
        return str(value)


class Container(ABC, Generic[T]):
    """
    Immutable holder that is either Present (one non-absent value) or Empty.

    Build instances with `wrap`, `empty` or the `maybe` entry point. Use
    `isinstance(c, Present)` or `match c: case Present(v): ...` to narrow
    the static type after a check.
    """

    __slots__ = ()

    @staticmethod
    def is_present_value(value: Any) -> bool:
        return is_present(value)

    @classmethod
    def of(cls, value: Optional[T]) -> Container[T]:
        return wrap(value)

    @classmethod
    def empty(cls) -> Empty:
        return EMPTY

    @abstractmethod
    def get(self) -> Optional[T]:
        """Return the stored slot: the value, or None when empty."""
        ...

    @abstractmethod
    def is_present(self) -> bool:
        ...

    def is_empty(self) -> bool:
        return not self.is_present()

    @abstractmethod
    def if_present(self, consumer: Callable[[T], Any]) -> Container[T]:
        """Call consumer(value) when present. Returns self."""
        ...

    @abstractmethod
    def if_empty(self, consumer: Callable[[], Any]) -> Container[T]:
        """Call consumer() when empty. Returns self."""
        ...

    @abstractmethod
    def filter(self, predicate: Callable[[T], bool]) -> Container[T]:
        ...

    @abstractmethod
    def map(self, mapper: Callable[[T], Optional[U]]) -> Container[U]:
        """Apply mapper to the value; an absent result gives an empty container."""
        ...

    @abstractmethod
    def flat_map(self, mapper: Callable[[T], Container[U]]) -> Container[U]:
        """Apply mapper to the value and return its container as is."""
        ...

    @abstractmethod
    def or_else(self, fallback: T) -> T:
        ...

    @abstractmethod
    def or_else_get(self, supplier: Callable[[], T]) -> T:
        """Like or_else, but the fallback is only computed when empty."""
        ...

    @abstractmethod
    def or_else_raise(self, message_or_supplier: Optional[MessageOrSupplier] = None) -> T:
        """
        Return the value, or raise when empty.

        With no argument a ValueNotPresentError("Value not present.") is
        raised; a string becomes the message; a callable is invoked and its
        return value is raised as is.
        """
        ...

    @abstractmethod
    def to_future(self, message_or_supplier: Optional[MessageOrSupplier] = None) -> Future[T]:
        """
        Return an already settled Future: resolved with the value, or failed
        with the error or_else_raise would raise. Await it from asyncio code
        with asyncio.wrap_future.
        """
        ...

    def equals(self, other: Container[Any], comparator: Optional[Callable[[Any, Any], bool]] = None) -> bool:
        if self.is_empty() and other.is_empty():
            return True

        if self.is_empty() or other.is_empty():
            return False

        if comparator is not None:
            return comparator(self.get(), other.get())

        return _strict_equals(self.get(), other.get())

    def contains(self, value: Any) -> bool:
        return self.is_present() and _strict_equals(self.get(), value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Container):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        value = self.get()
        if value is None:
            return hash(Empty)
        if _is_number(value):
            return hash(value)
        if isinstance(value, _SCALARS):
            return hash((type(value), value))
        return id(value)

    def __bool__(self) -> bool:
        return self.is_present()

    def __repr__(self) -> str:
        return str(self)


@dataclass(frozen=True, eq=False, repr=False)
class Present(Container[T]):
    value: T

    def __post_init__(self):
        if not is_present(self.value):
            raise TypeError(f"Present cannot hold {self.value!r}; use wrap() or empty()")

    def get(self) -> T:
        return self.value

    def is_present(self) -> bool:
        return True

    def if_present(self, consumer: Callable[[T], Any]) -> Present[T]:
        consumer(self.value)
        return self

    def if_empty(self, consumer: Callable[[], Any]) -> Present[T]:
        return self

    def filter(self, predicate: Callable[[T], bool]) -> Container[T]:
        if predicate(self.value):
            return self
        return EMPTY

    def map(self, mapper: Callable[[T], Optional[U]]) -> Container[U]:
        return wrap(mapper(self.value))

    def flat_map(self, mapper: Callable[[T], Container[U]]) -> Container[U]:
        return mapper(self.value)

    def or_else(self, fallback: T) -> T:
        return self.value

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        return self.value

    def or_else_raise(self, message_or_supplier: Optional[MessageOrSupplier] = None) -> T:
        return self.value

    def to_future(self, message_or_supplier: Optional[MessageOrSupplier] = None) -> Future[T]:
        future: Future[T] = Future()
        future.set_result(self.value)
        return future

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def __str__(self) -> str:
        return f"Container.Present<{_render(self.value)}>"


class Empty(Container[Any]):
    """The empty state. There is a single instance, EMPTY."""

    __slots__ = ()
    _instance: Optional[Empty] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get(self) -> None:
        return None

    def is_present(self) -> bool:
        return False

    def if_present(self, consumer: Callable[[Any], Any]) -> Empty:
        return self

    def if_empty(self, consumer: Callable[[], Any]) -> Empty:
        consumer()
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> Empty:
        return self

    def map(self, mapper: Callable[[Any], Any]) -> Empty:
        return self

    def flat_map(self, mapper: Callable[[Any], Container[U]]) -> Empty:
        return self

    def or_else(self, fallback: T) -> T:
        return fallback

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        return supplier()

    def or_else_raise(self, message_or_supplier: Optional[MessageOrSupplier] = None) -> Any:
        error = resolve_error(message_or_supplier)
        logger.debug("Empty container extracted, raising {error!r}", error=error)
        raise error

    def to_future(self, message_or_supplier: Optional[MessageOrSupplier] = None) -> Future[Any]:
        error = resolve_error(message_or_supplier)
        logger.debug("Empty container converted to a failed future: {error!r}", error=error)
        future: Future[Any] = Future()
        future.set_exception(error)
        return future

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __str__(self) -> str:
        return "Container.Empty"

    def __reduce__(self):
        return (Empty, ())


EMPTY = Empty()


def wrap(value: Optional[T]) -> Container[T]:
    if is_present(value):
        return Present(value)
    return EMPTY


def empty() -> Empty:
    return EMPTY


class ContainerFactory:
    """Callable entry point: maybe(value) wraps a value, maybe.empty() is the empty container."""

    def __call__(self, value: Optional[T]) -> Container[T]:
        return wrap(value)

    @staticmethod
    def empty() -> Empty:
        return EMPTY

    def __repr__(self) -> str:
        return "maybe"


maybe = ContainerFactory()
