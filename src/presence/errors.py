from typing import Callable, Optional, Union

DEFAULT_MESSAGE = "Value not present."

MessageOrSupplier = Union[str, Callable[[], BaseException]]


class ValueNotPresentError(ValueError):
    """Raised when a value is extracted from an empty container."""

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
        self.message = message


def resolve_error(message_or_supplier: Optional[MessageOrSupplier] = None) -> BaseException:
    """
    Build the error for an empty extraction.

    - missing or empty string -> ValueNotPresentError with the default message
    - string -> ValueNotPresentError carrying that message
    - callable -> whatever it returns, untouched
    """
    if not message_or_supplier:
        return ValueNotPresentError()

    if isinstance(message_or_supplier, str):
        return ValueNotPresentError(message_or_supplier)

    return message_or_supplier()
