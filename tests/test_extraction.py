import asyncio

import pytest
from loguru import logger

from presence import DEFAULT_MESSAGE, ValueNotPresentError, empty, resolve_error, wrap


class CustomError(Exception):
    pass


def test_or_else():
    assert wrap(1).or_else(2) == 1
    assert empty().or_else(2) == 2


def test_or_else_get_is_lazy():
    calls = []

    def supplier():
        calls.append(1)
        return 9

    assert wrap(1).or_else_get(supplier) == 1
    assert calls == []
    assert empty().or_else_get(supplier) == 9
    assert calls == [1]


def test_or_else_raise_present():
    assert wrap(5).or_else_raise() == 5
    assert wrap(5).or_else_raise("unused") == 5
    assert wrap(5).or_else_raise(lambda: CustomError()) == 5


def test_or_else_raise_default_message():
    with pytest.raises(ValueNotPresentError) as exc_info:
        empty().or_else_raise()
    assert str(exc_info.value) == "Value not present."
    assert exc_info.value.message == DEFAULT_MESSAGE


def test_or_else_raise_empty_string_uses_default():
    with pytest.raises(ValueNotPresentError, match="^Value not present\\.$"):
        empty().or_else_raise("")


def test_or_else_raise_message():
    with pytest.raises(ValueNotPresentError) as exc_info:
        empty().or_else_raise("X")
    assert str(exc_info.value) == "X"


def test_or_else_raise_supplier():
    err = CustomError("custom")
    with pytest.raises(CustomError) as exc_info:
        empty().or_else_raise(lambda: err)
    assert exc_info.value is err


def test_not_present_error_is_value_error():
    with pytest.raises(ValueError):
        empty().or_else_raise()


def test_resolve_error():
    assert isinstance(resolve_error(), ValueNotPresentError)
    assert str(resolve_error("msg")) == "msg"
    assert isinstance(resolve_error(CustomError), CustomError)


def test_to_future_present():
    future = wrap(123).to_future()
    assert future.done()
    assert future.result() == 123


def test_to_future_empty():
    future = empty().to_future()
    assert future.done()
    assert isinstance(future.exception(), ValueNotPresentError)
    assert str(future.exception()) == "Value not present."

    assert str(empty().to_future("X").exception()) == "X"

    err = CustomError()
    assert empty().to_future(lambda: err).exception() is err


def test_to_future_awaitable():
    async def run():
        value = await asyncio.wrap_future(wrap(1).to_future())
        with pytest.raises(ValueNotPresentError):
            await asyncio.wrap_future(empty().to_future())
        return value

    assert asyncio.run(run()) == 1


def test_empty_extraction_is_logged():
    messages = []
    logger.enable("presence")
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        with pytest.raises(ValueNotPresentError):
            empty().or_else_raise()
    finally:
        logger.remove(handler_id)
        logger.disable("presence")

    assert any("raising" in m for m in messages)
