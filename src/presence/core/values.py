from typing import Any


class AbsentType:
    """Marker for "nothing was produced". Falsy, like None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "ABSENT"
    def __bool__(self): return False
    def __reduce__(self): return "ABSENT"


ABSENT = AbsentType()


def is_absent(val: Any) -> bool:
    return val is ABSENT or val is None


def is_present(val: Any) -> bool:
    return val is not ABSENT and val is not None
