import pickle

from presence.core.values import ABSENT, AbsentType, is_absent, is_present


def test_absence_markers():
    assert is_absent(None)
    assert is_absent(ABSENT)
    assert not is_present(None)
    assert not is_present(ABSENT)


def test_falsy_values_are_present():
    for val in (0, 0.0, "", False, [], {}, b""):
        assert is_present(val)
        assert not is_absent(val)


def test_absent_is_singleton():
    assert AbsentType() is ABSENT
    assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT
    assert repr(ABSENT) == "ABSENT"
    assert not ABSENT
