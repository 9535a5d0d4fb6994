import pytest

from judgerun.errors import RunnerError


def test_message_wraps_cause():
    err = RunnerError(OSError("boom"))
    assert str(err) == "failed io operation: boom"


def test_cause_is_kept():
    cause = FileNotFoundError("missing")
    err = RunnerError(cause)
    assert err.cause is cause


def test_can_be_raised_and_caught():
    cause = OSError("disk full")
    with pytest.raises(RunnerError) as info:
        raise RunnerError(cause)
    assert str(info.value) == "failed io operation: disk full"
    assert info.value.cause is cause