import pytest

from filestore.errors import ErrorKind, InvalidName, NotFound
from filestore.models import Result


def test_success_unwraps_value():
    result = Result.success("/aaa")
    assert result.ok
    assert result.error is None
    assert result.unwrap() == "/aaa"


def test_failure_keeps_kind_and_message():
    result = Result.failure(InvalidName("bad name"))
    assert not result.ok
    assert result.error is ErrorKind.INVALID_NAME
    assert result.message == "bad name"
    with pytest.raises(InvalidName, match="bad name"):
        result.unwrap()


def test_failure_from_serialized_kind():
    result = Result.model_validate({"ok": False, "error": "not_found", "message": "gone"})
    with pytest.raises(NotFound):
        result.unwrap()
