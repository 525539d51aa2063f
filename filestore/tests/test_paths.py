import pytest

from filestore import paths
from filestore.errors import ErrorKind, InvalidName, MalformedPath, NotFound


def test_split_empty_path():
    assert paths.split("") == []


@pytest.mark.parametrize("path, expected", [
    ("aaa", ["aaa"]),
    ("aaa/bbb", ["aaa", "bbb"]),
    ("../..", ["..", ".."]),
    ("a.txt/b c", ["a.txt", "b c"]),
])
def test_split_valid_paths(path, expected):
    assert paths.split(path) == expected


@pytest.mark.parametrize("path", ["/", "/aaa", "aaa//bbb", "aaa/", "a/b/", "//"])
def test_split_rejects_bad_separators(path):
    with pytest.raises(MalformedPath) as excinfo:
        paths.split(path)
    assert excinfo.value.kind is ErrorKind.MALFORMED_PATH


def test_malformed_path_is_not_a_not_found_error():
    with pytest.raises(MalformedPath) as excinfo:
        paths.split("/aaa")
    assert not isinstance(excinfo.value, NotFound)


@pytest.mark.parametrize("name", ["a/b", "/", "", ".", ".."])
def test_validate_name_rejects(name):
    with pytest.raises(InvalidName):
        paths.validate_name(name)


@pytest.mark.parametrize("name", ["yoyo", "notes.txt", "...", ".bashrc", "a b"])
def test_validate_name_accepts(name):
    paths.validate_name(name)


def test_join_is_root_aware():
    assert paths.join("/", "aaa") == "/aaa"
    assert paths.join("/aaa", "bbb") == "/aaa/bbb"


def test_absolute():
    assert paths.absolute("") == "/"
    assert paths.absolute("aaa/bbb") == "/aaa/bbb"


@pytest.mark.parametrize("name, expected", [
    ("yoyo", ""),
    ("notes.txt", "txt"),
    ("archive.tar.gz", "gz"),
    (".bashrc", "bashrc"),
    ("trailing.", ""),
])
def test_extension(name, expected):
    assert paths.extension(name) == expected
