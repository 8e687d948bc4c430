"""Tests for utility functions."""

import locale

import pytest
from loguru import logger

from dirtree.services.directory_service import DirectoryTree
from dirtree.services.exceptions import InvalidPathError
from dirtree.utils import get_sort_key, parse_path, setup_logging, unicode_sort_key


@pytest.mark.parametrize(
    "path,expected",
    [
        ("fruits", ("fruits",)),
        ("fruits/apples", ("fruits", "apples")),
        ("a/b/c/d", ("a", "b", "c", "d")),
        ("with space/x", ("with space", "x")),
    ],
)
def test_parse_path(path, expected):
    assert parse_path(path) == expected


@pytest.mark.parametrize(
    "path,reason",
    [
        ("", "path is empty"),
        ("/fruits", "leading slash"),
        ("fruits/", "trailing slash"),
        ("fruits//apples", "empty segment"),
        ("/", "leading slash"),
    ],
)
def test_parse_path_invalid(path, reason):
    with pytest.raises(InvalidPathError) as exc:
        parse_path(path)
    assert exc.value.reason == reason
    assert exc.value.path == path


def test_unicode_sort_key_orders_like_locale_compare():
    names = ["Zebra", "apple", "Äpfel", "Apple", "banana"]
    assert sorted(names, key=unicode_sort_key) == ["Äpfel", "apple", "Apple", "banana", "Zebra"]


def test_get_sort_key():
    assert get_sort_key("unicode") is unicode_sort_key
    assert get_sort_key("locale") is locale.strxfrm
    assert sorted(["b", "B", "a"], key=get_sort_key("ordinal")) == ["B", "a", "b"]


def test_setup_logging_enables_package_logs():
    messages = []
    setup_logging(log_to_file=False)
    sink_id = logger.add(messages.append, level="DEBUG")
    try:
        DirectoryTree(out=lambda line: None).run("CREATE a")
    finally:
        logger.remove(sink_id)
        logger.disable("dirtree")

    assert any("Created a" in str(message) for message in messages)
