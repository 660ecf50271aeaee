import string
from pathlib import Path

import pytest

from corvid.utility import (
    join_path,
    random_alphanum,
    sanitize_filename,
    string_equals,
    trim,
)


def test_sanitize_keeps_plain_name():
    assert sanitize_filename("index.html") == "index.html"


def test_sanitize_keeps_nested_relative_path():
    assert sanitize_filename("dir/sub/page.html") == "dir/sub/page.html"


def test_sanitize_replaces_leading_slash():
    result = sanitize_filename("/etc/hosts")
    assert result[0] == "_"
    assert result[1:] == "etc/hosts"


def test_sanitize_collapses_parent_directory():
    result = sanitize_filename("../secret.txt")
    assert ".." not in result
    assert result.endswith("/secret.txt")


def test_sanitize_collapses_parent_directory_after_separator():
    result = sanitize_filename("a/../b")
    assert ".." not in result
    assert result.startswith("a/")
    assert result.endswith("/b")


def test_sanitize_device_name_with_extension():
    assert sanitize_filename("AUX.txt") == "_.txt"


def test_sanitize_device_name_alone_case_insensitive():
    assert sanitize_filename("con") == "_"
    assert sanitize_filename("Nul") == "_"


def test_sanitize_numbered_device_requires_digit():
    assert sanitize_filename("COM1") == "_"
    assert sanitize_filename("LPT9.log") == "_.log"
    assert sanitize_filename("COM") == "COM"
    assert sanitize_filename("LPT0") == "LPT0"


def test_sanitize_device_prefix_of_longer_name_is_kept():
    assert sanitize_filename("console.txt") == "console.txt"
    assert sanitize_filename("auxiliary") == "auxiliary"


@pytest.mark.parametrize("char", list('?<>:*|"') + ["\x00", "\x1f", "\x85"])
def test_sanitize_replaces_forbidden_characters(char):
    result = sanitize_filename(f"a{char}b")
    assert result == "a_b"


def test_sanitize_custom_replacement():
    assert sanitize_filename("a?b", "-") == "a-b"
    assert sanitize_filename("/x", "-") == "-x"


def test_sanitize_truncates_long_names():
    result = sanitize_filename("x" * 400)
    assert len(result) == 255
    assert set(result) == {"x"}


def test_sanitize_output_has_no_forbidden_characters():
    result = sanitize_filename('/../a<b>c:d*e|f"g?h')
    assert not set(result) & set('<>:*|"?')
    assert not result.startswith("/")


def test_random_alphanum_length_and_alphabet():
    value = random_alphanum(40)
    assert len(value) == 40
    assert set(value) <= set(string.ascii_letters + string.digits)


def test_random_alphanum_zero_length():
    assert random_alphanum(0) == ""


def test_random_alphanum_varies():
    values = {random_alphanum(20) for _ in range(5)}
    assert len(values) == 5


def test_random_alphanum_negative_size():
    with pytest.raises(ValueError):
        random_alphanum(-1)


def test_join_path_combines_components():
    assert Path(join_path("templates", "page.html")).parts == ("templates", "page.html")


def test_join_path_with_trailing_separator():
    assert Path(join_path("templates/", "page.html")).parts == ("templates", "page.html")


def test_join_path_empty_base():
    assert join_path("", "page.html") == "page.html"


def test_string_equals_case_insensitive_by_default():
    assert string_equals("Content-Type", "content-type") is True
    assert string_equals("abc", "abd") is False


def test_string_equals_case_sensitive():
    assert string_equals("Host", "host", case_sensitive=True) is False
    assert string_equals("Host", "Host", case_sensitive=True) is True


def test_string_equals_different_lengths():
    assert string_equals("abc", "abcd") is False
    assert string_equals("", "") is True


def test_trim_removes_surrounding_whitespace():
    assert trim(" \t hello world \r\n") == "hello world"


def test_trim_all_whitespace_and_empty():
    assert trim(" \t\n\v\f\r ") == ""
    assert trim("") == ""


def test_trim_keeps_inner_whitespace():
    assert trim("a  b") == "a  b"