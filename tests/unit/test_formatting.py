from collections import OrderedDict

import pytest

from femtotest.formatting import (
    count_common_prefix,
    format_arguments,
    format_value,
    string_extract,
    type_name,
)


class Point:
    def __init__(self, x, y):
        self.x, self.y = x, y

    def __str__(self):
        return f"({self.x}, {self.y})"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "null"),
        ("plain", '"plain"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("a\r\nb\tc\0", '"a\\r\\nb\\tc\\0"'),
        (True, "True"),
        (42, "42"),
        ([1, "two", None], '[1, "two", null]'),
        ((1, [2, 3]), "[1, [2, 3]]"),
        (OrderedDict([("a", 1), ("b", [True])]), '{{ "a", 1 }, { "b", [True] }}'),
        (ValueError("bad input"), "[ValueError] bad input"),
        (1.5, "[float] 1.5"),
    ],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_value_names_user_types_with_module():
    assert format_value(Point(1, 2)) == f"[{__name__}.Point] (1, 2)"


def test_type_name_leaves_builtins_unqualified():
    assert type_name(KeyError) == "KeyError"
    assert type_name(Point) == f"{__name__}.Point"


def test_format_arguments():
    assert format_arguments(None) == "()"
    assert format_arguments(()) == "()"
    assert format_arguments((1, "a")) == '(1, "a")'


def test_count_common_prefix():
    assert count_common_prefix("hello world", "hello there") == 6
    assert count_common_prefix("abc", "abc") == 3
    assert count_common_prefix("", "abc") == 0
    assert count_common_prefix("ABCd", "abcD") == 0
    assert count_common_prefix("ABCd", "abcD", ignore_case=True) == 4


def test_string_extract_short_strings_are_untouched():
    assert string_extract("hello world", 6) == "hello world"


def test_string_extract_windows_long_strings():
    text = "0123456789abcdefghijklmnopqrstuvwxyz"

    # Offset past 15 keeps the 10 characters before the difference.
    assert string_extract(text, 20) == "...abcdefghijklmnopqrstuvwxyz"
    # Early difference in a long string keeps the first 20 characters.
    assert string_extract(text, 2) == "0123456789abcdefghij..."
    assert string_extract("x" * 20 + "abc", 18) == "..." + "x" * 12 + "abc"


def test_unordered_collections_render_sorted():
    assert format_value({"gamma", "alpha", "delta", "beta"}) == '["alpha", "beta", "delta", "gamma"]'
    assert format_value(frozenset({3, 1, 2})) == "[1, 2, 3]"
    assert format_value({"k": {"b", "a"}}) == '{{ "k", ["a", "b"] }}'
