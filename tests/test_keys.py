"""Unit tests for cache key sanitization."""

import pytest

from tablecache.services.keys import sanitize_key


def test_allowed_characters_pass_through():
    assert sanitize_key("user_42-profile") == "user_42-profile"


def test_strips_spaces_and_punctuation():
    assert sanitize_key("a b/c") == "abc"
    assert sanitize_key("report:2024.01?x=1") == "report202401x1"


def test_strips_vertical_bar():
    assert sanitize_key("left|right") == "leftright"


def test_strips_non_ascii():
    assert sanitize_key("café_ключ") == "caf_"


def test_empty_result_is_returned():
    assert sanitize_key("!!! ///") == ""
    assert sanitize_key("") == ""


@pytest.mark.parametrize(
    "raw",
    ["a b/c", "left|right", "Ünïcödé-42", "  __--  ", "{json: true}", ""],
)
def test_idempotent(raw):
    once = sanitize_key(raw)
    assert sanitize_key(once) == once
