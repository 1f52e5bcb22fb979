"""Tests for one-line message previews."""

import pytest

from chit_parse.core.preview import DEFAULT_PREVIEW_LENGTH, message_preview, plain_text


def test_empty_message_has_empty_preview():
    assert message_preview("") == ""


def test_fenced_block_becomes_placeholder():
    assert message_preview("Here:\n```py\nprint(1)\n```\ndone") == "Here: [code] done"


def test_inline_markdown_is_stripped():
    assert message_preview("**bold** and *em* with `x`") == "bold and em with [code]"


def test_heading_and_link_are_flattened():
    assert message_preview("## Heading\n[docs](https://example.com)") == "Heading docs"


def test_short_message_is_not_truncated():
    text = "a" * DEFAULT_PREVIEW_LENGTH
    assert message_preview(text) == text


def test_long_message_truncated_to_default_length():
    result = message_preview("b" * 80)
    assert len(result) == DEFAULT_PREVIEW_LENGTH
    assert result == "b" * 47 + "..."


@pytest.mark.parametrize("max_length", [10, 40])
def test_custom_max_length(max_length):
    result = message_preview("word " * 30, max_length)
    assert len(result) == max_length
    assert result.endswith("...")


def test_plain_text_trims_outer_whitespace():
    assert plain_text("\n\nhello\n") == "hello"
