"""Tests for text combinators."""

import pytest

from collage.errors import InvalidLayoutSpec
from collage.models.color import RED
from collage.models.text import (
    TextAnchor,
    TextLine,
    TextStyle,
    anchor,
    append,
    bold,
    color,
    concat,
    empty_text,
    from_string,
    height,
    join,
    line,
    plain_text,
    style,
    typeface,
)


def test_from_string_and_plain_text():
    assert plain_text(from_string("hello")) == "hello"
    assert plain_text(empty_text()) == ""


def test_append_keeps_span_styles():
    t = append(from_string("a"), bold(from_string("b")))
    assert [s.style.bold for s in t.spans] == [False, True]


def test_join_puts_separator_between_items_only():
    t = join(from_string(", "), [from_string(w) for w in ("a", "b", "c")])
    assert plain_text(t) == "a, b, c"
    assert plain_text(join(from_string("-"), [])) == ""


def test_concat():
    assert plain_text(concat([from_string("ab"), from_string("cd")])) == "abcd"


def test_style_merges_spans():
    t = style(TextStyle(height=20), append(from_string("a"), from_string("b")))
    assert len(t.spans) == 1
    assert t.spans[0].style.height == 20


def test_modifiers_apply_to_every_span():
    t = color(RED, typeface("serif", append(from_string("a"), from_string("b"))))
    assert all(s.style.typeface == "serif" for s in t.spans)
    assert all(s.style.color == RED for s in t.spans)
    assert line(TextLine.UNDER, t).spans[0].style.line is TextLine.UNDER


def test_negative_height_rejected():
    with pytest.raises(InvalidLayoutSpec):
        height(-1, from_string("x"))


def test_anchor():
    assert anchor(TextAnchor.TO_LEFT, from_string("x")).anchor is TextAnchor.TO_LEFT
    assert from_string("x").anchor is TextAnchor.CENTER
