"""Styled text.

A ``Text`` is a sequence of spans, each with its own ``TextStyle``, plus an
anchor hint telling the flattener where the text sits relative to its
origin. Every combinator returns a new ``Text``.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, field_validator

from collage.errors import InvalidLayoutSpec
from collage.models.color import BLACK, Color


class TextLine(str, enum.Enum):
    UNDER = "under"
    OVER = "over"
    THROUGH = "through"


class TextAnchor(str, enum.Enum):
    CENTER = "center"
    TO_LEFT = "to_left"  # text ends at the origin
    TO_RIGHT = "to_right"  # text starts at the origin


class TextStyle(BaseModel):
    """Font request. ``None`` typeface/height fall back to renderer defaults."""

    model_config = ConfigDict(frozen=True)

    typeface: str | None = None
    height: float | None = None
    color: Color = BLACK
    bold: bool = False
    italic: bool = False
    line: TextLine | None = None
    monospace: bool = False

    @field_validator("height")
    @classmethod
    def _positive_height(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise InvalidLayoutSpec(f"Text height must be non-negative, got {v}")
        return v


class TextSpan(BaseModel):
    model_config = ConfigDict(frozen=True)

    string: str
    style: TextStyle = TextStyle()


class Text(BaseModel):
    model_config = ConfigDict(frozen=True)

    spans: tuple[TextSpan, ...] = ()
    anchor: TextAnchor = TextAnchor.CENTER

    def _map_styles(self, **update) -> Text:
        spans = tuple(
            TextSpan(string=s.string, style=s.style.model_copy(update=update)) for s in self.spans
        )
        return self.model_copy(update={"spans": spans})


def from_string(string: str) -> Text:
    return Text(spans=(TextSpan(string=string),))


def empty_text() -> Text:
    return from_string("")


def plain_text(text: Text) -> str:
    return "".join(span.string for span in text.spans)


def append(first: Text, second: Text) -> Text:
    return first.model_copy(update={"spans": first.spans + second.spans})


def concat(texts: list[Text]) -> Text:
    """Join texts end to end. The anchor comes from the first text."""
    if not texts:
        return empty_text()
    spans = tuple(span for t in texts for span in t.spans)
    return Text(spans=spans, anchor=texts[0].anchor)


def join(separator: Text, texts: list[Text]) -> Text:
    """Concatenate ``texts`` with ``separator`` between neighbours."""
    pieces: list[Text] = []
    for i, t in enumerate(texts):
        if i:
            pieces.append(separator)
        pieces.append(t)
    return concat(pieces)


def style(text_style: TextStyle, text: Text) -> Text:
    """Replace all styling with ``text_style``, merging spans into one."""
    return text.model_copy(
        update={"spans": (TextSpan(string=plain_text(text), style=text_style),)}
    )


def typeface(name: str, text: Text) -> Text:
    return text._map_styles(typeface=name)


def monospace(text: Text) -> Text:
    return text._map_styles(monospace=True)


def height(h: float, text: Text) -> Text:
    if h < 0:
        raise InvalidLayoutSpec(f"Text height must be non-negative, got {h}")
    return text._map_styles(height=h)


def color(c: Color, text: Text) -> Text:
    return text._map_styles(color=c)


def bold(text: Text) -> Text:
    return text._map_styles(bold=True)


def italic(text: Text) -> Text:
    return text._map_styles(italic=True)


def line(kind: TextLine, text: Text) -> Text:
    return text._map_styles(line=kind)


def anchor(position: TextAnchor, text: Text) -> Text:
    return text.model_copy(update={"anchor": position})
