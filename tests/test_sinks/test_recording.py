"""Tests for the recording sink."""

from collage.elements import beside, color, spacer
from collage.interfaces import PrimitiveSink, draw
from collage.models.color import BLUE, RED
from collage.models.scene import Scene
from collage.sinks.recording import RecordingSink
from collage.sinks.svg import SvgSink


def test_sinks_satisfy_protocol():
    assert isinstance(RecordingSink(), PrimitiveSink)
    assert isinstance(SvgSink(), PrimitiveSink)


def test_records_scenes_in_order(pipeline):
    sink = RecordingSink()
    assert sink.last is None
    first = pipeline.render(color(RED, spacer(1, 1)))
    second = pipeline.render(beside(color(RED, spacer(1, 1)), color(BLUE, spacer(1, 1))))
    draw(sink, first)
    draw(sink, second)
    assert sink.scenes == [first, second]
    assert sink.last is second
    assert len(sink.primitives) == 3


def test_clear():
    sink = RecordingSink()
    draw(sink, Scene())
    sink.clear()
    assert sink.scenes == []
