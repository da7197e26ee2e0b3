"""Text measurement — the fallback measurer and multi-span aggregation."""

from __future__ import annotations

from collage.engine.config import EngineConfig
from collage.interfaces import TextMeasurer, TextMetrics
from collage.models.text import Text, TextStyle

# Monospace glyphs are a fixed fraction of the em regardless of configuration.
_MONOSPACE_RATIO = 0.6


class ApproximateTextMeasurer:
    """Font-free metrics: every glyph is a fixed fraction of the text height.

    Good enough for layout tests and previews; real renderers should pass
    a measurer backed by their glyph cache.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def measure(self, text: str, style: TextStyle) -> TextMetrics:
        cfg = self.config
        size = style.height if style.height is not None else cfg.default_text_height
        ratio = _MONOSPACE_RATIO if style.monospace else cfg.char_width_ratio
        width = len(text) * size * ratio
        if style.bold:
            width *= cfg.bold_width_factor
        return TextMetrics(
            width=width,
            height=size * cfg.line_height_ratio,
            baseline=size * cfg.baseline_ratio,
        )


def with_default_height(style: TextStyle, config: EngineConfig) -> TextStyle:
    if style.height is not None:
        return style
    return style.model_copy(update={"height": config.default_text_height})


def measure_text(text: Text, measurer: TextMeasurer, config: EngineConfig) -> TextMetrics:
    """Spans sit on one shared baseline: widths add, height and baseline take the max."""
    width = height = baseline = 0.0
    for span in text.spans:
        m = measurer.measure(span.string, with_default_height(span.style, config))
        width += m.width
        height = max(height, m.height)
        baseline = max(baseline, m.baseline)
    return TextMetrics(width=width, height=height, baseline=baseline)
