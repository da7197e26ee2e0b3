"""Engine configuration — text fallbacks and degenerate-geometry thresholds."""

from __future__ import annotations

from dataclasses import dataclass

from collage.config import Settings


@dataclass(frozen=True)
class EngineConfig:
    """Knobs read by the measure, arrange and flatten handlers."""

    # Text height used when a style leaves it unset
    default_text_height: float = 16.0

    # ApproximateTextMeasurer heuristics (fractions of the text height)
    char_width_ratio: float = 0.6
    bold_width_factor: float = 1.1
    line_height_ratio: float = 1.2
    baseline_ratio: float = 0.8

    # Below these counts a path/shape is degenerate and emits nothing
    min_path_points: int = 2
    min_shape_points: int = 3  # distinct points

    # Paint element background colors as rectangles under their content
    emit_backgrounds: bool = True

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> EngineConfig:
        """Engine knobs from ``config``, or from the environment as it is now."""
        config = config or Settings()
        return cls(
            default_text_height=config.default_text_height,
            char_width_ratio=config.char_width_ratio,
            line_height_ratio=config.line_height_ratio,
            baseline_ratio=config.baseline_ratio,
        )
