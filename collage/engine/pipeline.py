"""Pipeline orchestrator — measure, arrange, flatten, with per-stage timing."""

from __future__ import annotations

import logging
import time

from collage.engine.arrange import arrange_root
from collage.engine.config import EngineConfig
from collage.engine.context import Accumulator, LayoutNode, Measured, RenderContext
from collage.engine.measure import form_bounds
from collage.engine.metrics import ApproximateTextMeasurer
from collage.engine.registry import HandlerRegistry, get_registry
from collage.interfaces import PrimitiveSink, TextMeasurer, draw
from collage.models.geometry import Rect
from collage.models.nodes import Element, Form
from collage.models.scene import Primitive, Scene

logger = logging.getLogger(__name__)


class Pipeline:
    """Turns element trees into scenes.

    Holds no per-render state, so one instance can serve any number of
    renders, from any thread, as long as the measurer can.
    """

    def __init__(
        self,
        registry: HandlerRegistry | None = None,
        config: EngineConfig | None = None,
        measurer: TextMeasurer | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or EngineConfig.from_settings()
        self.measurer = measurer or ApproximateTextMeasurer(self.config)
        self.ctx = RenderContext(registry=self.registry, measurer=self.measurer, config=self.config)

    def measure(self, element: Element) -> Measured:
        """Intrinsic sizes, bottom-up."""
        return self.ctx.measure(element)

    def layout(self, element: Element, size: tuple[float, float] | None = None) -> LayoutNode:
        """Measure and arrange. ``size`` is the root box (default: intrinsic size)."""
        t0 = time.perf_counter()
        measured = self.ctx.measure(element)
        t1 = time.perf_counter()
        node = arrange_root(measured, self.ctx, size)
        t2 = time.perf_counter()
        logger.debug(
            "  measure %.1fms, arrange %.1fms", (t1 - t0) * 1000, (t2 - t1) * 1000
        )
        return node

    def flatten(self, node: LayoutNode) -> tuple[Primitive, ...]:
        """Primitives of an arranged tree, in paint order."""
        return tuple(self.ctx.flatten_node(node, Accumulator()))

    def flatten_form(self, form: Form) -> tuple[Primitive, ...]:
        """Primitives of a free-standing form, in its own coordinates."""
        return tuple(self.ctx.flatten_form(form, Accumulator()))

    def form_bounds(self, form: Form) -> Rect:
        return form_bounds(form, self.ctx)

    def render(self, element: Element, size: tuple[float, float] | None = None) -> Scene:
        """Lay out ``element`` and flatten it into a scene."""
        start = time.perf_counter()
        try:
            node = self.layout(element, size)
            t0 = time.perf_counter()
            primitives = self.flatten(node)
            logger.debug("  flatten %.1fms", (time.perf_counter() - t0) * 1000)
        except Exception as e:
            logger.warning("Render FAILED: %s", e)
            raise

        scene = Scene(width=node.width, height=node.height, primitives=primitives)
        logger.info(
            "Render complete: %d primitives, %gx%g in %.1fms",
            scene.count,
            scene.width,
            scene.height,
            (time.perf_counter() - start) * 1000,
        )
        return scene

    def render_to(
        self, sink: PrimitiveSink, element: Element, size: tuple[float, float] | None = None
    ) -> Scene:
        """Render and hand the scene to ``sink``."""
        scene = self.render(element, size)
        draw(sink, scene)
        return scene


def create_pipeline(
    config: EngineConfig | None = None, measurer: TextMeasurer | None = None
) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config, measurer=measurer)
