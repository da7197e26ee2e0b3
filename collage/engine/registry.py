"""Handler registry — every per-variant engine step is a function registered via decorator.

Usage:
    @handler(stage=Stage.FLATTEN_FORM, kind=FormKind.PATH, description="Trace a polyline")
    def flatten_path(form: PathForm, acc: Accumulator, ctx: RenderContext) -> Iterator[Primitive]:
        ...

Each stage dispatches on one closed variant family. ``verify()`` checks that
every member of that family has a handler, so a new variant without engine
support fails at import time instead of mid-render.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable

from collage.errors import DuplicateHandler, MissingHandler
from collage.models.nodes import ElementKind, FormKind, PayloadKind

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    MEASURE_ELEMENT = "measure_element"
    MEASURE_PAYLOAD = "measure_payload"
    ARRANGE = "arrange"
    FLATTEN_FORM = "flatten_form"
    FLATTEN_ELEMENT = "flatten_element"
    FLATTEN_PAYLOAD = "flatten_payload"


# The closed variant family each stage dispatches on
STAGE_KINDS: dict[Stage, type[enum.Enum]] = {
    Stage.MEASURE_ELEMENT: ElementKind,
    Stage.MEASURE_PAYLOAD: PayloadKind,
    Stage.ARRANGE: ElementKind,
    Stage.FLATTEN_FORM: FormKind,
    Stage.FLATTEN_ELEMENT: ElementKind,
    Stage.FLATTEN_PAYLOAD: PayloadKind,
}


@dataclass(frozen=True)
class HandlerSpec:
    stage: Stage
    kind: enum.Enum
    fn: Callable[..., Any]
    description: str = ""


class HandlerRegistry:
    """Registry of engine handlers keyed by (stage, kind)."""

    def __init__(self) -> None:
        self._handlers: dict[tuple[Stage, enum.Enum], HandlerSpec] = {}

    def register(self, spec: HandlerSpec) -> None:
        expected = STAGE_KINDS[spec.stage]
        if not isinstance(spec.kind, expected):
            raise TypeError(
                f"{spec.stage.name} dispatches on {expected.__name__}, got {spec.kind!r}"
            )
        key = (spec.stage, spec.kind)
        if key in self._handlers:
            raise DuplicateHandler(f"Duplicate handler for {spec.stage.name}/{spec.kind.value}")
        self._handlers[key] = spec
        logger.debug("Registered handler %s/%s", spec.stage.name, spec.kind.value)

    def get(self, stage: Stage, kind: enum.Enum) -> HandlerSpec:
        try:
            return self._handlers[(stage, kind)]
        except KeyError:
            raise MissingHandler(f"No {stage.name} handler for {kind!r}") from None

    def dispatch(self, stage: Stage, node: Any, *args: Any) -> Any:
        """Call the handler for ``node.kind`` with ``(node, *args)``."""
        return self.get(stage, node.kind).fn(node, *args)

    def for_stage(self, stage: Stage) -> list[HandlerSpec]:
        specs = [s for (st, _), s in self._handlers.items() if st == stage]
        return sorted(specs, key=lambda s: s.kind.value)

    def missing(self, stage: Stage | None = None) -> list[tuple[Stage, enum.Enum]]:
        stages = [stage] if stage is not None else list(Stage)
        return [
            (st, kind)
            for st in stages
            for kind in STAGE_KINDS[st]
            if (st, kind) not in self._handlers
        ]

    def verify(self) -> None:
        """Raise ``MissingHandler`` unless every stage covers its whole variant family."""
        gaps = self.missing()
        if gaps:
            listed = ", ".join(f"{st.name}/{kind.value}" for st, kind in gaps)
            raise MissingHandler(f"Unhandled variants: {listed}")

    @property
    def count(self) -> int:
        return len(self._handlers)


# Module-level singleton
_registry = HandlerRegistry()


def get_registry() -> HandlerRegistry:
    return _registry


def handler(*, stage: Stage, kind: enum.Enum, description: str = ""):
    """Decorator to register an engine handler."""

    def decorator(fn: Callable[..., Any]):
        _registry.register(HandlerSpec(stage=stage, kind=kind, fn=fn, description=description))
        return fn

    return decorator
