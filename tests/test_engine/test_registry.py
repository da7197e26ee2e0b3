"""Tests for the handler registry."""

import pytest

from collage.engine import get_registry
from collage.engine.registry import STAGE_KINDS, HandlerRegistry, HandlerSpec, Stage
from collage.errors import DuplicateHandler, MissingHandler
from collage.models.nodes import ElementKind, FormKind, Leaf


def _noop(*args):
    return None


def test_register_and_get():
    reg = HandlerRegistry()
    spec = HandlerSpec(stage=Stage.MEASURE_ELEMENT, kind=ElementKind.LEAF, fn=_noop)
    reg.register(spec)
    assert reg.get(Stage.MEASURE_ELEMENT, ElementKind.LEAF) is spec
    assert reg.count == 1


def test_register_rejects_wrong_variant_family():
    reg = HandlerRegistry()
    with pytest.raises(TypeError):
        reg.register(HandlerSpec(stage=Stage.FLATTEN_FORM, kind=ElementKind.LEAF, fn=_noop))


def test_duplicate_registration():
    reg = HandlerRegistry()
    reg.register(HandlerSpec(stage=Stage.FLATTEN_FORM, kind=FormKind.PATH, fn=_noop))
    with pytest.raises(DuplicateHandler):
        reg.register(HandlerSpec(stage=Stage.FLATTEN_FORM, kind=FormKind.PATH, fn=_noop))


def test_missing_handler():
    reg = HandlerRegistry()
    with pytest.raises(MissingHandler):
        reg.get(Stage.ARRANGE, ElementKind.FLOW)
    with pytest.raises(MissingHandler):
        reg.verify()


def test_dispatch_passes_node_and_args():
    reg = HandlerRegistry()
    seen = []
    reg.register(
        HandlerSpec(
            stage=Stage.MEASURE_ELEMENT,
            kind=ElementKind.LEAF,
            fn=lambda node, extra: seen.append((node, extra)),
        )
    )
    leaf = Leaf()
    reg.dispatch(Stage.MEASURE_ELEMENT, leaf, "ctx")
    assert seen == [(leaf, "ctx")]


def test_missing_lists_uncovered_variants():
    reg = HandlerRegistry()
    reg.register(HandlerSpec(stage=Stage.ARRANGE, kind=ElementKind.LEAF, fn=_noop))
    gaps = reg.missing(Stage.ARRANGE)
    assert (Stage.ARRANGE, ElementKind.LEAF) not in gaps
    assert (Stage.ARRANGE, ElementKind.FLOW) in gaps


def test_global_registry_is_exhaustive():
    reg = get_registry()
    reg.verify()
    assert reg.missing() == []
    assert reg.count == sum(len(kinds) for kinds in STAGE_KINDS.values())
    assert len(reg.for_stage(Stage.FLATTEN_FORM)) == len(FormKind)
