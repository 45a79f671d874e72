# tests/unit/test_activity.py

import pytest

from lattice_canvas.errors import ActivityProviderNotFound
from lattice_canvas.renderer.activity import (
    default_activity_color,
    draw_activity,
    find_activity_provider,
)
from lattice_canvas.surface import FramebufferSurface
from tests.test_utils import (
    FakeActivityConstraint,
    PlainConstraint,
    cell_rgba,
    make_label_model,
)

LABELS = [[1, 1, 2], [0, 2, 2]]
KINDS = {1: 1, 2: 2}


@pytest.mark.parametrize(
    "a, expected",
    [
        (0.0, (0.0, 255.0, 0.0)),
        (0.25, (127.5, 255.0, 0.0)),
        (0.5, (255.0, 255.0, 0.0)),
        (0.75, (255.0, 127.5, 0.0)),
        (1.0, (255.0, 0.0, 0.0)),
    ],
)
def test_default_activity_color(a: float, expected: tuple) -> None:
    assert default_activity_color(a) == pytest.approx(expected)


def test_missing_provider_raises_lookup_error() -> None:
    model = make_label_model(LABELS, KINDS).with_constraint(PlainConstraint())
    surface = FramebufferSurface(3, 2)
    with pytest.raises(ActivityProviderNotFound):
        draw_activity(surface, model)
    with pytest.raises(LookupError):
        find_activity_provider(model)


def test_registered_provider_is_found_after_other_constraints() -> None:
    provider = FakeActivityConstraint(max_act={1: 10.0}, values={0: 10.0, 1: 5.0})
    model = (
        make_label_model(LABELS, KINDS)
        .with_constraint(PlainConstraint())
        .with_constraint(provider)
    )
    assert find_activity_provider(model) is provider
    surface = FramebufferSurface(3, 2)
    draw_activity(surface, model)
    arr = surface.to_array()
    assert cell_rgba(arr, (0, 0)) == (255, 0, 0, 255)
    assert cell_rgba(arr, (1, 0)) == (255, 255, 0, 255)
    # Kind 2 has no MAX_ACT entry.
    assert cell_rgba(arr, (2, 0)) == (0, 0, 0, 0)


def test_non_positive_activity_is_skipped() -> None:
    provider = FakeActivityConstraint(
        max_act={1: 10.0, 2: 4.0}, values={0: -1.0, 2: 1.0}
    )
    model = make_label_model(LABELS, KINDS).with_constraint(provider)
    surface = FramebufferSurface(3, 2)
    draw_activity(surface, model)
    arr = surface.to_array()
    assert cell_rgba(arr, (0, 0)) == (0, 0, 0, 0)
    assert cell_rgba(arr, (1, 0)) == (0, 0, 0, 0)
    # 1/4 of MAX_ACT: half way between green and yellow.
    assert cell_rgba(arr, (2, 0)) == (128, 255, 0, 255)


def test_kind_filter_and_explicit_provider() -> None:
    registered = FakeActivityConstraint(max_act={1: 1.0, 2: 1.0})
    explicit = FakeActivityConstraint(
        max_act={1: 2.0, 2: 2.0}, values={0: 2.0, 2: 2.0}
    )
    model = make_label_model(LABELS, KINDS).with_constraint(registered)
    surface = FramebufferSurface(3, 2)
    draw_activity(surface, model, kind=2, provider=explicit)
    arr = surface.to_array()
    assert cell_rgba(arr, (0, 0)) == (0, 0, 0, 0)
    assert cell_rgba(arr, (2, 0)) == (255, 0, 0, 255)


def test_custom_color_fn() -> None:
    provider = FakeActivityConstraint(max_act={1: 1.0}, values={1: 0.5})
    model = make_label_model(LABELS, KINDS)
    surface = FramebufferSurface(3, 2)
    draw_activity(
        surface, model, provider=provider, color_fn=lambda a: (0, 0, 255 * a)
    )
    assert cell_rgba(surface.to_array(), (1, 0)) == (0, 0, 128, 255)
