# tests/integration/test_canvas_integration.py

from pathlib import Path

import numpy as np
import pytest
from PIL import ImageDraw

from lattice_canvas import (
    ByEntity,
    Canvas,
    CanvasOptions,
    Grid2D,
    entity_color,
    read_image,
)
from tests.test_utils import (
    FakeActivityConstraint,
    cell_rgba,
    make_label_model,
    make_step_field,
)


def test_frame_with_fills_and_borders(tmp_path: Path) -> None:
    model = make_label_model()
    canvas = Canvas(model, zoom=4)
    canvas.clear("FFFFFF")
    canvas.draw_entities(1, ByEntity(entity_color))
    canvas.draw_borders(-1, "000000")
    target = tmp_path / "frame.png"
    canvas.write_image(target)

    decoded = read_image(str(target))
    assert decoded.shape == (5 * 4, 8 * 4, 4)
    # Interior raster pixel of entity 1 keeps its fill; its left border is black.
    assert tuple(decoded[5, 5][:3]) == entity_color(1)
    assert tuple(decoded[5, 4][:3]) == (0, 0, 0)
    assert tuple(decoded[0, 0]) == (255, 255, 255, 255)


def test_field_layers_on_bare_grid() -> None:
    field = make_step_field()
    canvas = Canvas(field, CanvasOptions(zoom=2))
    canvas.clear()
    canvas.draw_heatmap(color="FF0000")
    canvas.draw_contours(nsteps=40, color="FFFF00")
    arr = canvas.to_array()
    assert cell_rgba(arr, (9, 0), zoom=2) == (255, 0, 0, 255)
    assert cell_rgba(arr, (5, 0), zoom=2) == (255, 255, 0, 255)
    # Low side: heatmap alpha clamps to 0, contour repaints x=4.
    assert cell_rgba(arr, (0, 0), zoom=2) == (255, 0, 0, 0)
    assert cell_rgba(arr, (4, 0), zoom=2)[:3] == (255, 255, 0)


def test_entity_operations_need_a_model() -> None:
    canvas = Canvas(Grid2D((3, 3)))
    with pytest.raises(TypeError):
        canvas.draw_entities(1, "FF0000")
    with pytest.raises(TypeError):
        canvas.draw_borders()


def test_wrap_shrinks_surface_and_folds_coordinates() -> None:
    model = make_label_model()
    canvas = Canvas(model, zoom=1, wrap=(4, 0))
    assert (canvas.width, canvas.height) == (4, 5)
    canvas.draw_entities(2, "00FF00")
    arr = canvas.to_array()
    # Entity 3 covers x=5,6 on row 3 -> folded to x=1,2.
    assert cell_rgba(arr, (1, 3)) == (0, 255, 0, 255)
    assert cell_rgba(arr, (2, 3)) == (0, 255, 0, 255)


def test_options_and_overrides_combine() -> None:
    canvas = Canvas(make_label_model(), CanvasOptions(zoom=3), wrap=(4, 0))
    assert canvas.options == CanvasOptions(zoom=3, wrap=(4, 0))
    assert canvas.surface.pixel_size == (12, 15)


def test_activity_layer_over_fills() -> None:
    model = make_label_model()
    provider = FakeActivityConstraint(
        max_act={1: 4.0}, values={model.grid.p2i((1, 1)): 4.0}
    )
    canvas = Canvas(model.with_constraint(provider))
    canvas.draw_entities(-1, "FFFFFF")
    canvas.draw_activity(1)
    arr = canvas.to_array()
    assert cell_rgba(arr, (1, 1)) == (255, 0, 0, 255)
    assert cell_rgba(arr, (2, 1)) == (255, 255, 255, 255)


def test_context_draws_on_same_raster() -> None:
    canvas = Canvas(Grid2D((4, 4)), zoom=2)
    draw = canvas.context()
    assert isinstance(draw, ImageDraw.ImageDraw)
    draw.point((7, 7), fill=(1, 2, 3, 255))
    arr = canvas.to_array()
    assert tuple(arr[7, 7]) == (1, 2, 3, 255)
    assert np.count_nonzero(arr[..., 3]) == 1


def test_write_image_with_explicit_format(tmp_path: Path) -> None:
    canvas = Canvas(make_label_model(), zoom=2)
    canvas.clear("FFFFFF")
    target = tmp_path / "frame.img"
    canvas.write_image(target, format="BMP")
    assert target.read_bytes()[:2] == b"BM"
    assert tuple(read_image(str(target))[0, 0]) == (255, 255, 255, 255)
