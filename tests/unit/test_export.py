# tests/unit/test_export.py

from pathlib import Path

import pytest

from lattice_canvas.color import ColorState
from lattice_canvas.errors import ImageExportError
from lattice_canvas.export import read_image, write_image
from lattice_canvas.surface import FramebufferSurface


def make_surface() -> FramebufferSurface:
    surface = FramebufferSurface(4, 3, zoom=2)
    surface.clear("FFFFFF")
    with surface.acquire() as view:
        view.put_block((1, 2), ColorState(255, 0, 0), alpha=0.5)
    return surface


def test_missing_directory_raises(tmp_path: Path) -> None:
    target = tmp_path / "missing" / "frame.png"
    with pytest.raises(ImageExportError) as excinfo:
        write_image(make_surface(), target)
    err = excinfo.value
    assert isinstance(err, OSError)
    assert err.path == str(target)
    assert str(target) in str(err)
    assert not target.exists()


def test_png_round_trip(tmp_path: Path) -> None:
    surface = make_surface()
    target = tmp_path / "frame.png"
    write_image(surface, target)
    decoded = read_image(str(target))
    assert decoded.shape == (3 * 2, 4 * 2, 4)
    assert (decoded == surface.to_array()).all()


def test_unknown_extension_is_written_as_png(tmp_path: Path) -> None:
    target = tmp_path / "frame.raster"
    write_image(make_surface(), target)
    assert target.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_relative_path_in_current_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    write_image(make_surface(), "frame.png")
    assert (tmp_path / "frame.png").exists()
