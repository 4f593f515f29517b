from datetime import timedelta

import pytest
from PIL import Image

from pixed.pixels import Bgra8, Rgba8
from pixed.resources import (
    PixelFormat,
    Pixels,
    Rect,
    ResourceManager,
    Resources,
    Snapshot,
    SnapshotId,
    ViewExtent,
    ViewResources,
)

A = Rgba8(1, 2, 3, 4)
B = Rgba8(10, 20, 30, 255)
C = Rgba8(100, 0, 50, 255)
D = Rgba8(7, 8, 9, 0)


def test_pixels_rgba_round_trip():
    pixels = Pixels.from_rgba8([A, B, C])
    assert len(pixels) == 3
    assert pixels.format is PixelFormat.RGBA8
    assert pixels.to_rgba8() == [A, B, C]
    assert list(pixels) == [A, B, C]


def test_pixels_rgba_bytes_layout():
    pixels = Pixels.from_rgba8([A])
    assert pixels.as_bytes() == bytes((1, 2, 3, 4))


def test_pixels_bgra_conversion():
    colors = [Bgra8.from_rgba8(c) for c in (A, B)]
    pixels = Pixels.from_bgra8(colors)
    assert pixels.format is PixelFormat.BGRA8
    assert pixels.as_bytes()[:4] == bytes((3, 2, 1, 4))
    assert pixels.to_rgba8() == [A, B]
    assert pixels.to_bgra8() == colors


def test_pixels_get_and_slice():
    pixels = Pixels.from_rgba8([A, B, C, D])
    assert pixels.get(2) == C
    assert pixels.get(4) is None
    assert pixels.get(-1) is None
    assert pixels.slice(1, 3) == [B, C]
    with pytest.raises(IndexError):
        pixels.slice(2, 5)


def test_pixels_rejects_partial_pixel():
    with pytest.raises(ValueError):
        Pixels(PixelFormat.RGBA8, b"\x00\x01\x02")


def test_view_extent():
    extent = ViewExtent(4, 3, 2)
    assert extent.width() == 8
    assert extent.rect() == Rect(0, 0, 8, 3)
    assert extent.rect().height() == 3


def test_snapshot_round_trip():
    pixels = Pixels.from_rgba8([A, B, C, D])
    snapshot = Snapshot(SnapshotId(0), pixels, ViewExtent(1, 2, 2))
    assert snapshot.width() == 2
    assert snapshot.height() == 2
    assert snapshot.pixels() == pixels


def test_snapshot_size_mismatch():
    with pytest.raises(ValueError):
        Snapshot(SnapshotId(0), Pixels.from_rgba8([A]), ViewExtent(2, 2, 1))


def test_view_resources_history():
    extent = ViewExtent(1, 1, 1)
    view = ViewResources(Pixels.from_rgba8([A]), 1, 1, 1)
    view.push_snapshot(Pixels.from_rgba8([B]), extent)
    view.push_snapshot(Pixels.from_rgba8([C]), extent)
    snapshot, pixels = view.current_snapshot()
    assert snapshot.id == SnapshotId(2)
    assert pixels.to_rgba8() == [C]

    prev = view.prev_snapshot()
    assert prev.id == SnapshotId(1)
    assert view.current_snapshot()[1].to_rgba8() == [B]

    assert view.prev_snapshot().id == SnapshotId(0)
    assert view.prev_snapshot() is None

    assert view.next_snapshot().id == SnapshotId(1)
    view.push_snapshot(Pixels.from_rgba8([D]), extent)
    assert len(view.snapshots) == 3
    assert view.current_snapshot()[0].id == SnapshotId(2)
    assert view.next_snapshot() is None
    assert view.current_snapshot()[1].to_rgba8() == [D]


def test_resources_lookup():
    manager = ResourceManager()
    manager.add_view(7, 1, 1, 1, Pixels.from_rgba8([A]))
    resources = manager.lock()
    assert resources.get_snapshot_id(7) == SnapshotId(0)
    assert resources.get_snapshot(7)[1].to_rgba8() == [A]
    assert resources.get_view(7).snapshot == 0
    assert resources.get_snapshot_safe(8) is None
    assert resources.get_snapshot_id(8) is None
    with pytest.raises(KeyError):
        resources.get_snapshot(8)

    manager.remove_view(7)
    assert resources.get_snapshot_safe(7) is None


def test_shared_resources():
    resources = Resources()
    first = ResourceManager(resources)
    second = ResourceManager(resources)
    first.add_view(1, 1, 1, 1, Pixels.from_rgba8([B]))
    assert second.lock().get_snapshot(1)[1].to_rgba8() == [B]


@pytest.fixture
def square_manager():
    manager = ResourceManager()
    manager.add_view(1, 2, 2, 1, Pixels.from_rgba8([A, B, C, D]))
    return manager


def test_snapshot_rect_full(square_manager):
    _, pixels = square_manager.lock().get_snapshot_rect(1, Rect(0, 0, 2, 2))
    assert pixels == [A, B, C, D]


def test_snapshot_rect_is_bottom_up(square_manager):
    resources = square_manager.lock()
    assert resources.get_snapshot_rect(1, Rect(0, 0, 1, 1))[1] == [C]
    assert resources.get_snapshot_rect(1, Rect(0, 0, 2, 1))[1] == [C, D]
    assert resources.get_snapshot_rect(1, Rect(0, 1, 2, 2))[1] == [A, B]
    assert resources.get_snapshot_rect(1, Rect(1, 0, 2, 2))[1] == [B, D]


def test_save_view_svg(square_manager, tmp_path):
    path = tmp_path / "out.svg"
    assert square_manager.save_view_svg(1, path) == 4
    lines = path.read_text().splitlines()
    assert lines[0].startswith('<svg width="2" height="2" viewBox="0 0 2 2"')
    assert lines[-1] == "</svg>"
    rects = lines[1:-1]
    assert len(rects) == 3
    assert rects[0] == f'<rect x="0" y="0" width="1" height="1" fill="{"#010203"}"/>'
    assert all('fill="#070809"' not in r for r in rects)


def test_save_view_gif(tmp_path):
    red = Rgba8(255, 0, 0, 255)
    blue = Rgba8(0, 0, 255, 255)
    manager = ResourceManager()
    # Two 2x2 frames side by side in a 4x2 strip.
    strip = [red, red, blue, blue, red, Rgba8.TRANSPARENT, blue, blue]
    manager.add_view(3, 2, 2, 2, Pixels.from_rgba8(strip))
    path = tmp_path / "anim.gif"

    written = manager.save_view_gif(3, path, timedelta(milliseconds=100), [red, blue])
    assert written == 8

    with Image.open(path) as im:
        assert im.size == (2, 2)
        assert im.n_frames == 2
        assert im.info["loop"] == 0
        assert im.info["duration"] == 100
        first = im.convert("RGBA")
        assert first.getpixel((0, 0)) == (255, 0, 0, 255)


def test_save_view_gif_palette_too_large(tmp_path):
    manager = ResourceManager()
    manager.add_view(1, 1, 1, 1, Pixels.from_rgba8([A]))
    palette = [Rgba8(i, 1, 0, 255) for i in range(256)]
    with pytest.raises(ValueError):
        manager.save_view_gif(1, tmp_path / "x.gif", timedelta(milliseconds=10), palette)