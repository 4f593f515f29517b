"""View pixel storage, snapshot history and export to SVG and GIF."""

from __future__ import annotations

import bisect
import enum
import zlib
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from PIL import Image

from .pixels import Bgra8, Rgb8, Rgba8

PathLike = Union[str, Path]

_U16_MAX = 0xFFFF
_GIF_DELAY_UNIT = timedelta(milliseconds=10)


class PixelFormat(enum.Enum):
    """Byte order of the colours in a pixel buffer."""

    RGBA8 = "rgba8"
    BGRA8 = "bgra8"


@dataclass(frozen=True)
class Pixels:
    """A packed buffer of 32-bit pixels in a given format."""

    format: PixelFormat
    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) % 4:
            raise ValueError("pixel data length must be a multiple of 4")

    @classmethod
    def from_rgba8(cls, colors: Iterable[Rgba8]) -> "Pixels":
        data = bytearray()
        for c in colors:
            data += bytes((c.r, c.g, c.b, c.a))
        return cls(PixelFormat.RGBA8, bytes(data))

    @classmethod
    def from_bgra8(cls, colors: Iterable[Bgra8]) -> "Pixels":
        data = bytearray()
        for c in colors:
            data += bytes((c.b, c.g, c.r, c.a))
        return cls(PixelFormat.BGRA8, bytes(data))

    def __len__(self) -> int:
        return len(self.data) // 4

    def _decode(self, idx: int) -> Rgba8:
        x, y, z, a = self.data[idx * 4 : idx * 4 + 4]
        if self.format is PixelFormat.RGBA8:
            return Rgba8(x, y, z, a)
        return Rgba8(z, y, x, a)

    def slice(self, start: int, stop: int) -> List[Rgba8]:
        """The pixels in ``start..stop`` as RGBA colours."""
        if not 0 <= start <= stop <= len(self):
            raise IndexError(f"range {start}..{stop} out of bounds for {len(self)} pixels")
        return [self._decode(i) for i in range(start, stop)]

    def get(self, idx: int) -> Optional[Rgba8]:
        if 0 <= idx < len(self):
            return self._decode(idx)
        return None

    def to_rgba8(self) -> List[Rgba8]:
        return list(self)

    def to_bgra8(self) -> List[Bgra8]:
        return [Bgra8.from_rgba8(c) for c in self]

    def __iter__(self) -> Iterator[Rgba8]:
        return (self._decode(i) for i in range(len(self)))

    def as_bytes(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle from (x1, y1) to (x2, y2)."""

    x1: int
    y1: int
    x2: int
    y2: int

    def width(self) -> int:
        return self.x2 - self.x1

    def height(self) -> int:
        return self.y2 - self.y1


@dataclass(frozen=True)
class ViewExtent:
    """Frame dimensions and frame count of a view."""

    fw: int
    fh: int
    nframes: int

    def width(self) -> int:
        return self.fw * self.nframes

    def rect(self) -> Rect:
        return Rect(0, 0, self.width(), self.fh)


@dataclass(frozen=True, order=True)
class SnapshotId:
    """Identifier of a snapshot within a view's history."""

    value: int = 0

    def __str__(self) -> str:
        return str(self.value)


class Snapshot:
    """A compressed copy of a view's pixels at one point in its history."""

    def __init__(self, snapshot_id: SnapshotId, pixels: Pixels, extent: ViewExtent) -> None:
        if extent.fw * extent.fh * extent.nframes != len(pixels):
            raise ValueError("the pixel buffer does not match the view extent")
        self.id = snapshot_id
        self.extent = extent
        self.size = len(pixels)
        self.format = pixels.format
        self._compressed = zlib.compress(pixels.as_bytes())

    def width(self) -> int:
        return self.extent.fw * self.extent.nframes

    def height(self) -> int:
        return self.extent.fh

    def pixels(self) -> Pixels:
        """Decompress the snapshot's pixels."""
        return Pixels(self.format, zlib.decompress(self._compressed))

    def __repr__(self) -> str:
        return f"Snapshot(id={self.id}, extent={self.extent!r}, size={self.size})"


class ViewResources:
    """The snapshot history of a view, plus its current pixels."""

    def __init__(self, pixels: Pixels, fw: int, fh: int, nframes: int) -> None:
        self.snapshots: List[Snapshot] = [
            Snapshot(SnapshotId(0), pixels, ViewExtent(fw, fh, nframes))
        ]
        self.snapshot = 0
        self.pixels = pixels

    def current_snapshot(self) -> Tuple[Snapshot, Pixels]:
        return self.snapshots[self.snapshot], self.pixels

    def push_snapshot(self, pixels: Pixels, extent: ViewExtent) -> None:
        """Record a new snapshot, discarding any snapshots after the current one."""
        del self.snapshots[self.snapshot + 1 :]
        self.snapshot = len(self.snapshots)
        self.pixels = pixels
        self.snapshots.append(Snapshot(SnapshotId(self.snapshot), pixels, extent))

    def prev_snapshot(self) -> Optional[Snapshot]:
        if self.snapshot == 0:
            return None
        self.snapshot -= 1
        snapshot = self.snapshots[self.snapshot]
        self.pixels = snapshot.pixels()
        return snapshot

    def next_snapshot(self) -> Optional[Snapshot]:
        if self.snapshot + 1 >= len(self.snapshots):
            return None
        self.snapshot += 1
        snapshot = self.snapshots[self.snapshot]
        self.pixels = snapshot.pixels()
        return snapshot


@dataclass
class Resources:
    """Resources of all views, keyed by view id."""

    data: Dict[int, ViewResources] = field(default_factory=dict)

    def get_snapshot_safe(self, view_id: int) -> Optional[Tuple[Snapshot, Pixels]]:
        view = self.data.get(view_id)
        return view.current_snapshot() if view is not None else None

    def get_snapshot(self, view_id: int) -> Tuple[Snapshot, Pixels]:
        result = self.get_snapshot_safe(view_id)
        if result is None:
            raise KeyError(f"view #{view_id} must exist and have an associated snapshot")
        return result

    def get_snapshot_id(self, view_id: int) -> Optional[SnapshotId]:
        view = self.data.get(view_id)
        return SnapshotId(view.snapshot) if view is not None else None

    def get_snapshot_rect(self, view_id: int, rect: Rect) -> Tuple[Snapshot, List[Rgba8]]:
        """The pixels inside ``rect``, whose origin is the bottom-left corner."""
        snapshot, pixels = self.get_snapshot(view_id)

        if snapshot.extent.rect() == rect:
            return snapshot, pixels.to_rgba8()

        w, h = rect.width(), rect.height()
        total_w, total_h = snapshot.width(), snapshot.height()

        buffer: List[Rgba8] = []
        for y in reversed(range(rect.y1, rect.y2)):
            row = total_h - y - 1
            offset = row * total_w + rect.x1
            buffer.extend(pixels.slice(offset, offset + w))

        if len(buffer) != w * h:
            raise ValueError("rectangle lies outside the view")
        return snapshot, buffer

    def get_view(self, view_id: int) -> Optional[ViewResources]:
        return self.data.get(view_id)


class ResourceManager:
    """Shared handle to the resources of all views."""

    def __init__(self, resources: Optional[Resources] = None) -> None:
        self.resources = resources if resources is not None else Resources()

    def lock(self) -> Resources:
        return self.resources

    def add_view(self, view_id: int, fw: int, fh: int, nframes: int, pixels: Pixels) -> None:
        self.resources.data[view_id] = ViewResources(pixels, fw, fh, nframes)

    def remove_view(self, view_id: int) -> None:
        self.resources.data.pop(view_id, None)

    def save_view_svg(self, view_id: int, path: PathLike) -> int:
        """Write the view as an SVG of one rectangle per visible pixel."""
        snapshot, pixels = self.resources.get_snapshot(view_id)
        w, h = snapshot.width(), snapshot.height()

        with open(path, "w", encoding="utf-8") as out:
            out.write(
                f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" fill="none" '
                f'xmlns="http://www.w3.org/2000/svg">\n'
            )
            for i, rgba in enumerate(pixels):
                if rgba.a == 0:
                    continue
                x = i % w
                y = i // h
                out.write(
                    f'<rect x="{x}" y="{y}" width="1" height="1" '
                    f'fill="{Rgb8.from_rgba8(rgba)}"/>\n'
                )
            out.write("</svg>\n")

        return w * h

    def save_view_gif(
        self,
        view_id: int,
        path: PathLike,
        frame_delay: timedelta,
        palette: Sequence[Rgba8],
    ) -> int:
        """Write the view's frames as a looping, indexed GIF animation."""
        delay = min(frame_delay // _GIF_DELAY_UNIT, _U16_MAX)

        snapshot, pixels = self.resources.get_snapshot(view_id)
        extent = snapshot.extent
        nframes = extent.nframes

        transparent = 0
        colors = sorted([*palette, Rgba8.TRANSPARENT])
        if len(colors) > 256:
            raise ValueError("a GIF palette holds at most 256 colors")

        image = bytearray()
        for rgba in pixels:
            i = bisect.bisect_left(colors, rgba)
            image.append(i if i < len(colors) and colors[i] == rgba else transparent)

        fw, fh = extent.fw, extent.fh
        frames = [bytearray() for _ in range(nframes)]
        for i in range(fh * nframes):
            frames[i % nframes] += image[i * fw : (i + 1) * fw]

        rgb_palette = b"".join(bytes((c.r, c.g, c.b)) for c in colors)
        images = []
        for frame in frames:
            im = Image.frombytes("P", (fw, fh), bytes(frame))
            im.putpalette(rgb_palette)
            images.append(im)

        images[0].save(
            path,
            format="GIF",
            save_all=True,
            append_images=images[1:],
            loop=0,
            duration=delay * 10,
            disposal=2,
            transparency=transparent,
            optimize=False,
        )

        return fw * fh * nframes