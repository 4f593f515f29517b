"""Colour types and views over flat pixel buffers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Iterator, List, MutableSequence, Optional, Sequence, Tuple


def _check_channels(obj, names: str) -> None:
    for name in names:
        value = getattr(obj, name)
        if not isinstance(value, int) or not 0 <= value <= 255:
            raise ValueError(f"channel {name!r} must be an integer in 0..=255, got {value!r}")


def _hex_byte(text: str) -> int:
    if len(text) != 2 or any(c not in "0123456789abcdefABCDEF" for c in text):
        raise ValueError(f"invalid hex byte {text!r}")
    return int(text, 16)


@dataclass(frozen=True, order=True)
class Rgba8:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 0xFF

    TRANSPARENT: ClassVar["Rgba8"]
    BLACK: ClassVar["Rgba8"]
    WHITE: ClassVar["Rgba8"]

    def __post_init__(self) -> None:
        _check_channels(self, "rgba")

    @classmethod
    def parse(cls, text: str) -> "Rgba8":
        """Parse ``#rrggbb`` or ``#rrggbbaa``."""
        if not text.startswith("#") or len(text) not in (7, 9):
            raise ValueError(f"malformed color value {text!r}")
        r = _hex_byte(text[1:3])
        g = _hex_byte(text[3:5])
        b = _hex_byte(text[5:7])
        a = _hex_byte(text[7:9]) if len(text) == 9 else 0xFF
        return cls(r, g, b, a)

    def with_alpha(self, a: int) -> "Rgba8":
        return replace(self, a=a)

    def to_u32(self) -> int:
        """Pack into a word whose little-endian bytes are r, g, b, a."""
        return int.from_bytes(bytes((self.r, self.g, self.b, self.a)), "little")

    @classmethod
    def from_u32(cls, value: int) -> "Rgba8":
        r, g, b, a = value.to_bytes(4, "little")
        return cls(r, g, b, a)

    def __str__(self) -> str:
        text = f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        if self.a != 0xFF:
            text += f"{self.a:02x}"
        return text


Rgba8.TRANSPARENT = Rgba8(0, 0, 0, 0)
Rgba8.BLACK = Rgba8(0, 0, 0, 0xFF)
Rgba8.WHITE = Rgba8(0xFF, 0xFF, 0xFF, 0xFF)


@dataclass(frozen=True)
class Bgra8:
    """An 8-bit colour stored in BGRA order."""

    b: int
    g: int
    r: int
    a: int = 0xFF

    def __post_init__(self) -> None:
        _check_channels(self, "bgra")

    def to_u32(self) -> int:
        """Pack into a word whose little-endian bytes are b, g, r, a."""
        return int.from_bytes(bytes((self.b, self.g, self.r, self.a)), "little")

    @classmethod
    def from_u32(cls, value: int) -> "Bgra8":
        b, g, r, a = value.to_bytes(4, "little")
        return cls(b, g, r, a)

    def to_rgba8(self) -> Rgba8:
        return Rgba8(self.r, self.g, self.b, self.a)

    @classmethod
    def from_rgba8(cls, color: Rgba8) -> "Bgra8":
        return cls(color.b, color.g, color.r, color.a)


@dataclass(frozen=True, order=True)
class Rgb8:
    """An 8-bit RGB colour without alpha."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        _check_channels(self, "rgb")

    @classmethod
    def from_rgba8(cls, color: Rgba8) -> "Rgb8":
        return cls(color.r, color.g, color.b)

    def __str__(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


def _offset_in(pixels: Sequence[Rgba8], width: int, x: int, y: int) -> Optional[int]:
    index = width * y + x
    if 0 <= index < len(pixels):
        return index
    return None


class PixelView:
    """A read-only view of a row-major pixel buffer."""

    def __init__(self, pixels: Sequence[Rgba8], width: int, height: int) -> None:
        self.pixels = pixels
        self.width = width
        self.height = height

    def get(self, x: int, y: int) -> Optional[Rgba8]:
        """The pixel at (x, y), or None if the offset lies outside the buffer."""
        index = _offset_in(self.pixels, self.width, x, y)
        return None if index is None else self.pixels[index]


class PixelViewMut(PixelView):
    """A writable view of a row-major pixel buffer."""

    pixels: MutableSequence[Rgba8]

    def __init__(self, pixels: MutableSequence[Rgba8], width: int, height: int) -> None:
        super().__init__(pixels, width, height)

    def get(self, x: int, y: int) -> Optional[Rgba8]:
        """The pixel at (x, y), or None if the offset lies outside the buffer."""
        index = _offset_in(self.pixels, self.width, x, y)
        return None if index is None else self.pixels[index]

    def set(self, x: int, y: int, pixel: Rgba8) -> None:
        """Store a pixel at (x, y); offsets outside the buffer are ignored."""
        index = _offset_in(self.pixels, self.width, x, y)
        if index is not None:
            self.pixels[index] = pixel

    def items(self) -> Iterator[Tuple[int, int, Rgba8]]:
        """Yield ``(x, y, pixel)`` for every pixel in row-major order."""
        for i, pixel in enumerate(self.pixels):
            y, x = divmod(i, self.width)
            yield x, y, pixel


__all__: List[str] = ["Rgba8", "Bgra8", "Rgb8", "PixelView", "PixelViewMut"]