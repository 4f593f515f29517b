"""Window-system abstractions: keys, input state, events and coordinates."""

from __future__ import annotations

import enum
import math
import sys
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

_U32_MAX = 2**32 - 1


def _round_u32(value: float) -> int:
    """Round half away from zero, saturating into the u32 range."""
    if math.isnan(value):
        return 0
    rounded = math.floor(abs(value) + 0.5)
    if value < 0:
        rounded = -rounded
    return max(0, min(_U32_MAX, rounded))


class GraphicsContext(enum.Enum):
    """The kind of graphics context a window is created with."""

    NONE = "none"
    GL = "gl"


@dataclass(frozen=True)
class Resizable:
    """Window hint: whether the window can be resized."""

    value: bool


@dataclass(frozen=True)
class Visible:
    """Window hint: whether the window is visible."""

    value: bool


WindowHint = Union[Resizable, Visible]


class InputState(enum.Enum):
    """The input state of a key or button."""

    PRESSED = "pressed"
    RELEASED = "released"
    REPEATED = "repeated"


class MouseButton(enum.Enum):
    """A standard mouse button."""

    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


@dataclass(frozen=True)
class OtherMouseButton:
    """A mouse button beyond the standard three, identified by number."""

    number: int


class Key(enum.Enum):
    """Symbolic name for a keyboard key; the value is its display form."""

    NUM1 = "1"
    NUM2 = "2"
    NUM3 = "3"
    NUM4 = "4"
    NUM5 = "5"
    NUM6 = "6"
    NUM7 = "7"
    NUM8 = "8"
    NUM9 = "9"
    NUM0 = "0"

    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"
    G = "g"
    H = "h"
    I = "i"  # noqa: E741
    J = "j"
    K = "k"
    L = "l"
    M = "m"
    N = "n"
    O = "o"  # noqa: E741
    P = "p"
    Q = "q"
    R = "r"
    S = "s"
    T = "t"
    U = "u"
    V = "v"
    W = "w"
    X = "x"
    Y = "y"
    Z = "z"

    LEFT = "<left>"
    UP = "<up>"
    RIGHT = "<right>"
    DOWN = "<down>"

    BACKSPACE = "<backspace>"
    RETURN = "<return>"
    SPACE = "<space>"
    TAB = "<tab>"
    ESCAPE = "<esc>"
    INSERT = "<insert>"
    HOME = "<home>"
    DELETE = "<delete>"
    END = "<end>"
    PAGE_DOWN = "<pgdown>"
    PAGE_UP = "<pgup>"

    APOSTROPHE = "'"
    GRAVE = "`"
    CARET = "^"
    COMMA = ","
    PERIOD = "."
    COLON = ":"
    SEMICOLON = ";"
    LBRACKET = "["
    RBRACKET = "]"
    SLASH = "/"
    BACKSLASH = "\\"

    ALT = "<alt>"
    CONTROL = "<ctrl>"
    SHIFT = "<shift>"

    EQUAL = "="
    MINUS = "-"

    UNKNOWN = "???"

    @classmethod
    def from_char(cls, c: str) -> "Key":
        """Map a typed character to its key, or UNKNOWN."""
        return _CHAR_KEYS.get(c, cls.UNKNOWN)

    def is_modifier(self) -> bool:
        return self in (Key.ALT, Key.CONTROL, Key.SHIFT)

    def __str__(self) -> str:
        return self.value


_CHAR_KEYS = {
    key.value: key
    for key in Key
    if len(key.value) == 1 and key is not Key.CARET
}
_CHAR_KEYS[" "] = Key.SPACE


@dataclass(frozen=True)
class ModifiersState:
    """The current state of the keyboard modifiers."""

    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    def __str__(self) -> str:
        parts = []
        if self.ctrl:
            parts.append("<ctrl>")
        if self.alt:
            parts.append("<alt>")
        if self.meta:
            parts.append("<meta>")
        if self.shift:
            parts.append("<shift>")
        return "".join(parts)


@dataclass(frozen=True)
class KeyboardInput:
    """A keyboard input event."""

    state: InputState
    key: Optional[Key]
    modifiers: ModifiersState = ModifiersState()


def pixel_ratio(scale_factor: float) -> float:
    """Ratio between screen coordinates and pixels for the given content scale.

    On macOS screen coordinates are scaled; elsewhere they map 1:1 to pixels.
    """
    if sys.platform == "darwin":
        return scale_factor
    return 1.0


@dataclass(frozen=True)
class LogicalDelta:
    """A delta in logical pixels."""

    x: float
    y: float


@dataclass(frozen=True)
class LogicalPosition:
    """A position in logical pixels."""

    x: float
    y: float

    @classmethod
    def from_physical(cls, physical: "PhysicalPosition", scale_factor: float) -> "LogicalPosition":
        return physical.to_logical(pixel_ratio(scale_factor))

    def to_physical(self, scale_factor: float) -> "PhysicalPosition":
        ratio = pixel_ratio(scale_factor)
        return PhysicalPosition(self.x * ratio, self.y * ratio)


@dataclass(frozen=True)
class PhysicalPosition:
    """A position in physical pixels."""

    x: float
    y: float

    @classmethod
    def from_logical(cls, logical: LogicalPosition, scale_factor: float) -> "PhysicalPosition":
        return logical.to_physical(pixel_ratio(scale_factor))

    def to_logical(self, scale_factor: float) -> LogicalPosition:
        ratio = pixel_ratio(scale_factor)
        return LogicalPosition(self.x / ratio, self.y / ratio)


@dataclass(frozen=True)
class LogicalSize:
    """A size in logical pixels."""

    width: float
    height: float

    @classmethod
    def from_physical(cls, physical: "PhysicalSize", scale_factor: float) -> "LogicalSize":
        return physical.to_logical(pixel_ratio(scale_factor))

    def to_physical(self, scale_factor: float) -> "PhysicalSize":
        ratio = pixel_ratio(scale_factor)
        return PhysicalSize(self.width * ratio, self.height * ratio)

    def is_zero(self) -> bool:
        return self.width < 1.0 or self.height < 1.0

    @classmethod
    def from_tuple(cls, size: Tuple[int, int]) -> "LogicalSize":
        width, height = size
        return cls(float(width), float(height))

    def to_tuple(self) -> Tuple[int, int]:
        """Integer dimensions; rounds rather than truncates."""
        return _round_u32(self.width), _round_u32(self.height)


@dataclass(frozen=True)
class PhysicalSize:
    """A size in physical pixels."""

    width: float
    height: float

    @classmethod
    def from_logical(cls, logical: LogicalSize, scale_factor: float) -> "PhysicalSize":
        return logical.to_physical(pixel_ratio(scale_factor))

    def to_logical(self, scale_factor: float) -> LogicalSize:
        ratio = pixel_ratio(scale_factor)
        return LogicalSize(self.width / ratio, self.height / ratio)

    @classmethod
    def from_tuple(cls, size: Tuple[int, int]) -> "PhysicalSize":
        width, height = size
        return cls(float(width), float(height))

    def to_tuple(self) -> Tuple[int, int]:
        """Integer dimensions; rounds rather than truncates."""
        return _round_u32(self.width), _round_u32(self.height)


class WindowEvent:
    """Base class of events coming from a window."""

    _is_input: ClassVar[bool] = False

    def is_input(self) -> bool:
        """Whether the event is triggered by user input."""
        return type(self)._is_input


@dataclass(frozen=True)
class Resized(WindowEvent):
    """The window's client area has new dimensions."""

    size: LogicalSize
    _is_input = True


@dataclass(frozen=True)
class Moved(WindowEvent):
    """The window has a new position."""

    position: LogicalPosition
    _is_input = True


@dataclass(frozen=True)
class Minimized(WindowEvent):
    """The window was minimized."""

    _is_input = True


@dataclass(frozen=True)
class Restored(WindowEvent):
    """The window was restored after being minimized."""

    _is_input = True


@dataclass(frozen=True)
class CloseRequested(WindowEvent):
    """The window has been requested to close."""

    _is_input = True


@dataclass(frozen=True)
class Destroyed(WindowEvent):
    """The window has been destroyed."""

    _is_input = True


@dataclass(frozen=True)
class ReceivedCharacter(WindowEvent):
    """The window received a unicode character."""

    char: str
    _is_input = True


@dataclass(frozen=True)
class Focused(WindowEvent):
    """The window gained or lost focus."""

    focused: bool
    _is_input = True


@dataclass(frozen=True)
class KeyboardEvent(WindowEvent):
    """A keyboard input was received."""

    input: KeyboardInput
    _is_input = True


@dataclass(frozen=True)
class CursorMoved(WindowEvent):
    """The cursor moved; coordinates relative to the window's top-left."""

    position: LogicalPosition
    _is_input = True


@dataclass(frozen=True)
class CursorEntered(WindowEvent):
    """The cursor entered the window."""

    _is_input = True


@dataclass(frozen=True)
class CursorLeft(WindowEvent):
    """The cursor left the window."""

    _is_input = True


@dataclass(frozen=True)
class MouseInput(WindowEvent):
    """A mouse button was pressed or released."""

    state: InputState
    button: Union[MouseButton, OtherMouseButton]
    modifiers: ModifiersState = ModifiersState()
    _is_input = True


@dataclass(frozen=True)
class MouseWheel(WindowEvent):
    """The mouse wheel was used."""

    delta: LogicalDelta


@dataclass(frozen=True)
class RedrawRequested(WindowEvent):
    """The window should be redrawn."""


@dataclass(frozen=True)
class Ready(WindowEvent):
    """No more inputs are pending."""


@dataclass(frozen=True)
class ScaleFactorChanged(WindowEvent):
    """The window's content scale factor changed."""

    factor: float
    _is_input = True


@dataclass(frozen=True)
class Noop(WindowEvent):
    """An event that is not handled."""