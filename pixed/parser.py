"""Parsers for the command language: identifiers, paths, keys, colours."""

from __future__ import annotations

import enum
import os
import re
from typing import Callable, List, Tuple, TypeVar

from .pixels import Rgba8
from .platform import InputState, Key

T = TypeVar("T")
Result = Tuple[T, str]
ParserFn = Callable[[str], Tuple[T, str]]

_RATIONAL = re.compile(r"[+-]?\d+(?:\.\d+)?")

_CONTROL_KEYS = {
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "ctrl": Key.CONTROL,
    "alt": Key.ALT,
    "shift": Key.SHIFT,
    "space": Key.SPACE,
    "return": Key.RETURN,
    "backspace": Key.BACKSPACE,
    "tab": Key.TAB,
    "end": Key.END,
    "esc": Key.ESCAPE,
}

_INPUT_STATES = {
    "pressed": InputState.PRESSED,
    "released": InputState.RELEASED,
    "repeated": InputState.REPEATED,
}


class ParseError(ValueError):
    """Raised when input does not match what a parser expects."""

    def __init__(self, message: str, remaining: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.remaining = remaining


class Direction(enum.Enum):
    """A direction given as ``+`` or ``-``."""

    FORWARD = "+"
    BACKWARD = "-"


def _take_while(text: str, pred: Callable[[str], bool]) -> Tuple[str, str]:
    end = 0
    for c in text:
        if not pred(c):
            break
        end += 1
    return text[:end], text[end:]


def _take_some(text: str, pred: Callable[[str], bool], label: str) -> Tuple[str, str]:
    matched, rest = _take_while(text, pred)
    if not matched:
        raise ParseError(f"expected {label}", text)
    return matched, rest


def _skip_whitespace(text: str) -> str:
    return text.lstrip()


def _is_identifier_char(c: str) -> bool:
    return (c.isascii() and c.isalpha()) or c in "/-"


def parse_identifier(text: str) -> Result[str]:
    """One or more ASCII letters, ``/`` or ``-``."""
    return _take_some(text, _is_identifier_char, "<identifier>")


def parse_word(text: str) -> Result[str]:
    """One or more letters."""
    return _take_some(text, str.isalpha, "<word>")


def parse_comment(text: str) -> Result[str]:
    """A ``--`` comment running to the end of the input."""
    if not text.startswith("--"):
        raise ParseError('expected "--"', text)
    return _skip_whitespace(text[2:]), ""


def _expand_home(path: str) -> str:
    if os.name == "posix" and path.startswith("~"):
        home = os.path.expanduser("~")
        if home != "~":
            return home + path[1:]
    return path


def parse_path(text: str) -> Result[str]:
    """A run of non-whitespace characters; a leading ``~`` names the home directory."""
    raw, rest = _take_some(text, lambda c: not c.isspace(), "<path>")
    return _expand_home(raw), rest


def parse_key(text: str) -> Result[Key]:
    """A key: either ``<name>`` for a control key, or a single character."""
    control_error = None
    if text.startswith("<"):
        name, after = _take_while(text[1:], str.isalpha)
        if after.startswith(">"):
            key = _CONTROL_KEYS.get(name)
            if key is not None:
                return key, after[1:]
            control_error = ParseError(f"unknown key <{name}>", text)

    if not text:
        raise ParseError("expected <key>", text)
    key = Key.from_char(text[0])
    if key is Key.UNKNOWN:
        if control_error is not None:
            raise control_error
        raise ParseError(f"unknown key {text[0]!r}", text)
    return key, text[1:]


def parse_input_state(text: str) -> Result[InputState]:
    """One of ``pressed``, ``released`` or ``repeated``."""
    word, rest = parse_word(text)
    state = _INPUT_STATES.get(word)
    if state is None:
        raise ParseError(f"unknown input state: {word}", text)
    return state, rest


def parse_direction(text: str) -> Result[Direction]:
    """``+`` for forward or ``-`` for backward."""
    if not text:
        raise ParseError("expected +/-", text)
    if text[0] == "+":
        return Direction.FORWARD, text[1:]
    if text[0] == "-":
        return Direction.BACKWARD, text[1:]
    raise ParseError("direction must be either `+` or `-`", text)


def _alpha_byte(a: float) -> int:
    value = a * 255
    if value != value:
        return 0
    return max(0, min(255, int(value)))


def parse_color(text: str) -> Result[Rgba8]:
    """A ``#rrggbb`` colour, optionally followed by ``/<alpha>`` with alpha in 0..1."""
    if not text:
        raise ParseError('expected "<color>"', text)
    if len(text) < 7:
        raise ParseError(f"{text!r} is not a valid color value", text)

    head, alpha = text[:7], text[7:]
    try:
        color = Rgba8.parse(head)
    except ValueError:
        raise ParseError(f"malformed color value `{head}`", text) from None

    if not alpha:
        return color, alpha
    if not alpha.startswith("/"):
        raise ParseError("expected '/'", alpha)
    match = _RATIONAL.match(alpha, 1)
    if match is None:
        raise ParseError("expected <rational>", alpha[1:])
    a = float(match.group())
    return color.with_alpha(_alpha_byte(a)), alpha[match.end():]


def parse_quoted(text: str) -> Result[str]:
    """Text between double quotes."""
    if not text.startswith('"'):
        raise ParseError("expected '\"'", text)
    end = text.find('"', 1)
    if end < 0:
        raise ParseError("expected '\"'", text[1:])
    return text[1:end], text[end + 1:]


def parse_paths(text: str) -> Result[List[str]]:
    """Zero or more whitespace-separated paths."""
    paths: List[str] = []
    rest = text
    while rest and not rest[0].isspace():
        path, rest = parse_path(rest)
        paths.append(path)
        rest = _skip_whitespace(rest)
    return paths, rest


def parse_setting(text: str) -> Result[str]:
    """The name of a setting."""
    try:
        return parse_identifier(text)
    except ParseError as e:
        raise ParseError("expected <setting>", e.remaining) from None


def parse_tuple(x: ParserFn, y: ParserFn, text: str) -> Result[tuple]:
    """Two values parsed by ``x`` and ``y``, separated by whitespace."""
    first, rest = x(text)
    if not rest or not rest[0].isspace():
        raise ParseError("expected <whitespace>", rest)
    second, rest = y(_skip_whitespace(rest))
    return (first, second), rest