"""Key chords, named action bindings, and their ``.data`` file form."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Union

from .dataformat import Keybind, parse_file


class Scancode(enum.IntEnum):
    """Physical key codes (USB HID usage values)."""

    UNKNOWN = 0
    A = 4
    B = 5
    C = 6
    D = 7
    E = 8
    F = 9
    G = 10
    H = 11
    I = 12  # noqa: E741
    J = 13
    K = 14
    L = 15
    M = 16
    N = 17
    O = 18  # noqa: E741
    P = 19
    Q = 20
    R = 21
    S = 22
    T = 23
    U = 24
    V = 25
    W = 26
    X = 27
    Y = 28
    Z = 29
    NUM_1 = 30
    NUM_2 = 31
    NUM_3 = 32
    NUM_4 = 33
    NUM_5 = 34
    NUM_6 = 35
    NUM_7 = 36
    NUM_8 = 37
    NUM_9 = 38
    NUM_0 = 39
    RETURN = 40
    ESCAPE = 41
    BACKSPACE = 42
    TAB = 43
    SPACE = 44
    MINUS = 45
    EQUALS = 46
    LEFTBRACKET = 47
    RIGHTBRACKET = 48
    BACKSLASH = 49
    SEMICOLON = 51
    APOSTROPHE = 52
    GRAVE = 53
    COMMA = 54
    PERIOD = 55
    SLASH = 56
    CAPSLOCK = 57
    F1 = 58
    F2 = 59
    F3 = 60
    F4 = 61
    F5 = 62
    F6 = 63
    F7 = 64
    F8 = 65
    F9 = 66
    F10 = 67
    F11 = 68
    F12 = 69
    DELETE = 76
    NONUSBACKSLASH = 100
    LCTRL = 224
    LSHIFT = 225
    LALT = 226
    RCTRL = 228
    RSHIFT = 229
    RALT = 230


@dataclass(frozen=True)
class KeyChord:
    """A set of physical keys that must all be held at once."""

    keys: tuple[Scancode, ...] = ()


def chord_held(key_state: Collection[Scancode], chord: KeyChord) -> bool:
    """Return True if every key of ``chord`` is in ``key_state`` (the held keys).

    An empty chord never matches; unknown keys are ignored.
    """
    if not chord.keys:
        return False
    return all(sc == Scancode.UNKNOWN or sc in key_state for sc in chord.keys)


def chord_pressed(
    event_scancode: Scancode, key_state: Collection[Scancode], chord: KeyChord
) -> bool:
    """Return True if ``event_scancode`` belongs to ``chord`` and its other keys are held."""
    if not chord.keys:
        return False
    has_trigger = False
    for sc in chord.keys:
        if sc == event_scancode:
            has_trigger = True
            continue
        if sc == Scancode.UNKNOWN:
            continue
        if sc not in key_state:
            return False
    return has_trigger


_NAMED_TOKENS: dict[str, Scancode] = {
    "LC": Scancode.LCTRL,
    "RC": Scancode.RCTRL,
    "LS": Scancode.LSHIFT,
    "RS": Scancode.RSHIFT,
    "LA": Scancode.LALT,
    "RA": Scancode.RALT,
    "ES": Scancode.ESCAPE,
    "CL": Scancode.CAPSLOCK,
    "B": Scancode.BACKSPACE,
    "EN": Scancode.RETURN,
    "D": Scancode.DELETE,
    "T": Scancode.TAB,
    "SP": Scancode.SPACE,
}

_SYMBOL_TOKENS: dict[str, Scancode] = {
    "0": Scancode.NUM_0,
    "-": Scancode.MINUS,
    "=": Scancode.EQUALS,
    "[": Scancode.LEFTBRACKET,
    "]": Scancode.RIGHTBRACKET,
    ";": Scancode.SEMICOLON,
    "'": Scancode.APOSTROPHE,
    "`": Scancode.GRAVE,
    ",": Scancode.COMMA,
    ".": Scancode.PERIOD,
    "/": Scancode.SLASH,
    "\\": Scancode.BACKSLASH,
    "<": Scancode.NONUSBACKSLASH,
    ">": Scancode.NONUSBACKSLASH,
    "+": Scancode.EQUALS,
}

_TOKEN_FOR_SCANCODE: dict[Scancode, str] = {sc: tok for tok, sc in _NAMED_TOKENS.items()}
_TOKEN_FOR_SCANCODE.update(
    {
        Scancode.NUM_0: "0",
        Scancode.MINUS: "-",
        Scancode.EQUALS: "=",
        Scancode.LEFTBRACKET: "[",
        Scancode.RIGHTBRACKET: "]",
        Scancode.SEMICOLON: ";",
        Scancode.APOSTROPHE: "'",
        Scancode.GRAVE: "`",
        Scancode.COMMA: ",",
        Scancode.PERIOD: ".",
        Scancode.SLASH: "/",
        Scancode.BACKSLASH: "\\\\",
    }
)


def key_token_to_scancode(token: str) -> Scancode:
    """Map a ``keybinds.data`` key token to a scancode (UNKNOWN if unrecognised)."""
    if not token:
        return Scancode.UNKNOWN
    if token in _NAMED_TOKENS:
        return _NAMED_TOKENS[token]

    digits = token[1:]
    if len(token) >= 2 and token[0] == "F" and all(ch in "0123456789" for ch in digits):
        number = int(digits)
        if 1 <= number <= 12:
            return Scancode(Scancode.F1 + number - 1)

    if len(token) == 1:
        c = token
        if "a" <= c <= "z":
            return Scancode(Scancode.A + ord(c) - ord("a"))
        if "1" <= c <= "9":
            return Scancode(Scancode.NUM_1 + ord(c) - ord("1"))
        if c in _SYMBOL_TOKENS:
            return _SYMBOL_TOKENS[c]

    return Scancode.UNKNOWN


def chord_from_keybind(keybind: Keybind) -> KeyChord:
    """Build a chord from a parsed keybind value."""
    return KeyChord(tuple(key_token_to_scancode(token) for token in keybind.keys))


def scancode_to_key_token(scancode: Scancode) -> str:
    """Return the ``keybinds.data`` token for a scancode, or ``""`` if it has none."""
    if scancode in _TOKEN_FOR_SCANCODE:
        return _TOKEN_FOR_SCANCODE[scancode]
    if Scancode.F1 <= scancode <= Scancode.F12:
        return f"F{scancode - Scancode.F1 + 1}"
    if Scancode.A <= scancode <= Scancode.Z:
        return chr(ord("a") + scancode - Scancode.A)
    if Scancode.NUM_1 <= scancode <= Scancode.NUM_9:
        return chr(ord("1") + scancode - Scancode.NUM_1)
    return ""


def chord_to_data_string(chord: KeyChord) -> str:
    """Render a chord as the ``<tok+tok+...>`` literal used in data files."""
    tokens = (scancode_to_key_token(sc) or "?" for sc in chord.keys)
    return "<" + "+".join(tokens) + ">"


_DISPLAY_NAMES: dict[Scancode, str] = {
    Scancode.RETURN: "Return",
    Scancode.ESCAPE: "Escape",
    Scancode.BACKSPACE: "Backspace",
    Scancode.TAB: "Tab",
    Scancode.SPACE: "Space",
    Scancode.MINUS: "-",
    Scancode.EQUALS: "=",
    Scancode.LEFTBRACKET: "[",
    Scancode.RIGHTBRACKET: "]",
    Scancode.BACKSLASH: "\\",
    Scancode.SEMICOLON: ";",
    Scancode.APOSTROPHE: "'",
    Scancode.GRAVE: "`",
    Scancode.COMMA: ",",
    Scancode.PERIOD: ".",
    Scancode.SLASH: "/",
    Scancode.CAPSLOCK: "CapsLock",
    Scancode.DELETE: "Delete",
    Scancode.NUM_0: "0",
    Scancode.LCTRL: "Left Ctrl",
    Scancode.LSHIFT: "Left Shift",
    Scancode.LALT: "Left Alt",
    Scancode.RCTRL: "Right Ctrl",
    Scancode.RSHIFT: "Right Shift",
    Scancode.RALT: "Right Alt",
}
_DISPLAY_NAMES.update(
    {Scancode(Scancode.A + i): chr(ord("A") + i) for i in range(26)}
)
_DISPLAY_NAMES.update(
    {Scancode(Scancode.NUM_1 + i): str(i + 1) for i in range(9)}
)
_DISPLAY_NAMES.update(
    {Scancode(Scancode.F1 + i): f"F{i + 1}" for i in range(12)}
)


def chord_to_display_string(chord: KeyChord) -> str:
    """Render a chord for people, e.g. ``"F4 + Right Alt"``."""
    if not chord.keys:
        return "(none)"
    return " + ".join(_DISPLAY_NAMES.get(sc, "") for sc in chord.keys)


def _chord(*keys: Scancode) -> KeyChord:
    return KeyChord(tuple(keys))


def _default_hotbar() -> list[KeyChord]:
    return [_chord(Scancode(Scancode.NUM_1 + i)) for i in range(9)]


@dataclass
class Keybinds:
    """All named actions with their chords."""

    quit: KeyChord = field(default_factory=lambda: _chord(Scancode.F4, Scancode.RALT))
    pause: KeyChord = field(default_factory=lambda: _chord(Scancode.ESCAPE))
    move_forward: KeyChord = field(default_factory=lambda: _chord(Scancode.W))
    move_back: KeyChord = field(default_factory=lambda: _chord(Scancode.S))
    move_left: KeyChord = field(default_factory=lambda: _chord(Scancode.A))
    move_right: KeyChord = field(default_factory=lambda: _chord(Scancode.D))
    jump: KeyChord = field(default_factory=lambda: _chord(Scancode.SPACE))
    crouch: KeyChord = field(default_factory=lambda: _chord(Scancode.LCTRL))
    crawl_toggle: KeyChord = field(
        default_factory=lambda: _chord(Scancode.LCTRL, Scancode.LSHIFT)
    )
    hotbar: list[KeyChord] = field(default_factory=_default_hotbar)
    debug_toggle: KeyChord = field(default_factory=lambda: _chord(Scancode.F3))
    debug_wireframe: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.W))
    debug_block: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.B))
    debug_face: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.F))
    debug_data: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.D))
    debug_wireframe_only: KeyChord = field(
        default_factory=lambda: _chord(Scancode.F3, Scancode.T)
    )
    debug_stance: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.S))
    debug_velocity: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.V))
    debug_reload: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.H))
    debug_save: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.E))
    debug_load: KeyChord = field(default_factory=lambda: _chord(Scancode.F3, Scancode.L))


_GENERAL_ACTIONS = (
    "quit",
    "pause",
    "move_forward",
    "move_back",
    "move_left",
    "move_right",
    "jump",
    "crouch",
    "crawl_toggle",
)

_DEBUG_ACTIONS = (
    "debug_toggle",
    "debug_wireframe",
    "debug_block",
    "debug_face",
    "debug_data",
    "debug_wireframe_only",
    "debug_stance",
    "debug_velocity",
    "debug_reload",
    "debug_save",
    "debug_load",
)


def load_keybinds(path: Union[str, Path]) -> Keybinds:
    """Read keybinds from a data file; actions it does not set keep their defaults.

    Raises :class:`~voxelcore.dataformat.ParseError` if the file cannot be
    read or parsed.
    """
    doc = parse_file(path)
    keybinds = Keybinds()

    def read(key: str) -> KeyChord | None:
        value = doc.get(key)
        return chord_from_keybind(value) if isinstance(value, Keybind) else None

    for action in _GENERAL_ACTIONS + _DEBUG_ACTIONS:
        chord = read(action)
        if chord is not None:
            setattr(keybinds, action, chord)

    for index in range(9):
        chord = read(f"hotbar_{index + 1}")
        if chord is not None:
            keybinds.hotbar[index] = chord

    return keybinds


def save_keybinds(path: Union[str, Path], keybinds: Keybinds) -> None:
    """Write all keybinds to a data file; raise ``OSError`` on failure."""

    def line(name: str, chord: KeyChord) -> str:
        return f"{name:<24} : {chord_to_data_string(chord)}\n"

    parts = [
        "# Keybinds \u2013 auto-saved by the settings menu.\n",
        "# See the original keybinds.data for the token reference.\n\n",
        "# general\n",
    ]
    parts.extend(line(action, getattr(keybinds, action)) for action in _GENERAL_ACTIONS)
    parts.append("\n# hotbar\n")
    parts.extend(
        line(f"hotbar_{index + 1}", chord) for index, chord in enumerate(keybinds.hotbar)
    )
    parts.append("\n# debug\n")
    parts.extend(line(action, getattr(keybinds, action)) for action in _DEBUG_ACTIONS)

    Path(path).write_text("".join(parts), encoding="utf-8")