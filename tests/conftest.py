# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
# Fakes for the xkbcommon handles, so the generator can be tested without libxkbcommon.
from __future__ import annotations

import collections.abc
import dataclasses

import pytest

import xkb2ifcfg.report  # important to preserve the namespace for monkeypatching
import xkb2ifcfg.resolver
from xkb2ifcfg.keycodes import Key, xkb_keycode
from xkb2ifcfg.xkb import ComposeStatus, KeyDirection
from xkb2ifcfg.xkb.compose import FeedResult

LEFTSHIFT = xkb_keycode(Key.KEY_LEFTSHIFT)
RIGHTALT = xkb_keycode(Key.KEY_RIGHTALT)
CAPSLOCK = xkb_keycode(Key.KEY_CAPSLOCK)
NUMLOCK = xkb_keycode(Key.KEY_NUMLOCK)
LOCKING_KEYCODES = frozenset({CAPSLOCK, NUMLOCK})

DEAD_GRAVE = 0xFE50
DEAD_ACUTE = 0xFE51
DEAD_TILDE = 0xFE53
DEAD_DIAERESIS = 0xFE57
DEAD_KEYSYMS = {
    DEAD_GRAVE: "dead_grave",
    DEAD_ACUTE: "dead_acute",
    DEAD_TILDE: "dead_tilde",
    DEAD_DIAERESIS: "dead_diaeresis",
}


@dataclasses.dataclass
class FakeKey:
    # (keysym, text) per shift level; text is empty for dead keys
    levels: list[tuple[int, str]]
    alphabetic: bool = False


def keysym_for(text: str) -> int:
    codepoint = ord(text)
    if codepoint < 0x100:
        return codepoint
    return 0x1000000 + codepoint


def chars(*texts: str, alphabetic: bool = False) -> FakeKey:
    return FakeKey(levels=[(keysym_for(text), text) for text in texts], alphabetic=alphabetic)


def letter(lower: str, *altgr: str) -> FakeKey:
    return chars(lower, lower.upper(), *altgr, alphabetic=True)


def us_keys() -> dict[int, FakeKey]:
    keys = {}
    for xkb, pair in zip(range(10, 22), ["1!", "2@", "3#", "4$", "5%", "6^", "7&", "8*", "9(", "0)", "-_", "=+"]):
        keys[xkb] = chars(*pair)
    for xkb, lower in zip(range(24, 34), "qwertyuiop"):
        keys[xkb] = letter(lower)
    keys[34] = chars("[", "{")
    keys[35] = chars("]", "}")
    for xkb, lower in zip(range(38, 47), "asdfghjkl"):
        keys[xkb] = letter(lower)
    keys[47] = chars(";", ":")
    keys[48] = chars("'", '"')
    keys[49] = chars("`", "~")
    keys[51] = chars("\\", "|")
    for xkb, lower in zip(range(52, 59), "zxcvbnm"):
        keys[xkb] = letter(lower)
    keys[59] = chars(",", "<")
    keys[60] = chars(".", ">")
    keys[61] = chars("/", "?")
    keys[65] = chars(" ")
    keys[94] = chars("<", ">")
    keys[63] = FakeKey(levels=[(0xFFAA, "*")])
    for xkb, digit in [(79, 7), (80, 8), (81, 9), (83, 4), (84, 5), (85, 6), (87, 1), (88, 2), (89, 3), (90, 0)]:
        keys[xkb] = FakeKey(levels=[(0xFFB0 + digit, str(digit))])
    keys[82] = FakeKey(levels=[(0xFFAD, "-")])
    keys[86] = FakeKey(levels=[(0xFFAB, "+")])
    keys[91] = FakeKey(levels=[(0xFFAE, ".")])
    keys[106] = FakeKey(levels=[(0xFFAF, "/")])
    # non-printable
    keys[9] = FakeKey(levels=[(0xFF1B, "\x1b")])
    keys[22] = FakeKey(levels=[(0xFF08, "\x08")])
    keys[23] = FakeKey(levels=[(0xFF09, "\t")])
    keys[36] = FakeKey(levels=[(0xFF0D, "\r")])
    keys[104] = FakeKey(levels=[(0xFF8D, "\r")])
    keys[119] = FakeKey(levels=[(0xFFFF, "\x7f")])
    return keys


def us_intl_keys() -> dict[int, FakeKey]:
    keys = us_keys()
    keys[48] = FakeKey(levels=[(DEAD_ACUTE, ""), (DEAD_DIAERESIS, ""), (ord("'"), "'"), (ord('"'), '"')])
    keys[49] = FakeKey(levels=[(DEAD_GRAVE, ""), (DEAD_TILDE, ""), (ord("`"), "`"), (ord("~"), "~")])
    keys[24] = letter("q", "ä", "Ä")
    keys[14] = chars("5", "%", "€", "¸")
    return keys


def de_nodeadkeys_keys() -> dict[int, FakeKey]:
    keys = us_keys()
    keys[11] = chars("2", '"', "²")
    keys[12] = chars("3", "§", "³")
    keys[20] = chars("ß", "?", "\\", "ẞ")
    keys[21] = chars("´", "`")
    keys[24] = letter("q", "@")
    keys[26] = letter("e", "€")
    keys[29] = letter("z")
    keys[34] = letter("ü")
    keys[35] = chars("+", "*", "~")
    keys[47] = letter("ö")
    keys[48] = letter("ä")
    keys[49] = chars("^", "°")
    keys[51] = chars("#", "'")
    keys[52] = letter("y")
    keys[59] = chars(",", ";")
    keys[60] = chars(".", ":")
    keys[61] = chars("-", "_")
    keys[94] = chars("<", ">", "|")
    return keys


class FakeKeyboardState:
    def __init__(self, keys: dict[int, FakeKey]):
        self.keys = keys
        self.down: set[int] = set()
        self.locks: set[int] = set()
        self.events: list[tuple[int, KeyDirection]] = []

    def update_key(self, keycode: int, direction: KeyDirection):
        self.events.append((keycode, direction))
        if direction is KeyDirection.DOWN:
            if keycode in LOCKING_KEYCODES and keycode not in self.down:
                self.locks ^= {keycode}
            self.down.add(keycode)
        else:
            self.down.discard(keycode)

    def _level(self, key: FakeKey) -> tuple[int, str]:
        shifted = LEFTSHIFT in self.down
        if key.alphabetic and CAPSLOCK in self.locks:
            shifted = not shifted
        level = (1 if shifted else 0) + (2 if RIGHTALT in self.down else 0)
        # keys without altgr levels ignore altgr, keys with a single level ignore everything
        if level >= len(key.levels):
            level -= 2
        if level < 0 or level >= len(key.levels):
            level = 0
        return key.levels[level]

    def key_get_one_sym(self, keycode: int) -> int:
        if keycode not in self.keys:
            return 0
        return self._level(self.keys[keycode])[0]

    def key_get_utf8(self, keycode: int) -> bytes:
        if keycode not in self.keys:
            return b""
        return self._level(self.keys[keycode])[1].encode("utf-8")


class FakeKeymap:
    def __init__(self, keys: dict[int, FakeKey]):
        self.keys = keys

    def keycodes(self) -> collections.abc.Iterator[int]:
        yield from range(8, 256)

    def num_levels_for_key(self, keycode: int, layout: int = 0) -> int:
        if keycode not in self.keys:
            return 0
        return len(self.keys[keycode].levels)

    def syms_by_level(self, keycode: int, layout: int, level: int) -> list[int]:
        return [self.keys[keycode].levels[level][0]]

    def as_string(self) -> str:
        return "xkb_keymap {\n};"


class FakeComposeState:
    def __init__(self, dead_keysyms: collections.abc.Iterable[int] = DEAD_KEYSYMS):
        self.dead_keysyms = set(dead_keysyms)
        self._status = ComposeStatus.NOTHING
        self.resets = 0
        self.fed: list[int] = []

    def reset(self):
        self.resets += 1
        self._status = ComposeStatus.NOTHING

    def feed(self, keysym: int) -> FeedResult:
        self.fed.append(keysym)
        if self._status is ComposeStatus.COMPOSING:
            self._status = ComposeStatus.COMPOSED
        elif keysym in self.dead_keysyms:
            self._status = ComposeStatus.COMPOSING
        else:
            self._status = ComposeStatus.NOTHING
            return FeedResult.IGNORED
        return FeedResult.ACCEPTED

    def status(self) -> ComposeStatus:
        return self._status


@dataclasses.dataclass(frozen=True, kw_only=True)
class FakeCompiledLayout:
    layout: str
    variant: str
    locale: str
    keymap: FakeKeymap
    state: FakeKeyboardState
    compose: FakeComposeState

    @property
    def description(self):
        return f"{self.layout}-{self.variant}-{self.locale}"


LAYOUTS = {
    ("us", ""): us_keys,
    ("us", "intl"): us_intl_keys,
    ("de", "nodeadkeys"): de_nodeadkeys_keys,
}


def fake_compiled_layout(layout: str, variant: str, locale: str) -> FakeCompiledLayout:
    keys = LAYOUTS[(layout, variant)]()
    return FakeCompiledLayout(
        layout=layout,
        variant=variant,
        locale=locale,
        keymap=FakeKeymap(keys),
        state=FakeKeyboardState(keys),
        compose=FakeComposeState(),
    )


@pytest.fixture
def us_layout():
    return fake_compiled_layout("us", "", "en_US.UTF-8")


@pytest.fixture
def us_intl_layout():
    return fake_compiled_layout("us", "intl", "en_US.UTF-8")


@pytest.fixture
def de_layout():
    return fake_compiled_layout("de", "nodeadkeys", "de_DE.UTF-8")


@pytest.fixture
def fake_layouts():
    return fake_compiled_layout


@pytest.fixture
def fake_keysym_names(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(xkb2ifcfg.resolver, "keysym_get_name", lambda keysym: DEAD_KEYSYMS.get(keysym, f"0x{keysym:x}"))


@pytest.fixture
def fake_keysym_text(monkeypatch: pytest.MonkeyPatch):
    def keysym_text(keysym: int) -> str:
        if keysym in DEAD_KEYSYMS:
            return ""
        if keysym >= 0x1000000:
            return chr(keysym - 0x1000000)
        if 0xFFB0 <= keysym <= 0xFFB9:
            return str(keysym - 0xFFB0)
        if keysym < 0x100:
            return chr(keysym)
        return ""

    monkeypatch.setattr(xkb2ifcfg.report, "keysym_to_utf8", keysym_text)
