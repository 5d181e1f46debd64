# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec

# Key identifiers use the Linux evdev numbering, which is what the input filter
# consumes. XKB numbers the same physical keys differently: it's a documented
# fact that 'xkb keycode == evdev keycode + 8'.
EVDEV_OFFSET = 8


# The keys of a standard pc105 keyboard. Media and language keys never
# produce characters, so they are not listed.
class Key(enum.IntEnum):
    KEY_ESC = 1
    KEY_1 = 2
    KEY_2 = 3
    KEY_3 = 4
    KEY_4 = 5
    KEY_5 = 6
    KEY_6 = 7
    KEY_7 = 8
    KEY_8 = 9
    KEY_9 = 10
    KEY_0 = 11
    KEY_MINUS = 12
    KEY_EQUAL = 13
    KEY_BACKSPACE = 14
    KEY_TAB = 15
    KEY_Q = 16
    KEY_W = 17
    KEY_E = 18
    KEY_R = 19
    KEY_T = 20
    KEY_Y = 21
    KEY_U = 22
    KEY_I = 23
    KEY_O = 24
    KEY_P = 25
    KEY_LEFTBRACE = 26
    KEY_RIGHTBRACE = 27
    KEY_ENTER = 28
    KEY_LEFTCTRL = 29
    KEY_A = 30
    KEY_S = 31
    KEY_D = 32
    KEY_F = 33
    KEY_G = 34
    KEY_H = 35
    KEY_J = 36
    KEY_K = 37
    KEY_L = 38
    KEY_SEMICOLON = 39
    KEY_APOSTROPHE = 40
    KEY_GRAVE = 41
    KEY_LEFTSHIFT = 42
    KEY_BACKSLASH = 43
    KEY_Z = 44
    KEY_X = 45
    KEY_C = 46
    KEY_V = 47
    KEY_B = 48
    KEY_N = 49
    KEY_M = 50
    KEY_COMMA = 51
    KEY_DOT = 52
    KEY_SLASH = 53
    KEY_RIGHTSHIFT = 54
    KEY_KPASTERISK = 55
    KEY_LEFTALT = 56
    KEY_SPACE = 57
    KEY_CAPSLOCK = 58
    KEY_F1 = 59
    KEY_F2 = 60
    KEY_F3 = 61
    KEY_F4 = 62
    KEY_F5 = 63
    KEY_F6 = 64
    KEY_F7 = 65
    KEY_F8 = 66
    KEY_F9 = 67
    KEY_F10 = 68
    KEY_NUMLOCK = 69
    KEY_SCROLLLOCK = 70
    KEY_KP7 = 71
    KEY_KP8 = 72
    KEY_KP9 = 73
    KEY_KPMINUS = 74
    KEY_KP4 = 75
    KEY_KP5 = 76
    KEY_KP6 = 77
    KEY_KPPLUS = 78
    KEY_KP1 = 79
    KEY_KP2 = 80
    KEY_KP3 = 81
    KEY_KP0 = 82
    KEY_KPDOT = 83
    KEY_102ND = 86
    KEY_F11 = 87
    KEY_F12 = 88
    KEY_KPENTER = 96
    KEY_RIGHTCTRL = 97
    KEY_KPSLASH = 98
    KEY_SYSRQ = 99
    KEY_RIGHTALT = 100
    KEY_HOME = 102
    KEY_UP = 103
    KEY_PAGEUP = 104
    KEY_LEFT = 105
    KEY_RIGHT = 106
    KEY_END = 107
    KEY_DOWN = 108
    KEY_PAGEDOWN = 109
    KEY_INSERT = 110
    KEY_DELETE = 111
    KEY_PAUSE = 119
    KEY_LEFTMETA = 125
    KEY_RIGHTMETA = 126
    KEY_COMPOSE = 127


def xkb_keycode(key: Key) -> int:
    return int(key) + EVDEV_OFFSET


class KeyMapping(msgspec.Struct, frozen=True):
    xkb: int
    xkb_name: str
    key: Key


# Keys eventually generating characters
PRINTABLE: tuple[KeyMapping, ...] = (
    KeyMapping(10, "<AE01>", Key.KEY_1),
    KeyMapping(11, "<AE02>", Key.KEY_2),
    KeyMapping(12, "<AE03>", Key.KEY_3),
    KeyMapping(13, "<AE04>", Key.KEY_4),
    KeyMapping(14, "<AE05>", Key.KEY_5),
    KeyMapping(15, "<AE06>", Key.KEY_6),
    KeyMapping(16, "<AE07>", Key.KEY_7),
    KeyMapping(17, "<AE08>", Key.KEY_8),
    KeyMapping(18, "<AE09>", Key.KEY_9),
    KeyMapping(19, "<AE10>", Key.KEY_0),
    KeyMapping(20, "<AE11>", Key.KEY_MINUS),
    KeyMapping(21, "<AE12>", Key.KEY_EQUAL),
    KeyMapping(24, "<AD01>", Key.KEY_Q),
    KeyMapping(25, "<AD02>", Key.KEY_W),
    KeyMapping(26, "<AD03>", Key.KEY_E),
    KeyMapping(27, "<AD04>", Key.KEY_R),
    KeyMapping(28, "<AD05>", Key.KEY_T),
    KeyMapping(29, "<AD06>", Key.KEY_Y),
    KeyMapping(30, "<AD07>", Key.KEY_U),
    KeyMapping(31, "<AD08>", Key.KEY_I),
    KeyMapping(32, "<AD09>", Key.KEY_O),
    KeyMapping(33, "<AD10>", Key.KEY_P),
    KeyMapping(34, "<AD11>", Key.KEY_LEFTBRACE),
    KeyMapping(35, "<AD12>", Key.KEY_RIGHTBRACE),
    KeyMapping(38, "<AC01>", Key.KEY_A),
    KeyMapping(39, "<AC02>", Key.KEY_S),
    KeyMapping(40, "<AC03>", Key.KEY_D),
    KeyMapping(41, "<AC04>", Key.KEY_F),
    KeyMapping(42, "<AC05>", Key.KEY_G),
    KeyMapping(43, "<AC06>", Key.KEY_H),
    KeyMapping(44, "<AC07>", Key.KEY_J),
    KeyMapping(45, "<AC08>", Key.KEY_K),
    KeyMapping(46, "<AC09>", Key.KEY_L),
    KeyMapping(47, "<AC11>", Key.KEY_SEMICOLON),
    KeyMapping(48, "<AC12>", Key.KEY_APOSTROPHE),
    # left of "1" <AE01>
    KeyMapping(49, "<TLDE>", Key.KEY_GRAVE),
    # left of <RTRN> (pc105) / above <RTRN> (pc104)
    KeyMapping(51, "<BKSL>", Key.KEY_BACKSLASH),
    KeyMapping(52, "<AB01>", Key.KEY_Z),
    KeyMapping(53, "<AB02>", Key.KEY_X),
    KeyMapping(54, "<AB03>", Key.KEY_C),
    KeyMapping(55, "<AB04>", Key.KEY_V),
    KeyMapping(56, "<AB05>", Key.KEY_B),
    KeyMapping(57, "<AB06>", Key.KEY_N),
    KeyMapping(58, "<AB07>", Key.KEY_M),
    KeyMapping(59, "<AB08>", Key.KEY_COMMA),
    KeyMapping(60, "<AB09>", Key.KEY_DOT),
    KeyMapping(61, "<AB10>", Key.KEY_SLASH),
    KeyMapping(65, "<SPCE>", Key.KEY_SPACE),
    # right of <LFSH> (pc105)
    KeyMapping(94, "<LSGT>", Key.KEY_102ND),
    KeyMapping(63, "<KPMU>", Key.KEY_KPASTERISK),
    KeyMapping(79, "<KP7>", Key.KEY_KP7),
    KeyMapping(80, "<KP8>", Key.KEY_KP8),
    KeyMapping(81, "<KP9>", Key.KEY_KP9),
    KeyMapping(82, "<KPSU>", Key.KEY_KPMINUS),
    KeyMapping(83, "<KP4>", Key.KEY_KP4),
    KeyMapping(84, "<KP5>", Key.KEY_KP5),
    KeyMapping(85, "<KP6>", Key.KEY_KP6),
    KeyMapping(86, "<KPAD>", Key.KEY_KPPLUS),
    KeyMapping(87, "<KP1>", Key.KEY_KP1),
    KeyMapping(88, "<KP2>", Key.KEY_KP2),
    KeyMapping(89, "<KP3>", Key.KEY_KP3),
    KeyMapping(90, "<KP0>", Key.KEY_KP0),
    KeyMapping(91, "<KPDL>", Key.KEY_KPDOT),
    KeyMapping(106, "<KPDV>", Key.KEY_KPSLASH),
)

# Keys without a printable character but with a fixed chargen entry (e.g., ENTER)
NON_PRINTABLE: tuple[KeyMapping, ...] = (
    KeyMapping(9, "<ESC>", Key.KEY_ESC),
    KeyMapping(22, "<BKSP>", Key.KEY_BACKSPACE),
    KeyMapping(23, "<TAB>", Key.KEY_TAB),
    KeyMapping(36, "<RTRN>", Key.KEY_ENTER),
    KeyMapping(104, "<KPEN>", Key.KEY_KPENTER),
    KeyMapping(119, "<DELE>", Key.KEY_DELETE),
)

_PRINTABLE_BY_XKB = {m.xkb: m for m in PRINTABLE}
_NON_PRINTABLE_BY_XKB = {m.xkb: m for m in NON_PRINTABLE}


def printable(xkb: int) -> typing.Optional[KeyMapping]:
    return _PRINTABLE_BY_XKB.get(xkb)


def non_printable(xkb: int) -> typing.Optional[KeyMapping]:
    return _NON_PRINTABLE_BY_XKB.get(xkb)
