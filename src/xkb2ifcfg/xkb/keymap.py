# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import enum
import typing

from ..util import check_c_enum
from ._ffi import ffi, libc, libxkbcommon

xkb_keymap_p = typing.NewType("xkb_keymap_p", typing.Any)
xkb_state_p = typing.NewType("xkb_state_p", typing.Any)

NO_SYMBOL = 0
# xkbcommon never produces more than 6 bytes of UTF-8 for one key, plus the terminator.
UTF8_BUFFER_SIZE = 7
KEYSYM_NAME_BUFFER_SIZE = 64


@check_c_enum(ffi, "enum xkb_key_direction")
class KeyDirection(enum.IntEnum):
    UP = 0
    DOWN = 1


def keysym_get_name(keysym: int) -> str:
    buffer = ffi.new("char[]", KEYSYM_NAME_BUFFER_SIZE)
    if libxkbcommon().xkb_keysym_get_name(keysym, buffer, KEYSYM_NAME_BUFFER_SIZE) < 0:
        return f"0x{keysym:x}"
    return ffi.string(buffer).decode("utf-8")


def keysym_to_utf8(keysym: int) -> str:
    buffer = ffi.new("char[]", UTF8_BUFFER_SIZE)
    if libxkbcommon().xkb_keysym_to_utf8(keysym, buffer, UTF8_BUFFER_SIZE) <= 0:
        return ""
    return ffi.string(buffer).decode("utf-8", errors="replace")


class Keymap:
    def __init__(self, keymap: xkb_keymap_p):
        self.keymap = keymap

    def min_keycode(self) -> int:
        return libxkbcommon().xkb_keymap_min_keycode(self.keymap)

    def max_keycode(self) -> int:
        return libxkbcommon().xkb_keymap_max_keycode(self.keymap)

    def keycodes(self) -> collections.abc.Iterator[int]:
        # Same order as xkb_keymap_key_for_each.
        yield from range(self.min_keycode(), self.max_keycode() + 1)

    def num_levels_for_key(self, keycode: int, layout: int = 0) -> int:
        return libxkbcommon().xkb_keymap_num_levels_for_key(self.keymap, keycode, layout)

    def syms_by_level(self, keycode: int, layout: int, level: int) -> list[int]:
        syms_out = ffi.new("const xkb_keysym_t **")
        count = libxkbcommon().xkb_keymap_key_get_syms_by_level(self.keymap, keycode, layout, level, syms_out)
        return [syms_out[0][i] for i in range(count)]

    def as_string(self) -> str:
        lib = libxkbcommon()
        raw = lib.xkb_keymap_get_as_string(self.keymap, lib.XKB_KEYMAP_FORMAT_TEXT_V1)
        if raw == ffi.NULL:
            raise MemoryError("xkb_keymap_get_as_string failed")
        try:
            return ffi.string(raw).decode("utf-8")
        finally:
            libc().free(raw)


class KeyboardState:
    """The mutable modifier state of the abstract keyboard."""

    def __init__(self, state: xkb_state_p):
        self.state = state

    def update_key(self, keycode: int, direction: KeyDirection):
        libxkbcommon().xkb_state_update_key(self.state, keycode, direction)

    def key_get_one_sym(self, keycode: int) -> int:
        return libxkbcommon().xkb_state_key_get_one_sym(self.state, keycode)

    def key_get_utf8(self, keycode: int) -> bytes:
        buffer = ffi.new("char[]", UTF8_BUFFER_SIZE)
        libxkbcommon().xkb_state_key_get_utf8(self.state, keycode, buffer, UTF8_BUFFER_SIZE)
        return ffi.string(buffer)
