# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from .compose import ComposeState, ComposeStatus
from .keymap import NO_SYMBOL, KeyboardState, KeyDirection, Keymap, keysym_get_name, keysym_to_utf8
from .layout import CompiledLayout, compile_layout

__all__ = [
    "NO_SYMBOL",
    "CompiledLayout",
    "ComposeState",
    "ComposeStatus",
    "KeyDirection",
    "KeyboardState",
    "Keymap",
    "compile_layout",
    "keysym_get_name",
    "keysym_to_utf8",
]
