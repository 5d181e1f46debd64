# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import contextlib
import enum
import logging
import typing

from .keycodes import Key, xkb_keycode
from .xkb import KeyDirection

if typing.TYPE_CHECKING:
    from .xkb import KeyboardState

logger = logging.getLogger(__name__)


# Values follow the input filter's modifier numbering. mod2 is CTRL, which never
# changes the generated characters.
class Modifier(enum.IntFlag):
    NONE = 0
    SHIFT = 1  # mod1
    ALTGR = 4  # mod3
    CAPSLOCK = 8  # mod4

    @property
    def label(self):
        if self is Modifier.NONE:
            return "no modifier"
        return "-".join(flag.name for flag in (Modifier.SHIFT, Modifier.ALTGR, Modifier.CAPSLOCK) if flag in self)

    @property
    def mod_attributes(self) -> dict[str, bool]:
        return {
            "mod1": Modifier.SHIFT in self,
            "mod3": Modifier.ALTGR in self,
            "mod4": Modifier.CAPSLOCK in self,
        }


COMBINATIONS: tuple[Modifier, ...] = (
    Modifier.NONE,
    Modifier.SHIFT,
    Modifier.ALTGR,
    Modifier.CAPSLOCK,
    Modifier.SHIFT | Modifier.ALTGR,
    Modifier.SHIFT | Modifier.CAPSLOCK,
    Modifier.ALTGR | Modifier.CAPSLOCK,
    Modifier.SHIFT | Modifier.ALTGR | Modifier.CAPSLOCK,
)

# Physical keys driving each modifier.
MODIFIER_KEYS = {
    Modifier.SHIFT: Key.KEY_LEFTSHIFT,
    Modifier.ALTGR: Key.KEY_RIGHTALT,
    Modifier.CAPSLOCK: Key.KEY_CAPSLOCK,
}


def _tap(state: KeyboardState, key: Key):
    keycode = xkb_keycode(key)
    state.update_key(keycode, KeyDirection.DOWN)
    state.update_key(keycode, KeyDirection.UP)


@contextlib.contextmanager
def pressed(state: KeyboardState, key: Key) -> collections.abc.Iterator[None]:
    "Holds a momentary modifier down for the duration of the block."
    keycode = xkb_keycode(key)
    state.update_key(keycode, KeyDirection.DOWN)
    try:
        yield
    finally:
        state.update_key(keycode, KeyDirection.UP)


@contextlib.contextmanager
def locked(state: KeyboardState, key: Key) -> collections.abc.Iterator[None]:
    "Taps a locking modifier on entry and taps it again on exit, so the lock is off afterwards."
    _tap(state, key)
    try:
        yield
    finally:
        _tap(state, key)


def numlock(state: KeyboardState):
    """Locks numlock for the whole run.

    Numpad keys are remapped by the input filter when numlock is off, so we
    always assume numlock=on to handle KP1 etc. correctly.
    """
    return locked(state, Key.KEY_NUMLOCK)


class ModifierController:
    def __init__(self, state: KeyboardState):
        self.state = state

    @contextlib.contextmanager
    def activate(self, combination: Modifier) -> collections.abc.Iterator[None]:
        # capslock brackets shift and altgr, never interleaves with them
        with contextlib.ExitStack() as stack:
            if Modifier.CAPSLOCK in combination:
                stack.enter_context(locked(self.state, MODIFIER_KEYS[Modifier.CAPSLOCK]))
            if Modifier.SHIFT in combination:
                stack.enter_context(pressed(self.state, MODIFIER_KEYS[Modifier.SHIFT]))
            if Modifier.ALTGR in combination:
                stack.enter_context(pressed(self.state, MODIFIER_KEYS[Modifier.ALTGR]))
            yield
