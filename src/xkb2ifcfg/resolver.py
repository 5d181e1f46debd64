# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

import msgspec

from .keycodes import Key, KeyMapping, non_printable
from .xkb import NO_SYMBOL, ComposeStatus, keysym_get_name

if typing.TYPE_CHECKING:
    from .xkb import ComposeState, KeyboardState

logger = logging.getLogger(__name__)

# Keys whose effect byte can be overridden by Settings.enter_ascii. Compiled
# layouts report carriage return (13) here, while the input filter has always
# documented line feed (10) for them.
ENTER_KEYS = frozenset({Key.KEY_ENTER, Key.KEY_KPENTER})


class CharacterEntry(msgspec.Struct, frozen=True):
    key: Key
    utf8: bytes

    @property
    def byte_attributes(self) -> list[tuple[str, int]]:
        return [(f"b{i}", b) for i, b in enumerate(self.utf8)]

    @property
    def character(self) -> str:
        return self.utf8.decode("utf-8", errors="replace")


class EffectEntry(msgspec.Struct, frozen=True):
    key: Key
    ascii: int


class ComposingKey(msgspec.Struct, frozen=True):
    key: Key
    keysym: int
    keysym_name: str


class ComposeProbe:
    """Asks the compose table whether a keysym starts a dead-key sequence.

    The compose state is reset before every feed, so a probe never depends on
    the keysyms probed before it.
    """

    def __init__(self, compose: ComposeState):
        self.compose = compose

    def is_composing(self, keysym: int) -> bool:
        self.compose.reset()
        self.compose.feed(keysym)
        return self.compose.status() is ComposeStatus.COMPOSING


class KeyResolver:
    def __init__(self, state: KeyboardState, probe: ComposeProbe, *, enter_ascii: typing.Optional[int] = None):
        self.state = state
        self.probe = probe
        self.enter_ascii = enter_ascii

    def resolve_printable(self, mapping: KeyMapping) -> CharacterEntry | ComposingKey | None:
        """Resolves the character the key produces in the current modifier state.

        Only the one keysym of the currently active level is considered.
        """
        keysym = self.state.key_get_one_sym(mapping.xkb)
        # no symbol, or several keysyms on the level
        if keysym == NO_SYMBOL:
            return None
        if self.probe.is_composing(keysym):
            composing = ComposingKey(key=mapping.key, keysym=keysym, keysym_name=keysym_get_name(keysym))
            logger.warning("unsupported composing keysym <%s> on %s", composing.keysym_name, mapping.key.name)
            return composing

        utf8 = self.state.key_get_utf8(mapping.xkb)
        if not utf8:
            return None
        return CharacterEntry(key=mapping.key, utf8=utf8)

    def resolve_effect(self, mapping: KeyMapping) -> EffectEntry:
        if non_printable(mapping.xkb) is None:
            raise ValueError(f"{mapping.key.name} has no fixed effect byte")
        if self.enter_ascii is not None and mapping.key in ENTER_KEYS:
            return EffectEntry(key=mapping.key, ascii=self.enter_ascii)
        utf8 = self.state.key_get_utf8(mapping.xkb)
        return EffectEntry(key=mapping.key, ascii=utf8[0] if utf8 else 0)
