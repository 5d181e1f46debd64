# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

import msgspec

from . import keycodes
from .modifiers import COMBINATIONS, Modifier
from .resolver import CharacterEntry, ComposingKey, EffectEntry
from .xmlgen import BUFFER_INCREMENT, ExpandingXmlBuffer

if typing.TYPE_CHECKING:
    from .keycodes import KeyMapping
    from .modifiers import ModifierController
    from .resolver import KeyResolver
    from .xkb import Keymap
    from .xmlgen import XmlGenerator

logger = logging.getLogger(__name__)


class ChargenMap(msgspec.Struct, frozen=True, kw_only=True):
    modifiers: Modifier
    characters: list[CharacterEntry]
    effects: list[EffectEntry] = msgspec.field(default_factory=list)
    composing: list[ComposingKey] = msgspec.field(default_factory=list)


class ChargenDocument(msgspec.Struct, frozen=True, kw_only=True):
    maps: list[ChargenMap]

    @property
    def composing(self) -> list[tuple[Modifier, ComposingKey]]:
        return [(chargen_map.modifiers, key) for chargen_map in self.maps for key in chargen_map.composing]


class ChargenAssembler:
    def __init__(self, keymap: Keymap, controller: ModifierController, resolver: KeyResolver):
        self.keymap = keymap
        self.controller = controller
        self.resolver = resolver

    def keys(self, lookup: collections.abc.Callable[[int], typing.Optional[KeyMapping]]) -> collections.abc.Iterator[KeyMapping]:
        # keymap keycode order; keycodes without a table entry have no chargen role
        for keycode in self.keymap.keycodes():
            mapping = lookup(keycode)
            if mapping is not None:
                yield mapping

    def assemble_map(self, combination: Modifier) -> ChargenMap:
        characters = []
        composing = []
        for mapping in self.keys(keycodes.printable):
            with self.controller.activate(combination):
                resolved = self.resolver.resolve_printable(mapping)
            match resolved:
                case CharacterEntry():
                    characters.append(resolved)
                case ComposingKey():
                    composing.append(resolved)
        effects = []
        if combination is Modifier.NONE:
            effects = [self.resolver.resolve_effect(mapping) for mapping in self.keys(keycodes.non_printable)]
        logger.debug("%s: %d characters, %d composing keys skipped", combination.label, len(characters), len(composing))
        return ChargenMap(modifiers=combination, characters=characters, effects=effects, composing=composing)

    def assemble(self) -> ChargenDocument:
        return ChargenDocument(maps=[self.assemble_map(combination) for combination in COMBINATIONS])


def _write_characters(xml: XmlGenerator, characters: list[CharacterEntry], character_comments: bool):
    for entry in characters:
        with xml.node("key"):
            xml.attribute("name", entry.key.name)
            for name, value in entry.byte_attributes:
                xml.attribute(name, value)
        if character_comments and entry.character.isprintable():
            xml.trailing_comment(entry.character)


def write_chargen(xml: XmlGenerator, document: ChargenDocument, character_comments: bool = True):
    for chargen_map in document.maps:
        if chargen_map.modifiers is Modifier.NONE:
            # basic character map
            with xml.node("map"):
                xml.comment("printable")
                _write_characters(xml, chargen_map.characters, character_comments)
                xml.comment("non-printable", blank_line=True)
                for entry in chargen_map.effects:
                    with xml.node("key"):
                        xml.attribute("name", entry.key.name)
                        xml.attribute("ascii", entry.ascii)
        else:
            # characters depending on modifier state
            xml.comment(chargen_map.modifiers.label, blank_line=True)
            with xml.node("map"):
                for name, value in chargen_map.modifiers.mod_attributes.items():
                    xml.attribute(name, value)
                _write_characters(xml, chargen_map.characters, character_comments)


def render_chargen(document: ChargenDocument, *, buffer_increment: int = BUFFER_INCREMENT, character_comments: bool = True) -> str:
    return ExpandingXmlBuffer(buffer_increment).generate("chargen", lambda xml: write_chargen(xml, document, character_comments))
