# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

from . import keycodes
from .chargen import ChargenAssembler, render_chargen
from .modifiers import ModifierController
from .resolver import ComposeProbe, KeyResolver
from .xkb import keysym_to_utf8

if typing.TYPE_CHECKING:
    from .keycodes import KeyMapping
    from .settings import Settings
    from .xkb import CompiledLayout, Keymap

PROGRAM = "xkb2ifcfg"


def generate(compiled: CompiledLayout, settings: Settings, out: typing.TextIO):
    resolver = KeyResolver(compiled.state, ComposeProbe(compiled.compose), enter_ascii=settings.enter_ascii)
    assembler = ChargenAssembler(compiled.keymap, ModifierController(compiled.state), resolver)
    document = assembler.assemble()
    text = render_chargen(document, buffer_increment=settings.buffer_increment, character_comments=settings.character_comments)
    out.write(f"<!-- {compiled.description} chargen configuration generated by {PROGRAM} -->\n{text}\n")


def dump(compiled: CompiledLayout, out: typing.TextIO):
    out.write(f"Dump of XKB keymap for {compiled.description} by {PROGRAM}\n")
    out.write(compiled.keymap.as_string())
    out.write("\n")


def key_info(mapping: KeyMapping, keymap: Keymap, probe: ComposeProbe) -> str:
    num_levels = keymap.num_levels_for_key(mapping.xkb, 0)
    parts = [f"keycode {mapping.xkb:3d}: {mapping.xkb_name:<8} {mapping.key.name:<16}\t{num_levels} levels {{ "]
    for level in range(num_levels):
        parts.append(f" {level}:")
        for keysym in keymap.syms_by_level(mapping.xkb, 0, level):
            parts.append(f" {keysym:x} {'COMPOSING!' if probe.is_composing(keysym) else keysym_to_utf8(keysym)}")
    parts.append(" }")
    return "".join(parts)


def info(compiled: CompiledLayout, out: typing.TextIO):
    out.write(f"Simple per-key info for {compiled.description} by {PROGRAM}\n")
    probe = ComposeProbe(compiled.compose)
    for keycode in compiled.keymap.keycodes():
        mapping = keycodes.printable(keycode)
        if mapping is not None:
            out.write(key_info(mapping, compiled.keymap, probe))
            out.write("\n")
