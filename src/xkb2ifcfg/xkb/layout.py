# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import contextlib
import dataclasses
import logging

from ..commontypes import LayoutCompileError
from ._ffi import ffi, libxkbcommon
from .compose import ComposeState
from .keymap import Keymap, KeyboardState

logger = logging.getLogger(__name__)

DEFAULT_RULES = "evdev"
DEFAULT_MODEL = "pc105"


@dataclasses.dataclass(frozen=True, kw_only=True)
class CompiledLayout:
    layout: str
    variant: str
    locale: str
    keymap: Keymap
    state: KeyboardState
    compose: ComposeState

    @property
    def description(self):
        return f"{self.layout}-{self.variant}-{self.locale}"


@contextlib.contextmanager
def compile_layout(
    layout: str,
    variant: str,
    locale: str,
    *,
    rules: str = DEFAULT_RULES,
    model: str = DEFAULT_MODEL,
    options: str = "",
) -> collections.abc.Iterator[CompiledLayout]:
    """Compiles keymap and compose table, owning every xkbcommon handle until the block exits."""
    lib = libxkbcommon()
    with contextlib.ExitStack() as handles:
        context = lib.xkb_context_new(lib.XKB_CONTEXT_NO_FLAGS)
        if context == ffi.NULL:
            raise LayoutCompileError("context", layout, variant, locale)
        handles.callback(lib.xkb_context_unref, context)

        # the char buffers must outlive the call, the struct only points at them
        rmlvo = [ffi.new("char[]", value.encode("utf-8")) for value in (rules, model, layout, variant, options)]
        names = ffi.new("struct xkb_rule_names *", rmlvo)
        keymap = lib.xkb_keymap_new_from_names(context, names, lib.XKB_KEYMAP_COMPILE_NO_FLAGS)
        if keymap == ffi.NULL:
            raise LayoutCompileError("keymap", layout, variant, locale)
        handles.callback(lib.xkb_keymap_unref, keymap)

        state = lib.xkb_state_new(keymap)
        if state == ffi.NULL:
            raise LayoutCompileError("keyboard state", layout, variant, locale)
        handles.callback(lib.xkb_state_unref, state)

        compose_table = lib.xkb_compose_table_new_from_locale(context, locale.encode("utf-8"), lib.XKB_COMPOSE_COMPILE_NO_FLAGS)
        if compose_table == ffi.NULL:
            raise LayoutCompileError("compose table", layout, variant, locale)
        handles.callback(lib.xkb_compose_table_unref, compose_table)

        compose_state = lib.xkb_compose_state_new(compose_table, lib.XKB_COMPOSE_STATE_NO_FLAGS)
        if compose_state == ffi.NULL:
            raise LayoutCompileError("compose state", layout, variant, locale)
        handles.callback(lib.xkb_compose_state_unref, compose_state)

        logger.debug("Compiled %s-%s-%s with rules %s model %s", layout, variant, locale, rules, model)
        yield CompiledLayout(
            layout=layout,
            variant=variant,
            locale=locale,
            keymap=Keymap(keymap),
            state=KeyboardState(state),
            compose=ComposeState(compose_state),
        )
