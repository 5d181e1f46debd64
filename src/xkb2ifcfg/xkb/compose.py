# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

from ..util import check_c_enum
from ._ffi import ffi, libxkbcommon

xkb_compose_state_p = typing.NewType("xkb_compose_state_p", typing.Any)


@check_c_enum(ffi, "enum xkb_compose_status")
class ComposeStatus(enum.IntEnum):
    NOTHING = 0
    COMPOSING = 1
    COMPOSED = 2
    CANCELLED = 3


@check_c_enum(ffi, "enum xkb_compose_feed_result")
class FeedResult(enum.IntEnum):
    IGNORED = 0
    ACCEPTED = 1


class ComposeState:
    def __init__(self, compose_state: xkb_compose_state_p):
        self.compose_state = compose_state

    def reset(self):
        libxkbcommon().xkb_compose_state_reset(self.compose_state)

    def feed(self, keysym: int) -> FeedResult:
        return FeedResult(libxkbcommon().xkb_compose_state_feed(self.compose_state, keysym))

    def status(self) -> ComposeStatus:
        return ComposeStatus(libxkbcommon().xkb_compose_state_get_status(self.compose_state))
