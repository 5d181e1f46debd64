# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

if typing.TYPE_CHECKING:
    from cffi import FFI


def _nameprefix(*names: str):
    "Given multiple identifiers (such as those used for enums), return the longest common prefix, or the empty string if no such prefix is found."
    if not names:
        return ""
    names = sorted(set(names))
    if len(names) == 1:
        return names[0]
    first = names[0]
    last = names[-1]
    for i, ch in enumerate(first):
        if ch != last[i]:  # first differing character
            return first[:i]  # so return everything up to that point
    # if we fall off the end of the for loop, then the first string is a substring of the last string, which seems weird but is possible.
    return first


E = typing.TypeVar("E", bound=type[enum.IntEnum])


def check_c_enum(ffi: FFI, enum_t: str, strip_prefix: str | None = None, allow_omitting_c_members: bool = False, **extras: int):
    """Checks an IntEnum for consistency with a C enum declared in an FFI cdef.

    For example, given this C enum type:
        enum xkb_key_direction {
            XKB_KEY_UP,
            XKB_KEY_DOWN
        };

    You can define this IntEnum:
        @check_c_enum(ffi, 'enum xkb_key_direction')
        class KeyDirection(enum.IntEnum):
            UP = 0
            DOWN = 1

    Raises KeyError if either enum has a name not found in the other, or ValueError if a name has different values in the two enums.

    Many C enums have a common prefix, such as XKB_COMPOSE_NOTHING and XKB_COMPOSE_COMPOSING. By default, check_c_enum detects and
    strips this common prefix, so it will look for members named NOTHING and COMPOSING on the Python-side enum. To turn off this
    detection, set strip_prefix to a string value, or (to not strip anything) the empty string.

    Set allow_omitting_c_members=True to allow the Python-side enum to omit one or more members from the C-side enum.

    Any additional values defined in the Python-side enum may be specified as extra keyword arguments; this can be handy for defining aliases.
    """
    ctype = ffi.typeof(enum_t)
    if strip_prefix is None:
        strip_prefix = _nameprefix(*ctype.relements.keys())
    values: dict[str, int] = {k.removeprefix(strip_prefix): v for v, k in sorted(ctype.elements.items())}
    values.update(extras)

    def checker(cls: E) -> E:
        for name, value in cls.__members__.items():
            if name not in values:
                raise KeyError(name)
            if values.pop(name) != value:
                raise ValueError(name)
        if not allow_omitting_c_members:
            for name in values:
                if name not in cls.__members__:
                    raise KeyError(name)
        return cls

    return checker
