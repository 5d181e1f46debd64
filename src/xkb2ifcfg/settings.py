# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import json
import pathlib
import typing

import cattrs

from .xkb.layout import DEFAULT_MODEL, DEFAULT_RULES
from .xmlgen import BUFFER_INCREMENT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

settings_converter = cattrs.Converter(forbid_extra_keys=True)


@dataclasses.dataclass(kw_only=True)
class Settings:
    rules: str = DEFAULT_RULES
    model: str = DEFAULT_MODEL
    options: str = ""
    buffer_increment: int = BUFFER_INCREMENT
    # None keeps whatever byte the compiled layout yields for ENTER and KP_ENTER.
    enter_ascii: typing.Optional[int] = None
    character_comments: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.buffer_increment <= 0:
            raise ValueError(f"buffer_increment must be positive, not {self.buffer_increment}")
        if self.enter_ascii is not None and not 0 <= self.enter_ascii <= 0x7F:
            raise ValueError(f"enter_ascii must be an ASCII value, not {self.enter_ascii}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unexpected log level {self.log_level}")

    def save(self, dest: pathlib.Path):
        with dest.open("w") as f:
            json.dump(settings_converter.unstructure(self), f, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as f:
            raw = json.load(f)
        return settings_converter.structure(raw, cls)

    @classmethod
    def default(cls):
        return cls()
