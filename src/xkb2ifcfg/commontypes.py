# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later


class Xkb2IfcfgError(Exception):
    pass


class LayoutCompileError(Xkb2IfcfgError):
    def __init__(self, what: str, layout: str, variant: str, locale: str):
        self.what = what
        self.layout = layout
        self.variant = variant
        self.locale = locale
        super().__init__(f"unable to compile {what} for layout {layout!r} variant {variant!r} locale {locale!r}")


class BufferExceeded(Xkb2IfcfgError):
    pass
