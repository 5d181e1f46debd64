# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import argparse
import logging
import pathlib
import sys
import typing

from . import report
from .commontypes import LayoutCompileError
from .modifiers import numlock
from .settings import Settings
from .xkb import compile_layout

logger = logging.getLogger(__name__)

USAGE = """\
usage: xkb2ifcfg <command> <layout> <variant> <locale>

  Commands

    generate   generate input_filter config
    dump       dump raw XKB keymap
    info       simple per-key information

  Example

    xkb2ifcfg generate us ''         en_US.UTF-8
    xkb2ifcfg info     de nodeadkeys de_DE.UTF-8
"""

COMMANDS = ("generate", "dump", "info")


class UsageError(Exception):
    pass


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


parser = ArgumentParser(prog="xkb2ifcfg", add_help=False)
parser.add_argument("command", choices=COMMANDS)
parser.add_argument("layout")
parser.add_argument("variant")
parser.add_argument("locale")
parser.add_argument("--settings", type=pathlib.Path)


def run(args: argparse.Namespace, settings: Settings, out: typing.TextIO):
    with compile_layout(
        args.layout, args.variant, args.locale, rules=settings.rules, model=settings.model, options=settings.options
    ) as compiled, numlock(compiled.state):
        match args.command:
            case "generate":
                report.generate(compiled, settings, out)
            case "dump":
                report.dump(compiled, out)
            case "info":
                report.info(compiled, out)


def main(argv: typing.Optional[list[str]] = None) -> int:
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        sys.stderr.write(USAGE)
        logger.debug("Invalid invocation: %s", exc)
        return 1

    settings = Settings.default() if args.settings is None else Settings.load(args.settings)
    logging.basicConfig(stream=sys.stderr, level=settings.log_level.upper(), format="%(levelname)s: %(message)s")

    try:
        run(args, settings, sys.stdout)
    except LayoutCompileError as exc:
        logger.error("%s", exc)
        return 1
    return 0
