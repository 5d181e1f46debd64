# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import contextlib
import dataclasses
import html
import logging
import typing

from .commontypes import BufferExceeded

logger = logging.getLogger(__name__)

BUFFER_INCREMENT = 1024 * 1024

AttributeValue = typing.Union[str, int, bool]


class FixedBuffer:
    "Append-only UTF-8 buffer which refuses to grow past its capacity."

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, not {capacity}")
        self.capacity = capacity
        self._data = bytearray()

    def __len__(self):
        return len(self._data)

    def write(self, text: str):
        encoded = text.encode("utf-8")
        if len(self._data) + len(encoded) > self.capacity:
            raise BufferExceeded(f"{len(self._data) + len(encoded)} bytes exceed capacity of {self.capacity}")
        self._data += encoded

    def getvalue(self) -> str:
        return self._data.decode("utf-8")


@dataclasses.dataclass
class _OpenNode:
    name: str
    has_content: bool = False


def _format_value(value: AttributeValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return html.escape(value, quote=True)


class XmlGenerator:
    """Writes tab-indented XML into a FixedBuffer.

    Nodes are opened with the node() context manager. Attributes must be
    written before any child node or comment of the same node. Whatever was
    written stays written; on BufferExceeded the whole output must be thrown
    away and generated again.
    """

    def __init__(self, buffer: FixedBuffer):
        self.buffer = buffer
        self._stack: list[_OpenNode] = []

    def _begin_content(self):
        if self._stack and not self._stack[-1].has_content:
            self.buffer.write(">")
            self._stack[-1].has_content = True

    def _newline(self, blank_line: bool = False):
        self.buffer.write("\n\n" if blank_line else "\n")
        self.buffer.write("\t" * len(self._stack))

    @contextlib.contextmanager
    def node(self, name: str) -> collections.abc.Iterator[XmlGenerator]:
        if self._stack:
            self._begin_content()
            self._newline()
        self.buffer.write(f"<{name}")
        node = _OpenNode(name)
        self._stack.append(node)
        yield self
        self._stack.pop()
        if node.has_content:
            self._newline()
            self.buffer.write(f"</{name}>")
        else:
            self.buffer.write("/>")

    def attribute(self, name: str, value: AttributeValue):
        if not self._stack:
            raise ValueError("attribute outside of any node")
        if self._stack[-1].has_content:
            raise ValueError(f"attribute {name} after content of <{self._stack[-1].name}>")
        self.buffer.write(f' {name}="{_format_value(value)}"')

    def comment(self, text: str, *, blank_line: bool = False):
        "Comment on a line of its own."
        self._begin_content()
        self._newline(blank_line)
        self.buffer.write(f"<!-- {text} -->")

    def trailing_comment(self, text: str):
        "Comment on the same line, after the previous node."
        self._begin_content()
        self.buffer.write(f"\t<!-- {text} -->")


class ExpandingXmlBuffer:
    "XML generator output that expands to your needs."

    def __init__(self, increment: int = BUFFER_INCREMENT):
        if increment <= 0:
            raise ValueError(f"increment must be positive, not {increment}")
        self.increment = increment
        self.buffer = FixedBuffer(increment)

    def _increase_buffer(self):
        self.buffer = FixedBuffer(self.buffer.capacity + self.increment)

    def generate(self, name: str, func: collections.abc.Callable[[XmlGenerator], None]) -> str:
        """Generates the document rooted at `name`, growing the buffer until it fits.

        func is called once per attempt and must write the complete content
        every time.
        """
        while True:
            xml = XmlGenerator(self.buffer)
            try:
                with xml.node(name):
                    func(xml)
            except BufferExceeded:
                logger.debug("Buffer of %d bytes exceeded, retrying with %d", self.buffer.capacity, self.buffer.capacity + self.increment)
                self._increase_buffer()
                continue
            return self.buffer.getvalue()
