"""
Semantic document built from parsed structural values.

:func:`build_document` folds the output of
:func:`mkdocs_doxyrs.parser.parse_comment` into a :class:`ParsedDocument`.
Every field stays ``None`` unless its tag occurred, so the renderer can
tell "never documented" apart from "documented but empty".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from .parser import (
    UNSUPPORTED_TAGS,
    NestedText,
    Notation,
    Separator,
    Text,
)

log = logging.getLogger("mkdocs.plugins.doxyrs")

# Leftovers of comment delimiters, never content
_DECORATIONS = frozenset({"*", "**", "*/"})


class Direction(Enum):
    IN = "In"
    OUT = "Out"
    IN_OUT = "In, Out"

    @classmethod
    def from_meta(cls, meta):
        if "in" in meta and "out" in meta:
            return cls.IN_OUT
        if "in" in meta:
            return cls.IN
        if "out" in meta:
            return cls.OUT
        return None

    def __str__(self):
        return self.value


@dataclass
class Param:
    arg_name: str
    direction: Direction | None = None
    description: NestedText | None = None


@dataclass
class Deprecated:
    is_deprecated: bool = True
    message: NestedText | None = None


@dataclass
class ReturnValue:
    value: str
    description: NestedText | None = None


@dataclass
class Throws:
    exception: str
    description: NestedText | None = None


@dataclass
class ParsedDocument:
    title: NestedText | None = None
    brief: NestedText | None = None
    description: list[NestedText] | None = None
    parameters: list[Param] | None = None
    deprecated: Deprecated | None = None
    notes: list[NestedText] | None = None
    warnings: list[NestedText] | None = None
    todos: list[NestedText] | None = None
    returns: list[NestedText] | None = None
    return_values: list[ReturnValue] | None = None
    throws: list[Throws] | None = None
    since: NestedText | None = None


class BufferState(Enum):
    IDLE = auto()
    BUFFERING_DESCRIPTION = auto()
    BUFFERING_TODO = auto()


def _split_argument(content):
    """``"name rest of text"`` -> ``("name", NestedText("rest of text"))``."""
    words = content.top.split(maxsplit=1)
    if not words:
        return None, None
    rest = words[1] if len(words) > 1 else ""
    if not rest and not content.sub:
        return words[0], None
    return words[0], NestedText(rest, list(content.sub))


def _append_paragraph(paragraphs, content, join):
    """Append ``content``, continuing the last paragraph when ``join`` allows it."""
    if join and paragraphs and not paragraphs[-1].sub:
        prev = paragraphs[-1]
        top = f"{prev.top}\n{content.top}" if prev.top else content.top
        paragraphs[-1] = NestedText(top, list(content.sub))
    else:
        paragraphs.append(content)


class _DocumentBuilder:
    def __init__(self):
        self.doc = ParsedDocument()
        self.description = []
        self.parameters = []
        self.notes = []
        self.warnings = []
        self.todos = []
        self.returns = []
        self.return_values = []
        self.throws = []

        self.state = BufferState.IDLE
        self.buffer = []
        # A Text right after another Text continues the same paragraph
        self.joinable = False

    # ── paragraph buffer ──

    def _start_buffer(self, state, content):
        self._flush()
        self.state = state
        self.buffer = [content]

    def _flush(self):
        paragraphs = [p for p in self.buffer if not p.is_empty()]
        if self.state is BufferState.BUFFERING_DESCRIPTION:
            self.description.extend(paragraphs)
        elif self.state is BufferState.BUFFERING_TODO:
            self.todos.extend(paragraphs)
        self.state = BufferState.IDLE
        self.buffer = []

    # ── value handlers ──

    def on_text(self, content):
        if content.is_empty():
            return
        if content.top.strip() in _DECORATIONS and not content.sub:
            return
        if self.state is not BufferState.IDLE:
            _append_paragraph(self.buffer, content, join=True)
        else:
            _append_paragraph(self.description, content, join=self.joinable)
            self.joinable = True

    def on_separator(self):
        self._flush()
        self.joinable = False

    def on_notation(self, notation):
        self.joinable = False
        tag = notation.tag
        content = notation.content

        if tag in ("brief", "short"):
            brief = self.doc.brief
            if brief is None:
                self.doc.brief = content
            else:
                self.doc.brief = NestedText(f"{brief.top}\n{content.top}", brief.sub + content.sub)
        elif tag == "name":
            self.doc.title = content
        elif tag == "deprecated":
            self.doc.deprecated = Deprecated(
                is_deprecated=True,
                message=None if content.is_empty() else content,
            )
        elif tag == "details":
            self._start_buffer(BufferState.BUFFERING_DESCRIPTION, content)
        elif tag == "todo":
            self._start_buffer(BufferState.BUFFERING_TODO, content)
        elif tag == "param":
            name, description = _split_argument(content)
            if name is None:
                log.debug("doxyrs: dropping @param without an argument name")
                return
            self.parameters.append(
                Param(name, Direction.from_meta(notation.meta), description)
            )
        elif tag in ("return", "returns", "result"):
            self.returns.append(content)
        elif tag == "retval":
            name, description = _split_argument(content)
            if name is None:
                log.debug("doxyrs: dropping @retval without a value")
                return
            self.return_values.append(ReturnValue(name, description))
        elif tag in ("throw", "throws", "exception"):
            name, description = _split_argument(content)
            if name is None:
                log.debug("doxyrs: dropping @%s without an exception name", tag)
                return
            self.throws.append(Throws(name, description))
        elif tag in ("note", "remark", "remarks"):
            self.notes.append(content)
        elif tag in ("warning", "attention"):
            self.warnings.append(content)
        elif tag == "since":
            self.doc.since = content
        elif tag == "code":
            target = self.buffer if self.state is not BufferState.IDLE else self.description
            target.append(content)
        elif tag in UNSUPPORTED_TAGS:
            log.debug("doxyrs: dropping unsupported @%s", tag)

    def finish(self):
        self._flush()
        doc = self.doc
        doc.description = self.description or None
        doc.parameters = self.parameters or None
        doc.notes = self.notes or None
        doc.warnings = self.warnings or None
        doc.todos = self.todos or None
        doc.returns = self.returns or None
        doc.return_values = self.return_values or None
        doc.throws = self.throws or None
        return doc


def build_document(values):
    builder = _DocumentBuilder()
    for value in values:
        if isinstance(value, Notation):
            builder.on_notation(value)
        elif isinstance(value, Text):
            builder.on_text(value.content)
        elif isinstance(value, Separator):
            builder.on_separator()
    return builder.finish()
