"""
Structural parser for Doxygen comment blocks.

Turns the raw text of one comment (without the enclosing ``/** */`` or
``#[doc]`` syntax) into an ordered list of structural values:

  - Notation   a recognised tag with its qualifiers and content
  - Text       a plain line
  - Separator  a blank line, plus one at the very end of the input
  - GroupStart / GroupEnd for ``@{`` and ``@}``
  - Unknown    a bare marker that introduces nothing

Indented lines are continuations of the previous Notation or Text; lines
starting with ``-``, ``*`` or ``+`` build nested bullet lists through an
indentation stack. ``@code`` blocks are copied verbatim until ``@endcode``,
wherever on a line the ``@code`` appears; an indented or mid-line one is
fenced inside the paragraph or entry it belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .lexer import TokenKind, lex, untokenize
from .notation import (
    contains_notation,
    leading_notation,
    starts_with_notation,
    strip_notation,
)
from .preprocessor import preprocess_line

# Tags that are meaningless for a single comment (they describe whole files
# or declarations the comment is not attached to).
UNSUPPORTED_TAGS = frozenset({"class", "def", "enum", "vhdlflow"})

DOCUMENT_TAGS = frozenset(
    {
        "brief",
        "short",
        "deprecated",
        "details",
        "todo",
        "param",
        "return",
        "returns",
        "result",
        "retval",
        "name",
        "note",
        "remark",
        "remarks",
        "warning",
        "attention",
        "throw",
        "throws",
        "exception",
        "since",
    }
)

KNOWN_TAGS = DOCUMENT_TAGS | UNSUPPORTED_TAGS | {"code", "endcode"}

LIST_BULLETS = ("-", "*", "+")

PARAM_DIRECTIONS = {
    "": [],
    "[]": [],
    "[in]": ["in"],
    "[out]": ["out"],
    "[in,out]": ["in", "out"],
    "[out,in]": ["in", "out"],
}


class ParseError(Exception):
    """A comment block that cannot be converted at all."""

    def __init__(self, found, expected, line=None):
        self.found = found
        self.expected = list(expected)
        self.line = line
        where = f"line {line}: " if line is not None else ""
        super().__init__(
            f"{where}unexpected {found!r}, expected one of: {', '.join(self.expected)}"
        )


@dataclass
class NestedText:
    top: str = ""
    sub: list[NestedText] = field(default_factory=list)

    def is_empty(self):
        return not self.top and not self.sub


@dataclass
class Notation:
    tag: str
    meta: list[str] = field(default_factory=list)
    content: NestedText = field(default_factory=NestedText)


@dataclass
class Text:
    content: NestedText


@dataclass(frozen=True)
class Separator:
    pass


@dataclass(frozen=True)
class GroupStart:
    pass


@dataclass(frozen=True)
class GroupEnd:
    pass


@dataclass(frozen=True)
class Unknown:
    pass


@dataclass(frozen=True)
class Continuation:
    text: str
    indent: int
    is_list_item: bool


def _strip_comment_bullet(line):
    if line.startswith("* "):
        return line[2:]
    if line.strip() == "*":
        return ""
    return line


def _parse_direction(qualifier):
    try:
        return list(PARAM_DIRECTIONS[qualifier])
    except KeyError:
        raise ParseError(qualifier[1:], ["in]", "out]", "in,out]", "out,in]"]) from None


def _code_notation(tokens):
    """``@code`` or ``@code{.py}``; tokens start after the tag word."""
    meta = []
    if (
        len(tokens) >= 3
        and tokens[0].kind is TokenKind.BRACE
        and tokens[0].text == "{"
        and tokens[1].kind is TokenKind.WORD
        and tokens[2].kind is TokenKind.BRACE
        and tokens[2].text == "}"
    ):
        meta.append(tokens[1].text.lstrip("."))
        tokens = tokens[3:]
    fence = "```" + (meta[0] if meta else "")
    rest = untokenize(tokens).strip()
    top = f"{fence}\n{rest}" if rest else fence
    return Notation("code", meta, NestedText(top))


def _classify(line):
    if not line.strip():
        return Separator()

    tokens = lex(line.strip())
    if tokens[0].is_marker and (len(tokens) == 1 or tokens[1].kind is TokenKind.WHITESPACE):
        return Unknown()
    if tokens[0].is_marker and tokens[1].kind is TokenKind.BRACE:
        return GroupStart() if tokens[1].text == "{" else GroupEnd()

    indent = len(line) - len(line.lstrip(" \t"))
    if indent:
        body = line.strip()
        is_item = body[:1] in LIST_BULLETS and body[1:2] in ("", " ", "\t")
        if is_item:
            body = body[1:].lstrip()
        return Continuation(preprocess_line(body), indent, is_item)

    if tokens[0].is_marker and tokens[1].kind is TokenKind.WORD:
        word = tokens[1].text
        name, bracket, qualifier = word.partition("[")
        tag = name.lower()
        if tag == "code":
            # only reached for a one-line ``@code ... @endcode``
            return Text(NestedText(preprocess_line(line)))
        if tag in KNOWN_TAGS:
            meta = _parse_direction(bracket + qualifier) if tag == "param" else []
            content = preprocess_line(strip_notation(line, name))
            return Notation(tag, meta, NestedText(content))

    return Text(NestedText(preprocess_line(line)))


def _split_open_code(line):
    """Split ``text @code{.lang} rest`` at an ``@code`` this line leaves open.

    Returns ``(before, opener)`` or None when the line opens no code block.
    """
    words = line.split()
    for i, word in enumerate(words):
        found = leading_notation(word)
        if found is None or found[1] != "code":
            continue
        if contains_notation(" ".join(words[i + 1 :]), "endcode"):
            return None
        return " ".join(words[:i]), " ".join(words[i:])
    return None


@dataclass
class _Fence:
    """An open ``@code`` block collecting raw lines into ``node.top``."""

    node: NestedText
    indent: int
    standalone: bool = False

    def add(self, raw):
        if raw[: self.indent].strip():
            raw = raw.lstrip()
        else:
            raw = raw[self.indent :]
        self.node.top += "\n" + raw

    def close(self):
        self.node.top += "\n```"


def _attach_target(values):
    if not values:
        return None
    last = values[-1]
    if isinstance(last, Text):
        return last.content
    if isinstance(last, Notation) and last.tag not in ("code", "endcode"):
        return last.content
    return None


def _node_at_depth(root, depth):
    node = root
    for _ in range(depth):
        if not node.sub:
            break
        node = node.sub[-1]
    return node


def _continuation_node(root, indent, nesting):
    top = nesting[-1]
    if indent >= top + 2:
        nesting.append(indent)
    elif indent <= top - 2:
        while len(nesting) > 1 and nesting[-1] > indent + 1:
            nesting.pop()
    return _node_at_depth(root, max(len(nesting) - 2, 0))


def _attach_continuation(values, cont, nesting):
    """Attach ``cont`` below the previous value; return the node it landed in."""
    root = _attach_target(values)
    if root is None:
        nesting[:] = [0]
        text = f"- {cont.text}" if cont.is_list_item else cont.text
        values.append(Text(NestedText(text)))
        return values[-1].content

    node = _continuation_node(root, cont.indent, nesting)
    if cont.is_list_item:
        node.sub.append(NestedText(cont.text))
        return node.sub[-1]
    if not node.top:
        node.top = cont.text
    elif node.top.endswith("\n```"):
        node.top = f"{node.top}\n{cont.text}"
    else:
        node.top = f"{node.top} {cont.text}"
    return node


def _add_line(values, line, nesting):
    value = _classify(line)
    if isinstance(value, Continuation):
        return _attach_continuation(values, value, nesting)
    nesting[:] = [0]
    values.append(value)
    if isinstance(value, (Text, Notation)):
        return value.content
    return None


def _open_fence(values, line, before, opener, nesting):
    code = _code_notation(lex(opener)[2:])
    indent = len(line) - len(line.lstrip(" \t"))
    node = None
    if before:
        node = _add_line(values, line[:indent] + before, nesting)
    elif indent:
        root = _attach_target(values)
        if root is not None:
            node = _continuation_node(root, indent, nesting)

    if node is None:
        nesting[:] = [0]
        values.append(code)
        return _Fence(code.content, indent, standalone=True)
    node.top = f"{node.top}\n{code.content.top}" if node.top else code.content.top
    return _Fence(node, indent)


def parse_comment(text):
    """Parse one comment block into structural values.

    Raises :class:`ParseError` for a malformed ``@param[...]`` qualifier;
    every other oddity degrades to plain text.
    """
    values = []
    nesting = [0]
    fence = None

    for raw in text.replace("\r\n", "\n").split("\n"):
        line = _strip_comment_bullet(raw)
        if fence is not None:
            if starts_with_notation(line, "endcode"):
                fence.close()
                if fence.standalone:
                    values.append(Notation("endcode"))
                fence = None
            else:
                fence.add(raw)
            continue

        split = _split_open_code(line)
        if split is not None:
            fence = _open_fence(values, line, *split, nesting)
            continue

        _add_line(values, line, nesting)

    if fence is not None:
        fence.close()

    values.append(Separator())
    return values
