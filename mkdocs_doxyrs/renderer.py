"""
Rustdoc Markdown renderer for parsed Doxygen documents.

Sections come out in a fixed order and only when the document has the
corresponding field; every section is followed by a blank line.
"""

from __future__ import annotations

_FENCE = "```"


def _heading(text, level):
    return f"{'#' * level} {text}"


def _list_item(node, indent, bullet="-"):
    pad = " " * indent
    top = node.top.replace("\n", "\n" + pad + "  ")
    lines = [f"{pad}{bullet} {top}"]
    for child in node.sub:
        lines.extend(_list_item(child, indent + 2))
    return lines


def render_nested(node, indent=0):
    lines = [node.top] if node.top else []
    for child in node.sub:
        lines.extend(_list_item(child, indent))
    return "\n".join(lines)


def _entry(head, node=None, suffix=""):
    """One ``* ...`` bullet of a section, with any sub-list nested below it."""
    text = head
    if node is not None and node.top:
        text = f"{head} - {node.top}" if head else node.top
    text = text.replace("\n", "\n  ")
    if suffix and text.rsplit("\n", 1)[-1].lstrip().startswith(_FENCE):
        # a suffix on the closing fence line would reopen it
        text += "\n "
    lines = [f"* {text}{suffix}"]
    if node is not None:
        for child in node.sub:
            lines.extend(_list_item(child, 2))
    return "\n".join(lines)


def _section(title, entries, level):
    return _heading(title, level) + "\n\n" + "\n".join(entries)


def _strip_soft_breaks(text):
    """Drop the ``< `` left behind by trailing member comments (``///<``)."""
    out = []
    in_fence = False
    for line in text.split("\n"):
        if line.lstrip().startswith(_FENCE):
            in_fence = not in_fence
        elif not in_fence and line.lstrip().startswith("< "):
            line = line.replace("< ", "", 1)
        out.append(line)
    return "\n".join(out)


def _blockquote(prefix, node):
    text = prefix + render_nested(node)
    return "\n".join(f"> {line}" if line else ">" for line in text.split("\n"))


def render_rustdoc(doc, heading_level=1):
    """Render a :class:`~mkdocs_doxyrs.document.ParsedDocument` as rustdoc Markdown."""
    blocks = []

    if doc.title is not None:
        blocks.append(_heading(doc.title.top, heading_level))

    if doc.deprecated is not None:
        warning = "**Warning!** This is deprecated!"
        if doc.deprecated.message is not None:
            warning += f" - {render_nested(doc.deprecated.message)}"
        blocks.append(warning)

    if doc.brief is not None:
        blocks.append(render_nested(doc.brief))

    if doc.description is not None:
        paragraphs = [_strip_soft_breaks(render_nested(p)) for p in doc.description]
        blocks.append("\n\n".join(paragraphs))

    if doc.warnings is not None:
        blocks.extend(_blockquote("**Warning:** ", w) for w in doc.warnings)

    if doc.returns is not None:
        entries = [_entry("", r) for r in doc.returns]
        blocks.append(_section("Returns", entries, heading_level))

    if doc.parameters is not None:
        entries = []
        for param in doc.parameters:
            suffix = f" [Direction: {param.direction}]" if param.direction is not None else ""
            entries.append(_entry(f"`{param.arg_name}`", param.description, suffix))
        blocks.append(_section("Arguments", entries, heading_level))

    if doc.return_values is not None:
        entries = [_entry(f"`{rv.value}`", rv.description) for rv in doc.return_values]
        blocks.append(_section("Return values", entries, heading_level))

    if doc.throws is not None:
        entries = [_entry(f"[`{t.exception}`]", t.description) for t in doc.throws]
        blocks.append(_section("Throws", entries, heading_level))

    if doc.notes is not None:
        blocks.append(_section("Notes", [_entry("", n) for n in doc.notes], heading_level))

    if doc.todos is not None:
        blocks.append(_section("To Do", [_entry("", t) for t in doc.todos], heading_level))

    if doc.since is not None:
        blocks.append(_blockquote("Available since: ", doc.since))

    return "".join(f"{block}\n\n" for block in blocks)
