#!/usr/bin/env python3
"""
Convert Doxygen comments to rustdoc, one comment or a whole bindgen file.

Usage:
    python -m mkdocs_doxyrs.convert src/bindings.rs
    python -m mkdocs_doxyrs.convert src/ --dry-run
    python -m mkdocs_doxyrs.convert src/ --ext .rs --backup
"""

import argparse
import logging
import os
import re
import shutil
import sys
from dataclasses import dataclass, field

from .document import build_document
from .parser import ParseError, parse_comment
from .renderer import render_rustdoc

_DOC_ATTR_RE = re.compile(r'^(?P<indent>\s*)#\[doc\s*=\s*"(?P<body>(?:[^"\\]|\\.)*)"\]\s*$')
_ESCAPE_RE = re.compile(r"\\(.)")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", '"': '"', "'": "'", "\\": "\\"}
_ITEM_RE = re.compile(
    r"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:unsafe\s+)?(?:extern\s+\"C\"\s+)?"
    r"(?:fn|struct|enum|union|const|static(?:\s+mut)?|type|mod)\s+(?P<name>\w+)"
)
_FIELD_RE = re.compile(r"^\s*pub\s+(?P<name>\w+)\s*:")
_ATTR_RE = re.compile(r"^\s*#\[")

log = logging.getLogger("mkdocs.plugins.doxyrs")


def transform(text, heading_level=1):
    """Render one raw Doxygen comment as rustdoc Markdown.

    Raises :class:`~mkdocs_doxyrs.parser.ParseError` for a malformed
    ``@param`` direction; nothing else fails.
    """
    return render_rustdoc(build_document(parse_comment(text)), heading_level=heading_level)


@dataclass
class DocBlock:
    line: int
    indent: str
    comment: str
    item: str = ""
    source: list = field(default_factory=list)


def _unescape(body):
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), body)


def _escape(text):
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _documented_item(lines, start):
    for line in lines[start:]:
        if not line.strip() or _ATTR_RE.match(line):
            continue
        m = _ITEM_RE.match(line) or _FIELD_RE.match(line)
        return m.group("name") if m else ""
    return ""


def split_bindgen(source):
    """Split bindgen output into :class:`DocBlock` runs and untouched lines."""
    lines = source.split("\n")
    segments = []
    i = 0
    while i < len(lines):
        m = _DOC_ATTR_RE.match(lines[i])
        if not m:
            segments.append(lines[i])
            i += 1
            continue
        start = i
        bodies = []
        while i < len(lines):
            m = _DOC_ATTR_RE.match(lines[i])
            if not m:
                break
            bodies.append(_unescape(m.group("body")))
            i += 1
        indent = _DOC_ATTR_RE.match(lines[start]).group("indent")
        segments.append(
            DocBlock(
                line=start + 1,
                indent=indent,
                comment="\n".join(bodies),
                item=_documented_item(lines, i),
                source=lines[start:i],
            )
        )
    return segments


def transform_bindgen(source, trim_lines=True, errors=None):
    """Rewrite every ``#[doc = "..."]`` run of a bindgen file as rustdoc.

    Lines outside doc attribute runs are passed through untouched. A run
    that fails to parse is kept as it was; its :class:`ParseError`, carrying
    the run's line number, is appended to ``errors`` when a list is given
    and logged otherwise.
    """
    out = []
    for segment in split_bindgen(source):
        if isinstance(segment, str):
            out.append(segment)
            continue
        try:
            rendered = transform(segment.comment)
        except ParseError as exc:
            error = ParseError(exc.found, exc.expected, line=segment.line)
            if errors is None:
                log.error("doxyrs: %s", error)
            else:
                errors.append(error)
            out.extend(segment.source)
            continue
        rendered = rendered.rstrip("\n")
        if not rendered:
            continue
        for line in rendered.split("\n"):
            if trim_lines:
                line = line.strip()
            out.append(f'{segment.indent}#[doc = "{_escape(line)}"]')
    return "\n".join(out)


def convert_file(path, dry_run=False, backup=False, trim_lines=True, errors=None):
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        original = f.read()

    result = transform_bindgen(original, trim_lines=trim_lines, errors=errors)

    if result == original:
        return False

    if dry_run:
        return True

    if backup:
        shutil.copy2(path, path + ".bak")

    with open(path, "w", encoding="utf-8") as f:
        f.write(result)
    return True


def main(argv=None):
    p = argparse.ArgumentParser(description="Convert Doxygen doc attributes in bindgen output to rustdoc")
    p.add_argument("path", help="File or directory to convert")
    p.add_argument(
        "--ext",
        nargs="+",
        default=[".rs"],
        help="File extensions to process (default: .rs)",
    )
    p.add_argument(
        "--dry-run", action="store_true", help="Show what would change without modifying files"
    )
    p.add_argument("--backup", action="store_true", help="Create .bak files before modifying")
    p.add_argument(
        "--keep-indent",
        action="store_true",
        help="Keep leading whitespace of rendered lines (nested lists, code)",
    )
    args = p.parse_args(argv)

    target = args.path
    exts = set(e if e.startswith(".") else f".{e}" for e in args.ext)

    files = []
    if os.path.isfile(target):
        files.append(target)
    elif os.path.isdir(target):
        for dirpath, _, fnames in os.walk(target):
            for fn in sorted(fnames):
                _, ext = os.path.splitext(fn)
                if ext.lower() in exts:
                    files.append(os.path.join(dirpath, fn))
    else:
        print(f"error: {target} not found", file=sys.stderr)
        return 1

    changed = 0
    failed = 0
    for fpath in files:
        errors = []
        was_changed = convert_file(
            fpath,
            dry_run=args.dry_run,
            backup=args.backup,
            trim_lines=not args.keep_indent,
            errors=errors,
        )
        if errors:
            failed += 1
        for exc in errors:
            print(f"error: {fpath}: {exc}", file=sys.stderr)
        if was_changed:
            changed += 1
            tag = "[dry-run] " if args.dry_run else ""
            print(f"{tag}converted: {fpath}")

    total = len(files)
    print(f"\n{changed}/{total} files {'would be ' if args.dry_run else ''}modified")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
