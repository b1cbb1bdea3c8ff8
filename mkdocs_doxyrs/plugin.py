"""
MkDocs plugin that renders Doxygen comments inside documentation pages.

Two things are expanded in page Markdown:

  - fenced blocks tagged with the configured fence name (``doxygen`` by
    default) are replaced with the rendered rustdoc Markdown
  - ``::: doxygen:bindgen`` directives pull the doc attributes of a
    bindgen-generated Rust file and render them in place
"""

from __future__ import annotations

import logging
import os
import re

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin

from .convert import DocBlock, split_bindgen, transform
from .parser import ParseError

log = logging.getLogger("mkdocs.plugins.doxyrs")

_DIRECTIVE_RE = re.compile(
    r"^(?P<indent>[ \t]*):::[ \t]+doxygen:(?P<directive>bindgen)\s*\n"
    r"(?P<body>(?:(?P=indent)[ \t]+:\w+:.*\n)*)",
    re.MULTILINE,
)
_OPTION_RE = re.compile(r"^\s+:(\w+):\s*(.+)$", re.MULTILINE)


def _fence_re(fence):
    return re.compile(
        r"^(?P<indent>[ \t]*)```[ \t]*" + re.escape(fence) + r"[ \t]*\n"
        r"(?P<body>.*?)"
        r"^(?P=indent)```[ \t]*$",
        re.MULTILINE | re.DOTALL,
    )


def _reindent(text, indent):
    if not indent:
        return text
    return "\n".join(indent + line if line else line for line in text.split("\n"))


def _dedent(text, indent):
    return "\n".join(
        line[len(indent) :] if line.startswith(indent) else line.lstrip()
        for line in text.split("\n")
    )


class DoxyrsConfig(MkDocsConfig):
    fence = config_options.Type(str, default="doxygen")
    heading_level = config_options.Type(int, default=1)
    strict = config_options.Type(bool, default=False)
    bindgen_root = config_options.Type(str, default="")


class DoxyrsPlugin(BasePlugin[DoxyrsConfig]):

    def __init__(self):
        super().__init__()
        self._cache = {}
        self._config_dir = ""
        self._root = ""

    def on_config(self, config, **kwargs):
        config_file = config.get("config_file_path") or ""
        self._config_dir = os.path.dirname(os.path.abspath(config_file)) if config_file else ""
        root = self.config["bindgen_root"]
        if root and not os.path.isabs(root):
            root = os.path.join(self._config_dir, root)
        self._root = root or self._config_dir
        self._cache = {}
        log.debug("doxyrs: bindgen root %s", self._root)
        return config

    # ── rendering ──

    def _transform(self, text, where, heading_level=None):
        level = heading_level or self.config["heading_level"]
        try:
            return transform(text, heading_level=level)
        except ParseError as exc:
            if self.config["strict"]:
                raise PluginError(f"doxyrs: {where}: {exc}") from exc
            log.error("doxyrs: %s: %s", where, exc)
            return None

    def _replace_fence(self, match, where):
        indent = match.group("indent")
        body = _dedent(match.group("body"), indent)
        rendered = self._transform(body, where)
        if rendered is None:
            return match.group(0)
        return _reindent(rendered.rstrip("\n"), indent)

    # ── bindgen directives ──

    def _resolve_file(self, path):
        if os.path.isabs(path):
            return path
        return os.path.normpath(os.path.join(self._root, path))

    def _blocks(self, abspath):
        if abspath not in self._cache:
            with open(abspath, "r", encoding="utf-8", errors="replace") as f:
                source = f.read()
            self._cache[abspath] = [s for s in split_bindgen(source) if isinstance(s, DocBlock)]
        return self._cache[abspath]

    def _render_block(self, block, abspath, heading_level):
        where = f"{abspath}:{block.line}"
        rendered = self._transform(block.comment, where, heading_level)
        if rendered is None:
            return f"<!-- doxyrs: cannot render {where} -->\n"
        return rendered

    def _handle_directive(self, match, page):
        opts = {}
        for m in _OPTION_RE.finditer(match.group("body")):
            opts[m.group(1)] = m.group(2).strip()
        fpath = opts.get("file", "")
        if not fpath:
            return "<!-- doxyrs: missing :file: for doxygen:bindgen -->\n"

        abspath = self._resolve_file(fpath)
        try:
            blocks = self._blocks(abspath)
        except OSError as exc:
            log.error("doxyrs: cannot read %s: %s", abspath, exc)
            return f"<!-- doxyrs: file not found: {fpath} -->\n"

        level = self.config["heading_level"]
        if "heading_level" in opts:
            try:
                level = int(opts["heading_level"])
            except ValueError:
                log.warning(
                    "doxyrs: bad :heading_level: %r on page %s",
                    opts["heading_level"],
                    getattr(page.file, "src_uri", ""),
                )

        name = opts.get("name", "")
        if name:
            for block in blocks:
                if block.item == name:
                    return self._render_block(block, abspath, level)
            return f"<!-- doxyrs: symbol '{name}' not found in {fpath} -->\n"

        parts = []
        for block in blocks:
            title = f"{'#' * level} `{block.item}`\n\n" if block.item else ""
            parts.append(title + self._render_block(block, abspath, level + 1))
        return "\n---\n\n".join(parts)

    # ── MkDocs events ──

    def on_page_markdown(self, markdown, *, page, config, files, **kwargs):
        src_uri = getattr(page.file, "src_uri", None) or page.file.src_path
        fence_re = _fence_re(self.config["fence"])
        md = fence_re.sub(lambda m: self._replace_fence(m, src_uri), markdown)
        return _DIRECTIVE_RE.sub(lambda m: self._handle_directive(m, page), md)
