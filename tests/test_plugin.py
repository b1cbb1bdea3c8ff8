from types import SimpleNamespace

import pytest
from mkdocs.exceptions import PluginError

from mkdocs_doxyrs.plugin import _DIRECTIVE_RE, DoxyrsPlugin

BINDGEN = """extern "C" {
    #[doc = "@brief Controls memory mapping"]
    #[doc = "@param op Operation flags."]
    pub fn svcControlMemory(op: MemOp) -> Result;
    #[doc = "@brief Frees memory"]
    pub fn svcFreeMemory() -> Result;
}
"""


def _page(uri="index.md"):
    return SimpleNamespace(file=SimpleNamespace(src_uri=uri, src_path=uri))


def _mk_plugin(tmp_path, **overrides):
    plugin = DoxyrsPlugin()
    plugin.config = {
        "fence": "doxygen",
        "heading_level": 1,
        "strict": False,
        "bindgen_root": "",
        **overrides,
    }
    plugin.on_config({"config_file_path": str(tmp_path / "mkdocs.yml")})
    return plugin


def _render(plugin, markdown):
    return plugin.on_page_markdown(markdown, page=_page(), config={}, files=[])


class TestDirectiveRegex:
    def test_bindgen(self):
        m = _DIRECTIVE_RE.search("::: doxygen:bindgen\n    :file: b.rs\n")
        assert m and m.group("directive") == "bindgen"

    def test_no_match(self):
        assert _DIRECTIVE_RE.search("::: c:autodoc\n    :file: b.rs\n") is None


class TestFences:
    def test_replaces_fence(self, tmp_path):
        p = _mk_plugin(tmp_path)
        md = "Intro\n\n```doxygen\n@brief Hello\n@param x The x\n```\n\nOutro\n"
        assert _render(p, md) == "Intro\n\nHello\n\n# Arguments\n\n* `x` - The x\n\nOutro\n"

    def test_other_fences_untouched(self, tmp_path):
        p = _mk_plugin(tmp_path)
        md = "```python\nx = 1\n```\n"
        assert _render(p, md) == md

    def test_custom_fence(self, tmp_path):
        p = _mk_plugin(tmp_path, fence="doxy")
        result = _render(p, "```doxy\n@note careful\n```\n")
        assert result == "# Notes\n\n* careful\n"

    def test_heading_level(self, tmp_path):
        p = _mk_plugin(tmp_path, heading_level=3)
        assert "### Arguments" in _render(p, "```doxygen\n@param x y\n```\n")

    def test_indented_fence(self, tmp_path):
        p = _mk_plugin(tmp_path)
        md = "- item\n\n    ```doxygen\n    @brief Nested\n    ```\n"
        assert _render(p, md) == "- item\n\n    Nested\n"

    def test_parse_error_keeps_block(self, tmp_path):
        p = _mk_plugin(tmp_path)
        md = "```doxygen\n@param[bogus] x\n```\n"
        assert _render(p, md) == md

    def test_parse_error_strict(self, tmp_path):
        p = _mk_plugin(tmp_path, strict=True)
        with pytest.raises(PluginError):
            _render(p, "```doxygen\n@param[bogus] x\n```\n")


class TestBindgenDirective:
    def test_single_symbol(self, tmp_path):
        (tmp_path / "bindings.rs").write_text(BINDGEN)
        p = _mk_plugin(tmp_path)
        md = "::: doxygen:bindgen\n    :file: bindings.rs\n    :name: svcControlMemory\n"
        result = _render(p, md)
        assert "Controls memory mapping" in result
        assert "* `op` - Operation flags." in result
        assert "Frees memory" not in result

    def test_all_symbols(self, tmp_path):
        (tmp_path / "bindings.rs").write_text(BINDGEN)
        p = _mk_plugin(tmp_path)
        result = _render(p, "::: doxygen:bindgen\n    :file: bindings.rs\n")
        assert "# `svcControlMemory`" in result
        assert "# `svcFreeMemory`" in result
        assert "## Arguments" in result
        assert "---" in result

    def test_bindgen_root(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "bindings.rs").write_text(BINDGEN)
        p = _mk_plugin(tmp_path, bindgen_root="src")
        md = "::: doxygen:bindgen\n    :file: bindings.rs\n    :name: svcFreeMemory\n"
        assert "Frees memory" in _render(p, md)

    def test_heading_level_option(self, tmp_path):
        (tmp_path / "bindings.rs").write_text(BINDGEN)
        p = _mk_plugin(tmp_path)
        md = (
            "::: doxygen:bindgen\n    :file: bindings.rs\n"
            "    :name: svcControlMemory\n    :heading_level: 4\n"
        )
        assert "#### Arguments" in _render(p, md)

    def test_missing_file_option(self, tmp_path):
        p = _mk_plugin(tmp_path)
        result = _render(p, "::: doxygen:bindgen\n    :name: foo\n")
        assert "missing :file:" in result

    def test_file_not_found(self, tmp_path):
        p = _mk_plugin(tmp_path)
        result = _render(p, "::: doxygen:bindgen\n    :file: nope.rs\n")
        assert "file not found" in result

    def test_symbol_not_found(self, tmp_path):
        (tmp_path / "bindings.rs").write_text(BINDGEN)
        p = _mk_plugin(tmp_path)
        md = "::: doxygen:bindgen\n    :file: bindings.rs\n    :name: nothing\n"
        assert "symbol 'nothing' not found" in _render(p, md)

    def test_bad_block_placeholder(self, tmp_path):
        (tmp_path / "bad.rs").write_text('#[doc = "@param[bogus] x"]\npub fn bad();\n')
        p = _mk_plugin(tmp_path)
        md = "::: doxygen:bindgen\n    :file: bad.rs\n    :name: bad\n"
        assert "cannot render" in _render(p, md)
