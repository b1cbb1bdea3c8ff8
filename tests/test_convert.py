import logging

from mkdocs_doxyrs.convert import (
    DocBlock,
    convert_file,
    main,
    split_bindgen,
    transform_bindgen,
)
from mkdocs_doxyrs.parser import ParseError

BINDGEN = r'''extern "C" {
    #[must_use]
    #[doc = "@brief Controls memory mapping"]
    #[doc = "@param[out] addr_out The virtual address."]
    #[doc = "@param addr0 The \"first\" address."]
    pub fn svcControlMemory(addr_out: *mut u32, addr0: u32) -> Result;
}'''

PLAIN = """extern "C" {
    pub fn plain(x: u32) -> u32;
}
"""


class TestSplitBindgen:
    def test_blocks_and_lines(self):
        segments = split_bindgen(BINDGEN)
        blocks = [s for s in segments if isinstance(s, DocBlock)]
        assert len(blocks) == 1
        assert segments[0] == 'extern "C" {'
        assert segments[-1] == "}"

    def test_block_metadata(self):
        (block,) = [s for s in split_bindgen(BINDGEN) if isinstance(s, DocBlock)]
        assert block.line == 3
        assert block.indent == "    "
        assert block.item == "svcControlMemory"

    def test_unescapes_body(self):
        (block,) = [s for s in split_bindgen(BINDGEN) if isinstance(s, DocBlock)]
        assert block.comment.splitlines()[-1] == '@param addr0 The "first" address.'

    def test_field_item(self):
        source = 'pub struct Foo {\n    #[doc = "The x"]\n    pub x: u32,\n}'
        (block,) = [s for s in split_bindgen(source) if isinstance(s, DocBlock)]
        assert block.item == "x"

    def test_const_item(self):
        source = '#[doc = "Max size"]\npub const MAX_SIZE: u32 = 4;'
        (block,) = [s for s in split_bindgen(source) if isinstance(s, DocBlock)]
        assert block.item == "MAX_SIZE"


class TestTransformBindgen:
    def test_rewrites_doc_run(self):
        assert transform_bindgen(BINDGEN).split("\n") == [
            'extern "C" {',
            "    #[must_use]",
            '    #[doc = "Controls memory mapping"]',
            '    #[doc = ""]',
            '    #[doc = "# Arguments"]',
            '    #[doc = ""]',
            '    #[doc = "* `addr_out` - The virtual address. [Direction: Out]"]',
            '    #[doc = "* `addr0` - The \\"first\\" address."]',
            "    pub fn svcControlMemory(addr_out: *mut u32, addr0: u32) -> Result;",
            "}",
        ]

    def test_passthrough(self):
        assert transform_bindgen(PLAIN) == PLAIN

    def test_trims_lines(self):
        source = '#[doc = "Options:"]\n#[doc = "    - fast"]\n#[doc = "        - really"]'
        assert transform_bindgen(source).split("\n")[:3] == [
            '#[doc = "Options:"]',
            '#[doc = "- fast"]',
            '#[doc = "- really"]',
        ]

    def test_keep_indent(self):
        source = '#[doc = "Options:"]\n#[doc = "    - fast"]\n#[doc = "        - really"]'
        assert transform_bindgen(source, trim_lines=False).split("\n")[:3] == [
            '#[doc = "Options:"]',
            '#[doc = "- fast"]',
            '#[doc = "  - really"]',
        ]

    def test_parse_error_reports_line(self):
        source = 'fn a() {}\n#[doc = "@param[bogus] x"]\npub fn b();'
        errors = []
        assert transform_bindgen(source, errors=errors) == source
        (error,) = errors
        assert isinstance(error, ParseError)
        assert error.line == 2
        assert "line 2" in str(error)

    def test_bad_block_leaves_others_converted(self):
        source = '#[doc = "@brief Good"]\npub fn a();\n#[doc = "@param[bogus] x"]\npub fn b();'
        errors = []
        assert transform_bindgen(source, errors=errors).split("\n") == [
            '#[doc = "Good"]',
            "pub fn a();",
            '#[doc = "@param[bogus] x"]',
            "pub fn b();",
        ]
        assert [e.line for e in errors] == [3]

    def test_uncollected_error_is_logged(self, caplog):
        source = '#[doc = "@param[bogus] x"]\npub fn b();'
        with caplog.at_level(logging.ERROR, logger="mkdocs.plugins.doxyrs"):
            assert transform_bindgen(source) == source
        assert "line 1" in caplog.text


class TestConvertCli:
    def test_converts_file(self, tmp_path):
        path = tmp_path / "bindings.rs"
        path.write_text(BINDGEN)
        assert main([str(path)]) == 0
        assert "# Arguments" in path.read_text()

    def test_dry_run(self, tmp_path, capsys):
        path = tmp_path / "bindings.rs"
        path.write_text(BINDGEN)
        assert main([str(path), "--dry-run"]) == 0
        assert path.read_text() == BINDGEN
        assert "[dry-run] converted" in capsys.readouterr().out

    def test_backup(self, tmp_path):
        path = tmp_path / "bindings.rs"
        path.write_text(BINDGEN)
        assert convert_file(str(path), backup=True)
        assert (tmp_path / "bindings.rs.bak").read_text() == BINDGEN

    def test_unchanged_file(self, tmp_path):
        path = tmp_path / "plain.rs"
        path.write_text(PLAIN)
        assert not convert_file(str(path))

    def test_directory_and_ext(self, tmp_path, capsys):
        (tmp_path / "a.rs").write_text(BINDGEN)
        (tmp_path / "b.txt").write_text(BINDGEN)
        assert main([str(tmp_path)]) == 0
        assert "1/1 files modified" in capsys.readouterr().out
        assert (tmp_path / "b.txt").read_text() == BINDGEN

    def test_parse_error_continues(self, tmp_path, capsys):
        (tmp_path / "a.rs").write_text('#[doc = "@param[bogus] x"]\npub fn a();')
        (tmp_path / "b.rs").write_text(BINDGEN)
        assert main([str(tmp_path)]) == 1
        captured = capsys.readouterr()
        assert "error:" in captured.err
        assert "converted:" in captured.out

    def test_missing_path(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_mixed_file_converts_good_blocks(self, tmp_path, capsys):
        path = tmp_path / "mixed.rs"
        path.write_text('#[doc = "@brief Good"]\npub fn a();\n#[doc = "@param[bogus] x"]\npub fn b();')
        assert main([str(path)]) == 1
        assert path.read_text().split("\n")[0] == '#[doc = "Good"]'
        assert "line 3" in capsys.readouterr().err
