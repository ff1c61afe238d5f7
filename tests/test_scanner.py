"""Unit tests for lintinit/scanner.py: real parsing, temp files only."""

from collections import Counter
from pathlib import Path

import pytest

from config.config_loader import ScanConfig
from lintinit.scanner import (
    NullReporter,
    SourceParseError,
    analyze_file,
    analyze_source,
    expand_patterns,
    scan,
)


def test_quotes_counted_per_literal():
    stats = analyze_source("var a = 'x';\nvar b = \"y\";\nvar c = \"z\";\n")
    assert stats.counts["quotes"] == Counter(single=1, double=2)


def test_non_string_literals_ignored():
    stats = analyze_source("var a = 1;\nvar b = true;\nvar c = null;\n")
    assert stats.counts["quotes"] == Counter()


def test_semicolons_present():
    stats = analyze_source("var a = 1;\nfoo(a);\n")
    assert stats.counts["semi"] == Counter(always=2)


def test_semicolons_missing():
    stats = analyze_source("var a = 1\nfoo(a)\n")
    assert stats.counts["semi"] == Counter(never=2)


def test_for_head_declaration_not_counted():
    stats = analyze_source("for (var i = 0; i < 3; i++) {\n  foo(i);\n}\n")
    assert stats.counts["semi"] == Counter(always=1)


def test_indent_spaces():
    stats = analyze_source("function f() {\n  if (x) {\n    y();\n  }\n}\n")
    assert stats.counts["indent"] == Counter({2: 2})


def test_indent_tabs():
    stats = analyze_source("function f() {\n\treturn 1;\n}\n")
    assert stats.counts["indent"] == Counter({"tab": 1})


def test_template_literal_lines_ignored_for_indent():
    stats = analyze_source("var t = `\n        deep\n`;\n")
    assert stats.counts["indent"] == Counter()


def test_block_comment_continuation_ignored_for_indent():
    stats = analyze_source("/**\n * Doc.\n */\nfunction f() {\n    return 1;\n}\n")
    assert stats.counts["indent"] == Counter({4: 1})


def test_unix_line_endings():
    stats = analyze_source("var a = 1;\nvar b = 2;\n")
    assert stats.counts["linebreak-style"] == Counter(unix=1)


def test_windows_line_endings():
    stats = analyze_source("var a = 1;\r\nvar b = 2;\r\n")
    assert stats.counts["linebreak-style"] == Counter(windows=1)


def test_single_line_file_has_no_line_ending():
    stats = analyze_source("var a = 1;")
    assert stats.counts["linebreak-style"] == Counter()


def test_module_syntax_falls_back_to_module_goal():
    stats = analyze_source('import x from "y";\nexport default x;\n')
    assert stats.counts["quotes"] == Counter(double=1)
    assert stats.counts["semi"]["always"] >= 1


def test_jsx_attribute_quotes_ignored():
    stats = analyze_source("var el = <div className=\"x\">{'y'}</div>;\n", jsx=True)
    assert stats.counts["quotes"] == Counter(single=1)


def test_unparseable_source_raises():
    with pytest.raises(SourceParseError):
        analyze_source("var = ;")


def test_analyze_file_records_warning(write_source):
    path = write_source("broken.js", "function (\n")
    stats = analyze_file(path)
    assert stats.files_scanned == 0
    assert len(stats.warnings) == 1
    assert stats.warnings[0].path == path


def test_analyze_file_missing_file_records_warning(tmp_path: Path):
    stats = analyze_file(tmp_path / "missing.js")
    assert len(stats.warnings) == 1


def test_analyze_file_preserves_crlf(write_source):
    path = write_source("crlf.js", "var a = 1;\r\nvar b = 2;\r\n")
    assert analyze_file(path).counts["linebreak-style"] == Counter(windows=1)


def test_expand_patterns_directory_recursive(js_corpus: Path):
    files = expand_patterns([str(js_corpus)], [".js"], ["node_modules"])
    assert [p.name for p in files] == ["greet.js", "greet-test.js"]


def test_expand_patterns_glob_not_recursive(js_corpus: Path):
    files = expand_patterns([str(js_corpus / "*" / "*.js")], [".js"])
    assert sorted(p.name for p in files) == ["greet-test.js", "greet.js"]
    assert expand_patterns([str(js_corpus / "*.js")], [".js"]) == []


def test_expand_patterns_dedupes(js_corpus: Path):
    lib = str(js_corpus / "lib")
    files = expand_patterns([lib, lib, str(js_corpus / "lib" / "greet.js")], [".js"], ["node_modules"])
    assert len(files) == 1


async def test_scan_accumulates_corpus(js_corpus: Path, sample_scan_config: ScanConfig, mock_reporter):
    patterns = [str(js_corpus / "lib"), str(js_corpus / "tests")]
    stats = await scan(patterns, reporter=mock_reporter, scan_config=sample_scan_config)
    assert stats.files_scanned == 2
    assert stats.counts["quotes"] == Counter(double=4, single=1)
    assert stats.counts["semi"] == Counter(always=3, never=3)
    assert stats.counts["indent"] == Counter({4: 1})
    assert mock_reporter.advance.call_count == 2
    mock_reporter.complete.assert_not_called()


async def test_scan_empty_corpus(tmp_path: Path, sample_scan_config: ScanConfig):
    stats = await scan([str(tmp_path / "nothing-here")], scan_config=sample_scan_config)
    assert stats.files_scanned == 0
    assert all(sum(counter.values()) == 0 for counter in stats.counts.values())


async def test_scan_skips_broken_file(js_corpus: Path, sample_scan_config: ScanConfig, write_source):
    write_source("corpus/lib/broken.js", "var = ;\n")
    stats = await scan([str(js_corpus / "lib")], reporter=NullReporter(), scan_config=sample_scan_config)
    assert stats.files_scanned == 1
    assert len(stats.warnings) == 1
    assert stats.warnings[0].path.name == "broken.js"


async def test_scan_is_deterministic(js_corpus: Path, sample_scan_config: ScanConfig):
    patterns = [str(js_corpus / "lib"), str(js_corpus / "tests")]
    first = await scan(patterns, scan_config=sample_scan_config)
    second = await scan(list(reversed(patterns)), scan_config=sample_scan_config)
    assert first.counts == second.counts
