"""Shared pytest fixtures."""

import textwrap
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from config.config_loader import AppConfig, DefaultsConfig, ScanConfig
from lintinit.models import AnswerRecord


@pytest.fixture
def sample_scan_config() -> ScanConfig:
    return ScanConfig(
        extensions=[".js", ".jsx"],
        exclude_dirs=["node_modules"],
        dominance_threshold=0.5,
    )


@pytest.fixture
def sample_app_config(tmp_path: Path, sample_scan_config: ScanConfig) -> AppConfig:
    return AppConfig(
        defaults=DefaultsConfig(output_format="JSON", output_dir=tmp_path / "output"),
        scan=sample_scan_config,
    )


@pytest.fixture
def prompt_answers() -> AnswerRecord:
    return AnswerRecord(
        source="prompt",
        indent=2,
        quotes="single",
        linebreak="unix",
        semi=True,
        es6=True,
        env=("browser",),
        jsx=False,
        react=False,
        commonjs=False,
        format="JSON",
    )


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(textwrap.dedent(text))
    return path


@pytest.fixture
def js_corpus(tmp_path: Path) -> Path:
    """Two small projects' worth of files: mostly double quotes, semicolons split 3/3."""
    root = tmp_path / "corpus"
    _write(
        root / "lib" / "greet.js",
        """\
        "use strict";
        var greeting = 'hello';
        function greet(name) {
            return greeting + ", " + name;
        }
        module.exports = greet
        """,
    )
    _write(
        root / "tests" / "greet-test.js",
        """\
        var greet = require("../lib/greet")
        module.exports = greet("world")
        """,
    )
    _write(root / "lib" / "README.md", "not a source file\n")
    _write(root / "lib" / "node_modules" / "dep" / "index.js", "var ignored = 'x';\n")
    return root


@pytest.fixture
def write_source(tmp_path: Path):
    """Return a helper that writes a source file under tmp_path verbatim."""

    def _writer(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
        return path

    return _writer


class MockReporter:
    """Test double ProgressReporter recording advance/complete calls."""

    def __init__(self) -> None:
        self.advance = MagicMock()
        self.complete = MagicMock()


@pytest.fixture
def mock_reporter() -> MockReporter:
    return MockReporter()
