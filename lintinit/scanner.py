"""Source statistics: expand patterns, parse each file, count style choices."""

import asyncio
import glob
import logging
import os
from collections import Counter
from pathlib import Path
from typing import Protocol

import esprima
from esprima.error_handler import Error as EsprimaError

from config.config_loader import ScanConfig
from lintinit.models import FileParseWarning, StyleStatistic

logger = logging.getLogger(__name__)

# Statements whose grammar ends in an (optionally inserted) semicolon
_SEMICOLON_STATEMENTS = frozenset({
    "ExpressionStatement",
    "VariableDeclaration",
    "ReturnStatement",
    "ThrowStatement",
    "BreakStatement",
    "ContinueStatement",
    "DebuggerStatement",
    "DoWhileStatement",
    "ImportDeclaration",
})
_FOR_HEADS = frozenset({"ForStatement", "ForInStatement", "ForOfStatement"})
_MAX_INDENT_STEP = 8


class SourceParseError(Exception):
    """Raised when source text cannot be parsed as a script or a module."""


class ProgressReporter(Protocol):
    def advance(self) -> None: ...

    def complete(self) -> None: ...


class NullReporter:
    """Reporter that ignores all progress."""

    def advance(self) -> None:
        pass

    def complete(self) -> None:
        pass


def expand_patterns(
    patterns: list[str] | tuple[str, ...],
    extensions: list[str],
    exclude_dirs: list[str] | None = None,
) -> list[Path]:
    """Resolve patterns to a sorted, de-duplicated list of source files.

    Directories are walked recursively for files with a source extension.
    Anything else is treated as a glob expression without ``**`` support.
    """
    excluded = set(exclude_dirs or [])
    found: set[Path] = set()
    for pattern in patterns:
        path = Path(pattern)
        if path.is_dir():
            for root, dirnames, filenames in os.walk(path, topdown=True):
                dirnames[:] = [d for d in dirnames if d not in excluded]
                for filename in filenames:
                    if os.path.splitext(filename)[1] in extensions:
                        found.add(Path(root) / filename)
            continue
        matches = glob.glob(pattern, recursive=False)
        if not matches:
            logger.debug("Pattern matched no files: %s", pattern)
        for match in matches:
            candidate = Path(match)
            if candidate.is_file():
                found.add(candidate)
    return sorted(found)


def _parse(text: str, jsx: bool):
    options = {"range": True, "jsx": jsx}
    try:
        return esprima.parseScript(text, options)
    except EsprimaError as script_exc:
        try:
            return esprima.parseModule(text, options)
        except EsprimaError:
            raise SourceParseError(str(script_exc)) from script_exc


def _is_node(value) -> bool:
    return isinstance(getattr(value, "type", None), str) and hasattr(value, "__dict__")


def _walk(tree):
    """Yield (node, parent_type) pairs for every node in the tree."""
    stack = [(tree, None)]
    while stack:
        node, parent_type = stack.pop()
        yield node, parent_type
        for value in vars(node).values():
            children = value if isinstance(value, list) else [value]
            for child in children:
                if _is_node(child):
                    stack.append((child, node.type))


def _indent_steps(text: str, skipped: list[tuple[int, int]]) -> Counter:
    """Count the indentation step of each line that indents further than the last."""
    steps: Counter = Counter()
    previous_width = 0
    previous_tabs = False
    offset = 0
    for line in text.splitlines(keepends=True):
        start = offset
        offset += len(line)
        body = line.lstrip(" \t")
        if not body.strip() or body.startswith("*"):
            continue
        if any(begin < start < end for begin, end in skipped):
            continue
        leading = line[: len(line) - len(body)]
        uses_tabs = "\t" in leading
        width = len(leading)
        if width > previous_width:
            if uses_tabs:
                steps["tab"] += 1
            elif not previous_tabs and width - previous_width <= _MAX_INDENT_STEP:
                steps[width - previous_width] += 1
        previous_width = width
        previous_tabs = uses_tabs
    return steps


def analyze_source(text: str, jsx: bool = False) -> StyleStatistic:
    """Count quote, semicolon, indentation and line-ending choices in one source text.

    Raises:
        SourceParseError: If the text is neither a valid script nor a module.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    tree = _parse(text, jsx)

    quotes: Counter = Counter()
    semi: Counter = Counter()
    templates: list[tuple[int, int]] = []
    for node, parent_type in _walk(tree):
        if node.type == "Literal":
            raw = getattr(node, "raw", None)
            if isinstance(raw, str) and parent_type != "JSXAttribute":
                if raw.startswith("'"):
                    quotes["single"] += 1
                elif raw.startswith('"'):
                    quotes["double"] += 1
        elif node.type == "TemplateLiteral":
            templates.append(tuple(node.range))
        elif node.type in _SEMICOLON_STATEMENTS:
            if node.type == "VariableDeclaration" and parent_type in _FOR_HEADS:
                continue
            end = node.range[1]
            semi["always" if text[end - 1:end] == ";" else "never"] += 1

    linebreak: Counter = Counter()
    crlf = text.count("\r\n")
    lf = text.count("\n") - crlf
    if crlf or lf:
        linebreak["windows" if crlf > lf else "unix"] += 1

    return StyleStatistic(
        counts={
            "indent": _indent_steps(text, templates),
            "quotes": quotes,
            "linebreak-style": linebreak,
            "semi": semi,
        },
        files_scanned=1,
    )


def analyze_file(path: Path, jsx: bool = False) -> StyleStatistic:
    """Analyze one file. Unreadable or unparseable files yield a warning, not an error."""
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            text = f.read()
        return analyze_source(text, jsx=jsx)
    except (OSError, UnicodeDecodeError, SourceParseError, RecursionError) as exc:
        warning = FileParseWarning(path=path, message=str(exc) or type(exc).__name__)
        logger.warning("Skipping %s: %s", path, warning.message)
        return StyleStatistic(warnings=(warning,))


async def scan(
    patterns: list[str] | tuple[str, ...],
    reporter: ProgressReporter | None = None,
    scan_config: ScanConfig | None = None,
    jsx: bool = False,
) -> StyleStatistic:
    """Scan every file matched by ``patterns`` and fold the per-file statistics.

    Files are analyzed in worker threads. ``reporter.advance()`` is called once
    per file; ``complete()`` is left to the caller.
    """
    scan_config = scan_config or ScanConfig()
    reporter = reporter or NullReporter()
    files = expand_patterns(patterns, scan_config.extensions, scan_config.exclude_dirs)
    logger.info("Scanning %d file(s)", len(files))

    async def _analyze(path: Path) -> StyleStatistic:
        stats = await asyncio.to_thread(analyze_file, path, jsx)
        reporter.advance()
        return stats

    partials = await asyncio.gather(*(_analyze(p) for p in files))

    total = StyleStatistic()
    for partial in partials:
        total = total.merge(partial)
    if total.warnings:
        logger.warning("%d file(s) could not be parsed and were skipped", len(total.warnings))
    return total
