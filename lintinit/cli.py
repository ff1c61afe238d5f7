"""Click CLI: builds the answer record, runs synthesis, writes the config file."""

import asyncio
import logging
import sys
from pathlib import Path

import click
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from config.config_loader import OUTPUT_FORMATS, AppConfig, ScanConfig, load_config
from lintinit.answers import (
    LINEBREAK_STYLES,
    QUOTE_STYLES,
    InvalidAnswersError,
    answers_from_mapping,
    read_answers_file,
)
from lintinit.models import AnswerRecord, ConfigFragment
from lintinit.output import print_config_summary, print_serialized, write_config
from lintinit.packages import check_installed, install_command, required_packages
from lintinit.scanner import NullReporter, ProgressReporter, expand_patterns
from lintinit.style_guides import UnsupportedStyleGuideError, style_guide_names
from lintinit.synthesis import synthesize

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


class RichProgressReporter:
    """ProgressReporter backed by a rich Progress task."""

    def __init__(self, progress: Progress, task_id) -> None:
        self._progress = progress
        self._task_id = task_id

    def advance(self) -> None:
        self._progress.advance(self._task_id)

    def complete(self) -> None:
        self._progress.update(self._task_id, description="Done")


def _build_answer_mapping(
    app_config: AppConfig,
    answers_file: str | None,
    patterns: tuple[str, ...],
    overrides: dict,
) -> dict:
    """Merge answer sources. Precedence: CLI flag > answers file > settings default."""
    raw: dict = {"source": "prompt", "format": app_config.defaults.output_format}
    if answers_file:
        raw.update(read_answers_file(Path(answers_file)))
    raw.update({k: v for k, v in overrides.items() if v is not None})
    if patterns:
        raw["source"] = "auto"
        raw["patterns"] = list(patterns)
    return raw


def _prompt_for_answers(raw: dict) -> dict:
    """Ask for every answer on the terminal, using the current values as defaults."""
    answers = dict(raw)
    guide = click.prompt(
        "Style guide",
        type=click.Choice(["none", *style_guide_names()]),
        default=answers.get("style_guide") or "none",
    )
    answers["style_guide"] = None if guide == "none" else guide
    if answers["style_guide"] is None and answers["source"] == "prompt":
        indent = click.prompt("Indentation (number of spaces, or 'tab')", default=str(answers.get("indent", 4)))
        answers["indent"] = "tab" if indent == "tab" else int(indent) if indent.isdigit() else indent
        answers["quotes"] = click.prompt(
            "Quotes", type=click.Choice(QUOTE_STYLES), default=answers.get("quotes", "single")
        )
        answers["linebreak"] = click.prompt(
            "Line endings", type=click.Choice(LINEBREAK_STYLES), default=answers.get("linebreak", "unix")
        )
        answers["semi"] = click.confirm("Require semicolons?", default=answers.get("semi", True))
    if answers["style_guide"] is None:
        answers["es6"] = click.confirm("Are you using ECMAScript 6 features?", default=answers.get("es6", False))
        env = click.prompt(
            "Environments (space separated)",
            default=" ".join(answers.get("env") or ["browser"]),
        )
        answers["env"] = env.split()
        answers["commonjs"] = click.confirm("Do you use CommonJS?", default=answers.get("commonjs", False))
        answers["jsx"] = click.confirm("Do you use JSX?", default=answers.get("jsx", False))
        if answers["jsx"]:
            answers["react"] = click.confirm("Do you use React?", default=answers.get("react", False))
    answers["format"] = click.prompt(
        "Config file format", type=click.Choice(OUTPUT_FORMATS), default=answers.get("format", "JSON")
    )
    return answers


def _synthesize_or_exit(
    answers: AnswerRecord,
    reporter: ProgressReporter,
    scan_config: ScanConfig,
) -> ConfigFragment:
    try:
        return asyncio.run(synthesize(answers, reporter=reporter, scan_config=scan_config))
    except (UnsupportedStyleGuideError, InvalidAnswersError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)


def _persist(config: ConfigFragment, fmt: str, output_dir: Path, dry_run: bool) -> Path | None:
    if dry_run:
        print_serialized(config, fmt)
        return None
    return write_config(config, fmt, output_dir)


def _report_packages(config: ConfigFragment) -> None:
    """Warn about presets and plugins missing from ./node_modules."""
    packages = required_packages(config)
    if not packages:
        return
    status = check_installed(packages, Path.cwd() / "node_modules")
    missing = [name for name, installed in status.items() if not installed]
    if not missing:
        return
    console.print(f"\n[yellow]{len(missing)} package(s) not installed:[/yellow] {', '.join(missing)}")
    console.print(f"Install with: [bold]{install_command(missing)}[/bold]")


@click.command()
@click.argument("patterns", nargs=-1)
@click.option("--answers", "answers_file", type=click.Path(exists=True, dir_okay=False),
              help="YAML file with answers (keys are answer field names)")
@click.option("--style-guide", default=None, type=click.Choice(style_guide_names()),
              help="Use a popular style guide instead of inferring rules")
@click.option("--indent", default=None, help="Indentation: number of spaces, or 'tab'")
@click.option("--quotes", default=None, type=click.Choice(QUOTE_STYLES))
@click.option("--linebreak", default=None, type=click.Choice(LINEBREAK_STYLES))
@click.option("--semi/--no-semi", default=None, help="Require or forbid semicolons")
@click.option("--es6/--no-es6", default=None, help="Enable the es6 environment")
@click.option("--env", "env", multiple=True, help="Environment to enable (repeatable)")
@click.option("--jsx/--no-jsx", default=None)
@click.option("--react/--no-react", default=None)
@click.option("--commonjs/--no-commonjs", default=None)
@click.option("--format", "fmt", default=None, type=click.Choice(OUTPUT_FORMATS),
              help="Config file format (default: from config)")
@click.option("--output", "output_path", default=None, help="Output directory (default: from config)")
@click.option("--interactive", is_flag=True, help="Prompt for answers on the terminal")
@click.option("--dry-run", is_flag=True, help="Print the config instead of writing it")
@click.option("--skip-package-check", is_flag=True, default=False,
              help="Do not check node_modules for required presets and plugins")
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
def main(
    patterns: tuple[str, ...],
    answers_file: str | None,
    style_guide: str | None,
    indent: str | None,
    quotes: str | None,
    linebreak: str | None,
    semi: bool | None,
    es6: bool | None,
    env: tuple[str, ...],
    jsx: bool | None,
    react: bool | None,
    commonjs: bool | None,
    fmt: str | None,
    output_path: str | None,
    interactive: bool,
    dry_run: bool,
    skip_package_check: bool,
    verbose: bool,
) -> None:
    """lint-init -- generate an ESLint config from answers or existing code.

    \b
    Examples:
      lint-init --quotes double --no-semi --env browser
      lint-init --style-guide airbnb --format YAML
      lint-init lib tests --env node --commonjs
      lint-init --answers answers.yaml --dry-run
    """
    load_dotenv()
    _setup_logging(verbose)

    try:
        app_config = load_config()
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        sys.exit(1)

    overrides = {
        "style_guide": style_guide,
        "indent": int(indent) if indent and indent.isdigit() else indent,
        "quotes": quotes,
        "linebreak": linebreak,
        "semi": semi,
        "es6": es6,
        "env": list(env) or None,
        "jsx": jsx,
        "react": react,
        "commonjs": commonjs,
        "format": fmt,
    }
    try:
        raw = _build_answer_mapping(app_config, answers_file, patterns, overrides)
        if interactive:
            raw = _prompt_for_answers(raw)
        answers = answers_from_mapping(raw)
    except (InvalidAnswersError, yaml.YAMLError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)

    output_dir = Path(output_path) if output_path else app_config.defaults.output_dir

    if answers.source == "auto" and not answers.style_guide:
        total = len(expand_patterns(answers.patterns, app_config.scan.extensions, app_config.scan.exclude_dirs))
        if total == 0:
            logger.warning("No files matched %s; every style rule will be turned off", " ".join(answers.patterns))
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Examining files...", total=total)
            reporter = RichProgressReporter(progress, task)
            config = _synthesize_or_exit(answers, reporter, app_config.scan)
            saved = _persist(config, answers.format, output_dir, dry_run)
            reporter.complete()
    else:
        config = _synthesize_or_exit(answers, NullReporter(), app_config.scan)
        saved = _persist(config, answers.format, output_dir, dry_run)

    print_config_summary(config)
    if saved is not None:
        console.print(f"\n[dim]Saved to: {saved}[/dim]")

    if not skip_package_check:
        _report_packages(config)


if __name__ == "__main__":
    main()
