"""Rich console summary and config file save for synthesis results."""

import json
import logging
from pathlib import Path

import yaml
from rich.console import Console
from rich.rule import Rule
from rich.syntax import Syntax
from rich.table import Table

from lintinit.models import SEVERITY_OFF, ConfigFragment

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)

CONFIG_FILENAMES = {
    "JSON": ".eslintrc.json",
    "YAML": ".eslintrc.yml",
    "JavaScript": ".eslintrc.js",
}

_SYNTAX_LEXERS = {"JSON": "json", "YAML": "yaml", "JavaScript": "javascript"}


def serialize_config(config: dict, fmt: str) -> str:
    """Render a config dict as JSON, YAML or a CommonJS module.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
    """
    if fmt == "JSON":
        return json.dumps(config, indent=4) + "\n"
    if fmt == "YAML":
        return yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
    if fmt == "JavaScript":
        return "module.exports = " + json.dumps(config, indent=4) + ";\n"
    raise ValueError(f"Unsupported config format: {fmt!r}")


def write_config(config: ConfigFragment, fmt: str, output_dir: Path) -> Path:
    """Write the config to ``output_dir`` under the conventional filename for ``fmt``.

    Returns:
        Path to the saved file.
    """
    if fmt not in CONFIG_FILENAMES:
        raise ValueError(f"Unsupported config format: {fmt!r}")
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / CONFIG_FILENAMES[fmt]
    filepath.write_text(serialize_config(config.to_dict(), fmt), encoding="utf-8")
    logger.info("Config saved to: %s", filepath)
    return filepath


def _describe(setting) -> str:
    if isinstance(setting, list):
        severity, *options = setting
        return f"{severity}: {', '.join(str(o) for o in options)}"
    if setting == SEVERITY_OFF:
        return "off (mixed usage)"
    return str(setting)


def print_config_summary(config: ConfigFragment) -> None:
    """Print extends, environments, plugins and rules to the console."""
    console.print(Rule("[bold cyan]Generated Config[/bold cyan]"))
    console.print(f"Extends: [bold]{config.extends or '-'}[/bold]")
    if config.env:
        console.print(f"Environments: {', '.join(sorted(config.env))}")
    if config.plugins:
        console.print(f"Plugins: {', '.join(config.plugins)}")
    if config.ecma_features:
        console.print(f"ECMA features: {', '.join(sorted(config.ecma_features))}")
    if not config.rules:
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Rule")
    table.add_column("Setting")
    for name, setting in config.rules.items():
        style = "dim" if setting == SEVERITY_OFF else None
        table.add_row(name, _describe(setting), style=style)
    console.print(table)


def print_serialized(config: ConfigFragment, fmt: str) -> None:
    """Print the serialized config with syntax highlighting instead of saving it."""
    text = serialize_config(config.to_dict(), fmt)
    console.print(Syntax(text, _SYNTAX_LEXERS.get(fmt, "text")))
