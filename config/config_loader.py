"""Load settings.yaml into typed dataclasses. Validates scan settings at startup."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

OUTPUT_FORMATS = ("JSON", "YAML", "JavaScript")


@dataclass
class DefaultsConfig:
    output_format: str = "JSON"
    output_dir: Path = Path(".")


@dataclass
class ScanConfig:
    extensions: list[str] = field(default_factory=lambda: [".js", ".jsx"])
    exclude_dirs: list[str] = field(default_factory=lambda: ["node_modules", ".git"])
    dominance_threshold: float = 0.5


@dataclass
class AppConfig:
    defaults: DefaultsConfig
    scan: ScanConfig


def _settings_path() -> Path:
    override = os.environ.get("LINTINIT_SETTINGS", "").strip()
    return Path(override) if override else _SETTINGS_PATH


def load_config(settings_path: Path | None = None) -> AppConfig:
    """Load and validate configuration from settings.yaml.

    The path defaults to $LINTINIT_SETTINGS, then the bundled settings.yaml.
    $LINTINIT_OUTPUT_FORMAT overrides defaults.output_format.

    Raises FileNotFoundError if settings file missing.
    Raises ValueError on an unknown output format or a threshold outside [0.5, 1).
    """
    if settings_path is None:
        settings_path = _settings_path()
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    defaults_raw = raw.get("defaults", {})
    output_format = os.environ.get("LINTINIT_OUTPUT_FORMAT", "").strip() or str(
        defaults_raw.get("output_format", "JSON")
    )
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format {output_format!r}, expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    defaults = DefaultsConfig(
        output_format=output_format,
        output_dir=Path(defaults_raw.get("output_dir", ".")),
    )

    scan_raw = raw.get("scan", {})
    threshold = float(scan_raw.get("dominance_threshold", 0.5))
    if not 0.5 <= threshold < 1.0:
        raise ValueError(f"dominance_threshold must be in [0.5, 1), got {threshold}")
    scan = ScanConfig(
        extensions=[str(ext) for ext in scan_raw.get("extensions", [".js", ".jsx"])],
        exclude_dirs=[str(d) for d in scan_raw.get("exclude_dirs", ["node_modules", ".git"])],
        dominance_threshold=threshold,
    )
    logger.debug(
        "Loaded settings from %s (format=%s, threshold=%.2f)",
        settings_path,
        defaults.output_format,
        scan.dominance_threshold,
    )

    return AppConfig(defaults=defaults, scan=scan)
