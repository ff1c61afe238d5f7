"""Dataclasses for the config synthesis pipeline. Merging only, no deps."""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

SEVERITY_OFF = 0
SEVERITY_WARN = 1
SEVERITY_ERROR = 2

RECOMMENDED = "eslint:recommended"

# Rules inferred from source statistics, in output order
STYLE_RULES = ("indent", "quotes", "linebreak-style", "semi")

RuleSetting = int | list


@dataclass(frozen=True)
class AnswerRecord:
    source: str                        # "prompt" or "auto"
    style_guide: str | None = None     # prompt-only shortcut
    indent: int | str = 4              # spaces, or "tab"
    quotes: str = "single"             # "single" or "double"
    linebreak: str = "unix"            # "unix" or "windows"
    semi: bool = True
    es6: bool = False
    env: tuple[str, ...] = ()
    jsx: bool = False
    react: bool = False
    commonjs: bool = False
    patterns: tuple[str, ...] = ()     # auto-only
    format: str = "JSON"               # passed through to the writer


@dataclass
class ConfigFragment:
    rules: dict[str, RuleSetting] = field(default_factory=dict)
    env: dict[str, bool] = field(default_factory=dict)
    ecma_features: dict[str, bool] = field(default_factory=dict)
    plugins: list[str] = field(default_factory=list)
    extends: str | None = None

    def merge(self, other: "ConfigFragment") -> "ConfigFragment":
        """Return a new fragment with ``other`` taking precedence key by key."""
        plugins: list[str] = []
        for name in [*self.plugins, *other.plugins]:
            if name not in plugins:
                plugins.append(name)
        return ConfigFragment(
            rules={**self.rules, **other.rules},
            env={**self.env, **other.env},
            ecma_features={**self.ecma_features, **other.ecma_features},
            plugins=plugins,
            extends=other.extends if other.extends is not None else self.extends,
        )

    def to_dict(self) -> dict:
        """Render the ESLint configuration shape, leaving out empty sections."""
        config: dict = {}
        if self.extends is not None:
            config["extends"] = self.extends
        if self.env:
            config["env"] = dict(self.env)
        if self.ecma_features:
            config["parserOptions"] = {"ecmaFeatures": dict(self.ecma_features)}
        if self.plugins:
            config["plugins"] = list(self.plugins)
        if self.rules:
            config["rules"] = {
                name: list(value) if isinstance(value, list) else value
                for name, value in self.rules.items()
            }
        return config


@dataclass(frozen=True)
class FileParseWarning:
    path: Path
    message: str


def _empty_counts() -> dict[str, Counter]:
    return {rule: Counter() for rule in STYLE_RULES}


@dataclass(frozen=True)
class StyleStatistic:
    counts: dict[str, Counter] = field(default_factory=_empty_counts)
    files_scanned: int = 0
    warnings: tuple[FileParseWarning, ...] = ()

    def merge(self, other: "StyleStatistic") -> "StyleStatistic":
        counts = {
            rule: self.counts.get(rule, Counter()) + other.counts.get(rule, Counter())
            for rule in STYLE_RULES
        }
        return StyleStatistic(
            counts=counts,
            files_scanned=self.files_scanned + other.files_scanned,
            warnings=self.warnings + other.warnings,
        )
