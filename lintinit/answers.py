"""Answer records: load them from YAML and validate them before synthesis."""

import dataclasses
from collections.abc import Mapping
from pathlib import Path

import yaml

from config.config_loader import OUTPUT_FORMATS
from lintinit.models import AnswerRecord

SOURCES = ("prompt", "auto")
QUOTE_STYLES = ("single", "double")
LINEBREAK_STYLES = ("unix", "windows")

_FIELDS = {f.name for f in dataclasses.fields(AnswerRecord)}
_BOOL_FIELDS = ("semi", "es6", "jsx", "react", "commonjs")


class InvalidAnswersError(ValueError):
    """Raised when an answer record is malformed."""


def _as_names(value, key: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    raise InvalidAnswersError(f"{key} must be a list or a whitespace-separated string")


def answers_from_mapping(raw: Mapping) -> AnswerRecord:
    """Build an AnswerRecord from a plain mapping keyed by field name.

    ``env`` and ``patterns`` accept a list or a whitespace-separated string.

    Raises:
        InvalidAnswersError: On unknown keys or invalid values.
    """
    unknown = sorted(set(raw) - _FIELDS)
    if unknown:
        raise InvalidAnswersError(f"Unknown answer field(s): {', '.join(unknown)}")
    if "source" not in raw:
        raise InvalidAnswersError("Missing required answer field: source")

    values = dict(raw)
    values["env"] = _as_names(values.get("env"), "env")
    values["patterns"] = _as_names(values.get("patterns"), "patterns")
    answers = AnswerRecord(**values)
    validate_answers(answers)
    return answers


def read_answers_file(path: Path) -> dict:
    """Read the raw answer mapping from a YAML file without validating it."""
    with path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise InvalidAnswersError(f"{path} does not contain a mapping of answers")
    return dict(raw)


def load_answers(path: Path) -> AnswerRecord:
    """Load and validate an answer record from a YAML file."""
    return answers_from_mapping(read_answers_file(path))


def validate_answers(answers: AnswerRecord) -> None:
    """Check field values. Style-guide names are checked by the registry, not here."""
    if answers.source not in SOURCES:
        raise InvalidAnswersError(f"source must be one of {SOURCES}, got {answers.source!r}")
    indent = answers.indent
    if indent != "tab" and (isinstance(indent, bool) or not isinstance(indent, int) or indent < 1):
        raise InvalidAnswersError(f"indent must be a positive integer or 'tab', got {indent!r}")
    if answers.quotes not in QUOTE_STYLES:
        raise InvalidAnswersError(f"quotes must be one of {QUOTE_STYLES}, got {answers.quotes!r}")
    if answers.linebreak not in LINEBREAK_STYLES:
        raise InvalidAnswersError(
            f"linebreak must be one of {LINEBREAK_STYLES}, got {answers.linebreak!r}"
        )
    for name in _BOOL_FIELDS:
        if not isinstance(getattr(answers, name), bool):
            raise InvalidAnswersError(f"{name} must be true or false")
    if answers.format not in OUTPUT_FORMATS:
        raise InvalidAnswersError(f"format must be one of {OUTPUT_FORMATS}, got {answers.format!r}")
