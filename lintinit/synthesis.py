"""Final synthesis: pick the prompt, style-guide or auto path and return the config."""

import logging

from config.config_loader import ScanConfig
from lintinit.answers import validate_answers
from lintinit.models import AnswerRecord, ConfigFragment
from lintinit.resolver import resolve_statistics
from lintinit.rules import map_answers, map_environment
from lintinit.scanner import ProgressReporter, scan
from lintinit.style_guides import resolve_style_guide

logger = logging.getLogger(__name__)


async def synthesize(
    answers: AnswerRecord,
    reporter: ProgressReporter | None = None,
    scan_config: ScanConfig | None = None,
) -> ConfigFragment:
    """Build the final configuration for one answer record.

    Args:
        answers: The validated-on-entry answer record.
        reporter: Optional progress reporter, advanced once per scanned file
            in auto mode. Its ``complete()`` is never called here.
        scan_config: File extensions, excluded directories and the dominance
            threshold for auto mode.

    Returns:
        The merged ConfigFragment.

    Raises:
        InvalidAnswersError: If the record is malformed.
        UnsupportedStyleGuideError: If ``answers.style_guide`` is unknown.
    """
    validate_answers(answers)

    if answers.style_guide:
        logger.info("Using style guide %s", answers.style_guide)
        return resolve_style_guide(answers.style_guide)

    if answers.source == "prompt":
        return map_answers(answers)

    scan_config = scan_config or ScanConfig()
    stats = await scan(answers.patterns, reporter=reporter, scan_config=scan_config, jsx=answers.jsx)
    logger.info(
        "Examined %d file(s), skipped %d",
        stats.files_scanned,
        len(stats.warnings),
    )
    inferred = resolve_statistics(stats, threshold=scan_config.dominance_threshold)
    return inferred.merge(map_environment(answers))
