"""Turn accumulated style statistics into rule settings."""

import logging
from collections import Counter

from lintinit.models import (
    RECOMMENDED,
    SEVERITY_ERROR,
    SEVERITY_OFF,
    STYLE_RULES,
    ConfigFragment,
    StyleStatistic,
)

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.5


def dominant_value(counter: Counter, threshold: float = DEFAULT_THRESHOLD):
    """Return the candidate whose share of observations exceeds ``threshold``.

    With the default of 0.5 the winner must outnumber all other candidates
    combined. Returns None for mixed usage or when nothing was observed.
    """
    total = sum(counter.values())
    if total == 0:
        return None
    value, count = min(counter.items(), key=lambda item: (-item[1], str(item[0])))
    if count / total > threshold:
        return value
    return None


def resolve_statistics(stats: StyleStatistic, threshold: float = DEFAULT_THRESHOLD) -> ConfigFragment:
    """Emit one setting per style rule: ``[2, value]`` when dominant, ``0`` when ambiguous.

    Only style rules are emitted, so nothing from eslint:recommended is turned off.
    """
    fragment = ConfigFragment(extends=RECOMMENDED)
    for rule in STYLE_RULES:
        counter = stats.counts.get(rule, Counter())
        value = dominant_value(counter, threshold)
        if value is None:
            logger.info("No dominant value for %s (%s), turning it off", rule, dict(counter) or "no data")
            fragment.rules[rule] = SEVERITY_OFF
        else:
            logger.debug("Inferred %s = %r from %s", rule, value, dict(counter))
            fragment.rules[rule] = [SEVERITY_ERROR, value]
    return fragment
