"""Template matching.

Scores a license text against every template with the Dice coefficient
over the two word sets and keeps the best one, along with the words that
explain the difference.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Union

from license_bom.analysis.normalize import make_word_set
from license_bom.models.match import MatchResult
from license_bom.models.template import LicenseTemplate, WordSet

logger = logging.getLogger(__name__)

# Best score before any template has been evaluated
NO_TEMPLATE_SCORE = -1.0


def dice_score(sample: WordSet, template: WordSet) -> float:
    """Dice coefficient between two word sets.

    Args:
        sample: Word set of the license text being matched.
        template: Word set of a template.

    Returns:
        2 * common / (|sample| + |template|), 0.0 when both are empty.
    """
    total = len(sample) + len(template)
    if total == 0:
        return 0.0
    common = sum(1 for word in sample if word in template)
    return 2.0 * common / total


def _ordered_difference(words: WordSet, other: WordSet) -> list[str]:
    """Words of ``words`` absent from ``other``, by first position."""
    absent = [word for word in words if word not in other]
    return sorted(absent, key=words.__getitem__)


def match_word_set(
    words: WordSet, templates: Iterable[LicenseTemplate]
) -> MatchResult:
    """Find the template closest to an already tokenized text.

    Ties keep the template met first, so corpus order decides between
    templates with equal scores.

    Args:
        words: Word set of the sample text.
        templates: Templates in corpus order.

    Returns:
        MatchResult for the best template. With no templates the score is
        -1 and no template is set. A sample without words, or one sharing
        no word with any template, yields score 0 and no template.
    """
    best_score = NO_TEMPLATE_SCORE
    best_template = None
    evaluated = 0

    for template in templates:
        evaluated += 1
        score = dice_score(words, template.words)
        if score > best_score:
            best_score = score
            best_template = template

    if best_template is None:
        logger.debug("No template available for matching")
        return MatchResult(score=NO_TEMPLATE_SCORE)

    if not words:
        return MatchResult(score=0.0)

    if best_score <= 0.0:
        logger.debug("No word shared with any of %d templates", evaluated)
        return MatchResult(score=0.0, extra_words=list(words))

    return MatchResult(
        template=best_template,
        score=best_score,
        extra_words=_ordered_difference(words, best_template.words),
        missing_words=_ordered_difference(best_template.words, words),
    )


def match_templates(
    data: Union[str, bytes], templates: Iterable[LicenseTemplate]
) -> MatchResult:
    """Match raw license text against templates.

    Args:
        data: License text or bytes.
        templates: Templates in corpus order.

    Returns:
        MatchResult for the best template.
    """
    return match_word_set(make_word_set(data), templates)
