"""License attribution logic for license-bom."""
from license_bom.analysis.aggregate import (
    AttributionSplit,
    MatchCache,
    group_licenses,
    list_licenses,
    longest_common_prefix,
    remove_vendor,
    to_project_attributions,
    truncate_confidence,
)
from license_bom.analysis.filtering import FilterResult, filter_ignored_packages
from license_bom.analysis.matcher import dice_score, match_templates, match_word_set
from license_bom.analysis.normalize import (
    clean_license_text,
    make_word_set,
    tokenize,
)
from license_bom.analysis.overrides import (
    OverrideResult,
    collect_overrides,
    merge_overrides,
)

__all__ = [
    "AttributionSplit",
    "FilterResult",
    "MatchCache",
    "OverrideResult",
    "clean_license_text",
    "collect_overrides",
    "dice_score",
    "filter_ignored_packages",
    "group_licenses",
    "list_licenses",
    "longest_common_prefix",
    "make_word_set",
    "match_templates",
    "match_word_set",
    "merge_overrides",
    "remove_vendor",
    "to_project_attributions",
    "tokenize",
    "truncate_confidence",
]
