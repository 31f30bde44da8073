"""Manual license overrides for project attributions."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import NamedTuple

from license_bom.constants import OVERRIDE_CONFIDENCE
from license_bom.models.attribution import LicenseEntry, ProjectAttribution
from license_bom.models.config import ProjectOverride


class OverrideResult(NamedTuple):
    """Attributions after applying overrides.

    Attributes:
        attributions: Final confident attributions.
        errors: Projects still needing attention.
    """

    attributions: list[ProjectAttribution]
    errors: list[ProjectAttribution]


def collect_overrides(overrides: Iterable[ProjectOverride]) -> dict[str, list[str]]:
    """Gather forced license names per project, in first-seen order.

    Several entries for the same project accumulate their names. Entries
    without any license are skipped.
    """
    forced: dict[str, list[str]] = {}
    for override in overrides:
        if not override.licenses:
            continue
        names = forced.setdefault(override.project, [])
        names.extend(license.name for license in override.licenses)
    return forced


def _forced_attribution(project: str, names: list[str]) -> ProjectAttribution:
    return ProjectAttribution(
        project=project,
        licenses=[
            LicenseEntry(name=name, confidence=OVERRIDE_CONFIDENCE) for name in names
        ],
        overridden=True,
    )


def merge_overrides(
    attributions: Sequence[ProjectAttribution],
    errors: Sequence[ProjectAttribution],
    overrides: Iterable[ProjectOverride],
) -> OverrideResult:
    """Apply manual overrides to computed attributions.

    Overrides are authoritative: a matching attribution has its license
    list replaced, overrides for projects never attributed are appended as
    new attributions, and errors of overridden projects are dropped.
    Project name matching is case-sensitive.

    Args:
        attributions: Computed confident attributions.
        errors: Computed error entries.
        overrides: Override entries, in configuration order.

    Returns:
        OverrideResult with final attributions and remaining errors.
    """
    forced = collect_overrides(overrides)
    if not forced:
        return OverrideResult(attributions=list(attributions), errors=list(errors))

    pending = dict(forced)
    merged: list[ProjectAttribution] = []
    for attribution in attributions:
        names = pending.pop(attribution.project, None)
        if names is None:
            merged.append(attribution)
        else:
            merged.append(_forced_attribution(attribution.project, names))

    for project, names in pending.items():
        merged.append(_forced_attribution(project, names))

    remaining = [error for error in errors if error.project not in forced]
    return OverrideResult(attributions=merged, errors=remaining)
