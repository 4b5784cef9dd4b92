"""Per-field match rules shared by the tiered and scored strategies.

Every rule is permissive on absence: an artifact that does not publish a
framework, accelerator or language value is compatible with any request for
that field.
"""

import re

from wheel_matrix.catalog.patterns import ABI_FLAG_KEYS, ABI_NEUTRAL_RE
from wheel_matrix.catalog.schema import Artifact
from wheel_matrix.catalog.tags import major_minor, to_compact, to_dotted
from wheel_matrix.errors import InvalidTag
from wheel_matrix.resolve.schema import RequestDescriptor

# Score weights for the structured-catalog strategy
SCORE_EXACT_FRAMEWORK = 3
SCORE_MINOR_FRAMEWORK = 2
SCORE_ACCELERATOR = 2
SCORE_LANGUAGE = 1
SCORE_ABI_FLAG = 1


# ─── Field Rules ──────────────────────────────────────────────────────────────


def framework_matches(value: str | None, requested: str) -> bool:
    """Exact version match, or the same major.minor ('2.8' matches '2.8.0')."""
    if value is None:
        return True
    if value == requested:
        return True
    have, want = major_minor(value), major_minor(requested)
    return have is not None and have == want


def accelerator_matches(value: str | None, dotted: str) -> bool:
    """Normalised tag equality, or the requested tag appearing inside a noisy cell."""
    if value is None:
        return True
    try:
        if to_dotted(value) == dotted:
            return True
    except InvalidTag:
        pass
    return dotted in value or to_compact(dotted) in value.lower()


def language_contains(value: str, requested: str) -> bool:
    """True if the cell names the requested major.minor ('3.13' or 'cp313')."""
    wanted = major_minor(requested) or requested.strip()
    if re.search(rf"(?<![\d.]){re.escape(wanted)}(?!\d)", value):
        return True
    compact = "cp" + wanted.replace(".", "")
    return re.search(rf"{re.escape(compact)}(?!\d)", value, re.IGNORECASE) is not None


def language_matches(value: str | None, requested: str, abi_relaxed: bool = False) -> bool:
    """Language tag rule; with *abi_relaxed* a version-neutral build matches anything."""
    if value is None:
        return True
    if abi_relaxed and ABI_NEUTRAL_RE.search(value):
        return True
    return language_contains(value, requested)


def artifact_matches(artifact: Artifact, request: RequestDescriptor, dotted: str, abi_relaxed: bool) -> bool:
    """Apply all three field rules against *dotted*, which may be a stepped-down tag."""
    return (
        framework_matches(artifact.framework_version, request.framework_version)
        and accelerator_matches(artifact.accelerator_tag, dotted)
        and language_matches(artifact.language_tag, request.language_tag, abi_relaxed)
    )


# ─── Scoring ──────────────────────────────────────────────────────────────────


def has_abi_flag(raw_record: dict) -> bool:
    """True if the raw record carries a truthy prebuilt-ABI flag."""
    for key in ABI_FLAG_KEYS:
        value = raw_record.get(key)
        if value is True or (isinstance(value, str) and value.strip().lower() in ("true", "yes", "1")):
            return True
    return False


def score_artifact(artifact: Artifact, request: RequestDescriptor, dotted: str) -> int:
    """Rank a candidate that already passed artifact_matches().

    Only published fields earn points, so a fully specified wheel outranks
    one that matched by leaving columns blank.
    """
    score = 0
    if artifact.framework_version is not None:
        if artifact.framework_version == request.framework_version:
            score += SCORE_EXACT_FRAMEWORK
        elif framework_matches(artifact.framework_version, request.framework_version):
            score += SCORE_MINOR_FRAMEWORK
    if artifact.accelerator_tag is not None and accelerator_matches(artifact.accelerator_tag, dotted):
        score += SCORE_ACCELERATOR
    if artifact.language_tag is not None and language_contains(artifact.language_tag, request.language_tag):
        score += SCORE_LANGUAGE
    if has_abi_flag(artifact.raw_record):
        score += SCORE_ABI_FLAG
    return score
