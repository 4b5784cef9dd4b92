"""Resolve a RequestDescriptor to a single download URL.

Each catalog kind has its own fallback composition and the two are never
mixed:

  TableCatalog       -> resolve_tiered(): numbered tiers tried strictly in
                        order, first artifact in document order wins.
  StructuredCatalog  -> resolve_scored(): every passing artifact is scored,
                        the best one wins, and empty passes retry with the
                        stepped-down accelerator tag and then ABI relaxation.

Tier plan for the table catalog (steps 2 and 4 exist only for cuda 12.9):

  1  restricted scope (variant subsection), requested cuda
  2  restricted scope, cuda 12.8
  3  full package scope, requested cuda
  4  full package scope, cuda 12.8
  5  steps 1-4 again with ABI relaxation, if the request allows it
"""

import logging

from pydantic import BaseModel, ConfigDict

from wheel_matrix.catalog.providers import StructuredCatalog, TableCatalog
from wheel_matrix.catalog.tags import step_down
from wheel_matrix.errors import ResolutionFailure
from wheel_matrix.resolve.predicates import artifact_matches, score_artifact
from wheel_matrix.resolve.schema import MatchFailure, MatchResult, MatchSuccess, RequestDescriptor

logger = logging.getLogger(__name__)

RELAXED_TIER = 5


class Tier(BaseModel):
    """One step of the table-catalog fallback plan."""

    model_config = ConfigDict(frozen=True)

    number: int
    label: str
    restricted: bool
    accelerator: str
    abi_relaxed: bool = False


# ─── Tiered Strategy (table catalog) ─────────────────────────────────────────


def plan_tiers(request: RequestDescriptor) -> list[Tier]:
    """Build the ordered tier list for *request*."""
    dotted = request.dotted_accelerator
    fallback = step_down(dotted)

    base: list[tuple[int, bool, str]] = [(1, True, dotted)]
    if fallback is not None:
        base.append((2, True, fallback))
    base.append((3, False, dotted))
    if fallback is not None:
        base.append((4, False, fallback))

    tiers = [
        Tier(number=n, label=f"tier {n} ({_scope_name(restricted)}, cuda={accel})", restricted=restricted, accelerator=accel)
        for n, restricted, accel in base
    ]
    if request.allow_abi_relaxation:
        tiers += [
            Tier(
                number=RELAXED_TIER,
                label=f"tier {RELAXED_TIER} (repeat of tier {n} with ABI relaxation, {_scope_name(restricted)}, cuda={accel})",
                restricted=restricted,
                accelerator=accel,
                abi_relaxed=True,
            )
            for n, restricted, accel in base
        ]
    return tiers


def _scope_name(restricted: bool) -> str:
    return "restricted scope" if restricted else "full scope"


def resolve_tiered(catalog: TableCatalog, request: RequestDescriptor) -> MatchResult:
    """First artifact, in document order, that satisfies the earliest possible tier."""
    attempted: list[str] = []
    for tier in plan_tiers(request):
        attempted.append(tier.label)
        artifacts = catalog.iter_artifacts(request.package_name, request.variant_filter, restricted=tier.restricted)
        for artifact in artifacts:
            if artifact_matches(artifact, request, tier.accelerator, tier.abi_relaxed):
                logger.info("Resolved %s via %s: %s", request.describe(), tier.label, artifact.url)
                return MatchSuccess(url=artifact.url, artifact=artifact, tier_used=tier.number, tier_label=tier.label)
        logger.debug("No match in %s", tier.label)

    failure = MatchFailure(
        request=request,
        reason="No compatible wheel in the compatibility table",
        tiers_attempted=attempted,
        abi_relaxation_tried=request.allow_abi_relaxation,
    )
    logger.warning("%s", failure.describe())
    return failure


# ─── Scored Strategy (structured catalog) ────────────────────────────────────


def _scored_pass(catalog: StructuredCatalog, request: RequestDescriptor, dotted: str, abi_relaxed: bool, attempted: list[str]) -> MatchSuccess | None:
    """Score every passing artifact for one (cuda, abi) combination; keep the first best."""
    step = len(attempted) + 1
    label = f"pass {step} (cuda={dotted}, abi relaxation {'on' if abi_relaxed else 'off'})"
    attempted.append(label)

    best = None
    best_score = -1
    for artifact in catalog.iter_artifacts(request.package_name, request.variant_filter):
        if not artifact_matches(artifact, request, dotted, abi_relaxed):
            continue
        score = score_artifact(artifact, request, dotted)
        logger.debug("Candidate %s scored %d", artifact.url, score)
        # Strictly greater: ties keep the earlier candidate
        if score > best_score:
            best, best_score = artifact, score

    if best is None:
        logger.debug("No candidates in %s", label)
        return None
    logger.info("Resolved %s via %s (score %d): %s", request.describe(), label, best_score, best.url)
    return MatchSuccess(url=best.url, artifact=best, tier_used=step, tier_label=label, score=best_score)


def _scored_search(
    catalog: StructuredCatalog,
    request: RequestDescriptor,
    dotted: str,
    abi_relaxed: bool,
    attempted: list[str],
    escalate: bool,
) -> MatchSuccess | None:
    found = _scored_pass(catalog, request, dotted, abi_relaxed, attempted)
    if found is not None:
        return found

    fallback = step_down(dotted)
    if fallback is not None:
        found = _scored_search(catalog, request, fallback, abi_relaxed, attempted, escalate=False)
        if found is not None:
            return found

    # Only the outermost search escalates, so each (cuda, abi) pass runs once
    if escalate and not abi_relaxed:
        return _scored_search(catalog, request, dotted, True, attempted, escalate=False)
    return None


def resolve_scored(catalog: StructuredCatalog, request: RequestDescriptor) -> MatchResult:
    """Highest-scoring artifact for the requested cuda tag, with step-down and ABI retries.

    The ABI-relaxed retry happens whether or not the request allows it.
    """
    attempted: list[str] = []
    found = _scored_search(catalog, request, request.dotted_accelerator, request.allow_abi_relaxation, attempted, escalate=True)
    if found is not None:
        return found

    failure = MatchFailure(
        request=request,
        reason="No compatible wheel in the wheel index",
        tiers_attempted=attempted,
        abi_relaxation_tried=True,
    )
    logger.warning("%s", failure.describe())
    return failure


# ─── Entry Points ─────────────────────────────────────────────────────────────


def resolve(catalog: TableCatalog | StructuredCatalog, request: RequestDescriptor) -> MatchResult:
    """Dispatch to the strategy that belongs to the catalog kind."""
    if isinstance(catalog, TableCatalog):
        return resolve_tiered(catalog, request)
    if isinstance(catalog, StructuredCatalog):
        return resolve_scored(catalog, request)
    raise TypeError(f"Unsupported catalog type: {type(catalog).__name__}")


def resolve_url(catalog: TableCatalog | StructuredCatalog, request: RequestDescriptor) -> str:
    """Return the resolved URL, raising ResolutionFailure when nothing matches."""
    result = resolve(catalog, request)
    if isinstance(result, MatchFailure):
        raise ResolutionFailure(result)
    return result.url
