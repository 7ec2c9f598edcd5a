"""
Business rules applied to the scored candidate list.

Order of application:

1. one candidate per ``business_id`` (the best-scoring one)
2. at most ``floor(sponsored_ratio * k)`` sponsored results
3. at least ``min_distinct_categories`` categories when the input has them,
   reached by swapping out the weakest member of an over-represented category
4. truncate to ``k``

Ordering is always ``final`` descending, then candidate id ascending, so the
output is reproducible for a given input.
"""
from __future__ import annotations

import logging
import math
from collections import Counter

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Recommendation, ScoredCandidate

logger = logging.getLogger(__name__)


def _rank_key(item: ScoredCandidate) -> tuple[float, str]:
    return (-item.score.final, item.candidate.id)


def _dedupe_businesses(ranked: list[ScoredCandidate]) -> list[ScoredCandidate]:
    seen: set[str] = set()
    survivors: list[ScoredCandidate] = []
    for item in ranked:
        business_id = item.candidate.business_id
        if business_id is not None:
            if business_id in seen:
                continue
            seen.add(business_id)
        survivors.append(item)
    return survivors


def _fill(pool: list[ScoredCandidate], k: int, max_sponsored: int) -> list[ScoredCandidate]:
    selected: list[ScoredCandidate] = []
    sponsored = 0
    for item in pool:
        if len(selected) >= k:
            break
        if item.candidate.is_sponsored:
            if sponsored >= max_sponsored:
                continue
            sponsored += 1
        selected.append(item)
    return selected


def _pick_victim(
    selected: list[ScoredCandidate],
    substitute: ScoredCandidate,
    max_sponsored: int,
) -> ScoredCandidate | None:
    """Lowest-scoring member of the most-represented category that may leave."""
    counts = Counter(item.candidate.category for item in selected)
    sponsored = sum(1 for item in selected if item.candidate.is_sponsored)
    need_sponsored_slot = substitute.candidate.is_sponsored and sponsored >= max_sponsored

    options = [
        item for item in selected
        if counts[item.candidate.category] >= 2
        and (not need_sponsored_slot or item.candidate.is_sponsored)
    ]
    if not options:
        return None

    # Most-represented category first, then the weakest item inside it.
    return max(
        options,
        key=lambda item: (counts[item.candidate.category], -item.score.final, item.candidate.id),
    )


def _enforce_diversity(
    selected: list[ScoredCandidate],
    pool: list[ScoredCandidate],
    k: int,
    max_sponsored: int,
    target: int,
    config: ScoringConfig,
) -> list[ScoredCandidate]:
    selected = list(selected)
    # Each successful pass adds one new category, so this is bounded by target.
    for _ in range(target):
        present = {item.candidate.category for item in selected}
        if len(present) >= target:
            break

        chosen_ids = {item.candidate.id for item in selected}
        sponsored = sum(1 for item in selected if item.candidate.is_sponsored)
        placed = False

        for substitute in pool:
            if substitute.candidate.id in chosen_ids or substitute.candidate.category in present:
                continue

            blocked_by_cap = substitute.candidate.is_sponsored and sponsored >= max_sponsored
            if len(selected) < k and not blocked_by_cap:
                selected.append(substitute)
                placed = True
                break

            victim = _pick_victim(selected, substitute, max_sponsored)
            if victim is None:
                continue
            if substitute.score.final < config.diversity_min_score_ratio * victim.score.final:
                continue

            logger.debug(
                "Diversity swap: %s (%s) replaces %s (%s)",
                substitute.candidate.id, substitute.candidate.category,
                victim.candidate.id, victim.candidate.category,
            )
            selected = [item for item in selected if item is not victim]
            selected.append(substitute)
            placed = True
            break

        if not placed:
            logger.info(
                "Category diversity floor unreachable: %d of %d categories",
                len(present), target,
            )
            break

    return selected


def select(
    scored: list[ScoredCandidate],
    k: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Recommendation]:
    """Choose the final top-k list from scored candidates.

    Returns fewer than ``k`` items when the rules leave too few candidates.
    Explanations are left empty.
    """
    k = config.default_k if k is None else k
    if k < config.min_k:
        raise ValueError(f"k must be at least {config.min_k}, got {k}")

    if not scored:
        return []

    ranked = sorted(scored, key=_rank_key)
    pool = _dedupe_businesses(ranked)
    max_sponsored = math.floor(config.sponsored_ratio * k)

    selected = _fill(pool, k, max_sponsored)

    input_categories = {item.candidate.category for item in scored}
    target = min(config.min_distinct_categories, len(input_categories))
    selected = _enforce_diversity(selected, pool, k, max_sponsored, target, config)

    selected.sort(key=_rank_key)
    return [
        Recommendation(
            candidate=item.candidate,
            score=item.score,
            is_sponsored=item.candidate.is_sponsored,
        )
        for item in selected[:k]
    ]
