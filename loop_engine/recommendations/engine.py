"""
Recommendation pipeline.

candidates + profiles + context
    -> score (scoring.py)
    -> sponsor boost (sponsor.py)
    -> business rules / top-k (rules.py)
    -> explanations (explain.py, optionally polished by llm/)
"""
from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..learning.models import AIProfile
from ..llm.config import LLMConfig
from ..llm.groq_client import rewrite_explanations
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .explain import explain_all
from .models import (
    Candidate,
    Recommendation,
    RecommendationResponse,
    ScoringContext,
    UserProfile,
)
from .rules import select
from .scoring import score_candidates

logger = logging.getLogger(__name__)


def _apply_llm_explanations(
    user_profile: UserProfile,
    recommendations: list[Recommendation],
    llm_config: LLMConfig,
) -> list[Recommendation]:
    rewritten = rewrite_explanations(user_profile, recommendations, config=llm_config)
    if not rewritten:
        return recommendations
    return [
        rec.model_copy(update={"explanation": rewritten[rec.candidate.id]})
        if rec.candidate.id in rewritten else rec
        for rec in recommendations
    ]


def generate_recommendations(
    candidates: list[Candidate],
    user_profile: UserProfile,
    ai_profile: AIProfile | None = None,
    context: ScoringContext | None = None,
    k: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    llm_config: LLMConfig | None = None,
) -> RecommendationResponse:
    """Turn a candidate list into an ordered, explained top-k response.

    An empty candidate list is a valid outcome and yields an empty response.
    Explanations are templated unless an ``llm_config`` is passed.
    """
    start_time = time.time()
    k = config.default_k if k is None else k
    ai_profile = ai_profile or AIProfile()
    context = context or ScoringContext()

    scored = score_candidates(candidates, user_profile, ai_profile, context, config)
    selected = select(scored, k, config)
    recommendations = explain_all(selected, config)

    if llm_config is not None and recommendations:
        recommendations = _apply_llm_explanations(user_profile, recommendations, llm_config)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("recommend", {
        "k": k,
        "total_candidates": len(candidates),
        "results_returned": len(recommendations),
        "sponsored_returned": sum(1 for r in recommendations if r.is_sponsored),
        "categories": [r.candidate.category for r in recommendations],
        "response_time_ms": elapsed_ms,
    })

    if not recommendations:
        logger.info("No recommendations available from %d candidates", len(candidates))
    else:
        logger.info(
            "Generated %d recommendations from %d candidates in %.1f ms",
            len(recommendations), len(candidates), elapsed_ms,
        )

    return RecommendationResponse(
        recommendations=recommendations,
        total_candidates=len(candidates),
    )
