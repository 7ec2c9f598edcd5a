from __future__ import annotations

from collections import Counter
from typing import Any

from .feedback import feedback_stats


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    runs = [e for e in events if e["type"] == "recommend"]
    total = len(runs)

    # Average response time
    times = [r["response_time_ms"] for r in runs if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Candidate and result volume
    avg_candidates = round(sum(r.get("total_candidates", 0) for r in runs) / total, 1) if total else 0.0
    returned = sum(r.get("results_returned", 0) for r in runs)
    avg_returned = round(returned / total, 1) if total else 0.0
    empty_runs = sum(1 for r in runs if r.get("results_returned", 0) == 0)

    # Sponsored share across everything shown
    sponsored = sum(r.get("sponsored_returned", 0) for r in runs)
    sponsored_share = round(sponsored / returned * 100, 1) if returned else 0.0

    # Top recommended categories
    category_counter: Counter[str] = Counter()
    for r in runs:
        for c in r.get("categories", []) or []:
            category_counter[c] += 1
    top_categories = [{"name": n, "count": c} for n, c in category_counter.most_common(10)]

    return {
        "total_runs": total,
        "avg_response_time_ms": avg_time,
        "avg_candidates": avg_candidates,
        "avg_returned": avg_returned,
        "empty_runs": empty_runs,
        "sponsored_share": sponsored_share,
        "top_categories": top_categories,
        "feedback_summary": feedback_stats(),
    }
