from __future__ import annotations

import json
import logging
import re
from typing import Any

from groq import Groq

from ..recommendations.models import Recommendation, UserProfile
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You write one-line reasons for activity suggestions in a local "
    "discovery app. For each suggestion, rewrite the draft reason into a short, "
    "warm sentence. Keep every fact from the draft and add none.\n\n"
    "Never mention scores, points, percentages or rankings.\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"explanations": [{"id": "<suggestion_id>", "reason": "<one sentence>"}]}\n'
    "Include only suggestions from the provided list."
)

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


def _build_user_message(
    user_profile: UserProfile,
    recommendations: list[Recommendation],
) -> str:
    lines = ["## User"]
    if user_profile.interests:
        lines.append(f"- Interests: {', '.join(i.replace('_', ' ') for i in user_profile.interests)}")
    if user_profile.preferred_times:
        lines.append(f"- Likes going out: {', '.join(sorted(t.value for t in user_profile.preferred_times))}")

    lines.append("\n## Suggestions")
    lines.append("| ID | Name | Category | Draft reason |")
    lines.append("|---|---|---|---|")
    for rec in recommendations:
        c = rec.candidate
        lines.append(
            f"| {c.id} | {c.name or '?'} | {c.category.replace('_', ' ')} | {rec.explanation} |"
        )

    return "\n".join(lines)


def _usable(reason: str, draft: str, config: LLMConfig) -> bool:
    if not reason or len(reason) > config.max_sentence_length:
        return False
    # Only numbers already in the draft (distances) may appear.
    allowed = set(_NUMBER_RE.findall(draft))
    return all(number in allowed for number in _NUMBER_RE.findall(reason))


def rewrite_explanations(
    user_profile: UserProfile,
    recommendations: list[Recommendation],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, str]:
    """
    Ask the Groq LLM to polish templated explanations.

    Returns a dict mapping candidate id -> sentence. Returns an empty dict on
    any failure (timeout, bad JSON, API error), so callers keep the templates.
    """
    if not config.enabled or not config.api_key:
        return {}

    if not recommendations:
        return {}

    drafts = {rec.candidate.id: rec.explanation for rec in recommendations}

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": _build_user_message(user_profile, recommendations),
                },
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        parsed: dict[str, Any] = json.loads(content)

        results: dict[str, str] = {}
        for item in parsed.get("explanations", []):
            cid = str(item.get("id", ""))
            reason = str(item.get("reason", "")).strip()
            if cid in drafts and _usable(reason, drafts[cid], config):
                results[cid] = reason

        return results

    except Exception:
        logger.warning("Groq explanation rewrite failed, keeping templated explanations", exc_info=True)
        return {}
