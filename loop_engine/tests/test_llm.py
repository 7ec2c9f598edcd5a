import json
from unittest.mock import MagicMock, patch

from loop_engine.llm.config import LLMConfig
from loop_engine.llm.groq_client import rewrite_explanations
from loop_engine.recommendations.models import (
    Candidate,
    GeoPoint,
    Recommendation,
    ScoreBreakdown,
    UserProfile,
)

SAMPLE_USER = UserProfile(interests=["coffee", "museum"])

_BREAKDOWN = ScoreBreakdown(
    base=40, location=20, time=15, feedback=5, collaborative=5, final=85, distance=0.3,
)

SAMPLE_RECOMMENDATIONS = [
    Recommendation(
        candidate=Candidate(
            id="1", name="Bean There", category="coffee",
            location=GeoPoint(latitude=40.0, longitude=-74.0),
        ),
        score=_BREAKDOWN,
        explanation="Matches your interest in coffee, 0.3 miles away.",
    ),
    Recommendation(
        candidate=Candidate(
            id="2", name="City Museum", category="museum",
            location=GeoPoint(latitude=40.01, longitude=-74.0),
        ),
        score=_BREAKDOWN,
        explanation="Matches your interest in museum.",
    ),
]

ENABLED_CONFIG = LLMConfig(api_key="test-key", enabled=True)
DISABLED_CONFIG = LLMConfig(api_key="test-key", enabled=False)


def _mock_groq_response(content: str) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_returns_reasons(mock_groq_cls):
    llm_response = json.dumps({
        "explanations": [
            {"id": "1", "reason": "Your kind of coffee spot, just 0.3 miles away."},
            {"id": "2", "reason": "A museum right up your alley."},
        ]
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    assert result["1"] == "Your kind of coffee spot, just 0.3 miles away."
    assert result["2"] == "A museum right up your alley."


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_drops_unknown_ids_and_invented_numbers(mock_groq_cls):
    llm_response = json.dumps({
        "explanations": [
            {"id": "2", "reason": "A 95% match for your museum love."},
            {"id": "99", "reason": "Not one of ours."},
            {"id": "1", "reason": ""},
        ]
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    assert result == {}


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_drops_scores_next_to_draft_distances(mock_groq_cls):
    llm_response = json.dumps({
        "explanations": [
            {"id": "1", "reason": "Scores 85 out of 100, just 0.3 miles away."},
            {"id": "2", "reason": "A museum right up your alley."},
        ]
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    assert "1" not in result
    assert result == {"2": "A museum right up your alley."}


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_drops_changed_distance(mock_groq_cls):
    llm_response = json.dumps({
        "explanations": [{"id": "1", "reason": "Great coffee only 0.5 miles away."}]
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    assert result == {}


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_drops_overlong_sentences(mock_groq_cls):
    llm_response = json.dumps({
        "explanations": [{"id": "2", "reason": "A museum " * 40}]
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    assert result == {}


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_fallback_on_api_error(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")

    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    assert result == {}


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_fallback_on_bad_json(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response("not valid json{{{")

    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    assert result == {}


@patch("loop_engine.llm.groq_client.Groq")
def test_rewrite_explanations_sends_drafts(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response('{"explanations": []}')

    rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=ENABLED_CONFIG)

    kwargs = mock_groq_cls.return_value.chat.completions.create.call_args.kwargs
    user_message = kwargs["messages"][1]["content"]
    assert "Bean There" in user_message
    assert "Matches your interest in museum." in user_message
    assert kwargs["response_format"] == {"type": "json_object"}


def test_rewrite_explanations_disabled():
    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=DISABLED_CONFIG)

    assert result == {}


def test_rewrite_explanations_without_api_key():
    result = rewrite_explanations(SAMPLE_USER, SAMPLE_RECOMMENDATIONS, config=LLMConfig(api_key=""))

    assert result == {}


def test_rewrite_explanations_empty_recommendations():
    result = rewrite_explanations(SAMPLE_USER, [], config=ENABLED_CONFIG)

    assert result == {}
