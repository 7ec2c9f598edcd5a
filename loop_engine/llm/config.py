from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Credentials and overrides live in the project-root .env
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LLMConfig:
    """Settings for the optional explanation rewriter."""

    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("LOOP_EXPLAIN_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 10.0
    max_tokens: int = 768
    temperature: float = 0.4
    max_sentence_length: int = 140
    enabled: bool = _env_flag("LOOP_LLM_EXPLANATIONS", True)


DEFAULT_LLM_CONFIG = LLMConfig()
