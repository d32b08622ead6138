from __future__ import annotations

import os

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 20.0


def openai_api_key() -> str:
    key = os.getenv("OPENAI_API_KEY")

    if not key:
        raise RuntimeError("OPENAI_API_KEY environment variable is not set")

    return key


def openai_model() -> str:
    return os.getenv("OPENAI_MODEL") or DEFAULT_MODEL


def openai_timeout_seconds() -> float:
    return float(os.getenv("OPENAI_TIMEOUT_SECONDS") or DEFAULT_TIMEOUT_SECONDS)
