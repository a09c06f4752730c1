"""
Configuration constants and environment lookups for codemax.
"""

import os
from types import MappingProxyType
from typing import Mapping, Optional


# ─────────────────────────────────────────────────────────────────────
# MODEL TIERS - Logical tier name -> provider model identifier
# ─────────────────────────────────────────────────────────────────────

MODELS: Mapping[str, str] = MappingProxyType({
    "CODEMAX_13": "gemini-3-flash-preview",
    "CODEMAX_PRO": "gemini-3-pro-preview",
    "CODEMAX_BETA": "gemini-3-pro-preview",
    # Flash stands in for high-speed Gemma 3 tasks
    "GEMMA_3": "gemini-3-flash-preview",
})

DEFAULT_MODEL_TIER: str = "CODEMAX_13"


def resolve_model(name: str) -> str:
    """
    Resolve a tier name (e.g. "CODEMAX_PRO") to a provider model identifier.

    Names that are not tiers are returned unchanged, so concrete model IDs
    (including local Ollama tags like "qwen2.5-coder:7b") pass straight through.

    Raises:
        ValueError: If name is empty
    """
    name = (name or "").strip()
    if not name:
        raise ValueError("Model name must not be empty")
    return MODELS.get(name, name)


# ─────────────────────────────────────────────────────────────────────
# SYSTEM INSTRUCTION - Injected into every session
# ─────────────────────────────────────────────────────────────────────

SYSTEM_INSTRUCTION: str = (
    "You are the Elite CodeMax Software Architect. \n"
    "Your output must consist ONLY of the requested source code. \n"
    "DO NOT provide any reasoning, explanations, conversational filler, or introductions. \n"
    "Return complete, production-ready, standalone HTML files including all necessary CSS and JavaScript. \n"
    "Never truncate code. Never hesitate. Never ask follow-up questions. \n"
    "If the user provides a prompt, translate it directly into the most efficient "
    "and visually stunning code possible. \n"
    "YOUR OUTPUT IS THE RAW SOURCE CODE ONLY."
)


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

DEFAULT_OLLAMA_URL: str = "http://localhost:11434"


def get_api_key() -> Optional[str]:
    """
    Get the Gemini API key from environment.

    API_KEY takes precedence; GEMINI_API_KEY is accepted as a fallback.
    Returns None when neither is set.
    """
    for key in ("API_KEY", "GEMINI_API_KEY"):
        value = os.environ.get(key, "").strip()
        if value:
            return value
    return None


def get_ollama_url() -> str:
    """
    Get the local Ollama server URL from environment or default.

    Set OLLAMA_URL in .env (default: http://localhost:11434).
    """
    url = os.environ.get("OLLAMA_URL", "").strip()
    return url or DEFAULT_OLLAMA_URL
