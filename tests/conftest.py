"""Shared test fixtures for codemax tests."""

import json

import pytest


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

MOCK_OLLAMA_URL = "http://192.168.1.10:11434"
MOCK_OLLAMA_CHAT_URL = f"{MOCK_OLLAMA_URL}/api/chat"

MOCK_GEMINI_MODEL = "gemini-3-flash-preview"
MOCK_OLLAMA_MODEL = "qwen2.5-coder:7b"

# Real Ollama /api/chat stream shape; the final line carries no content
MOCK_OLLAMA_STREAM_LINES = [
    {"model": MOCK_OLLAMA_MODEL, "message": {"role": "assistant", "content": "<!DOCTYPE"}, "done": False},
    {"model": MOCK_OLLAMA_MODEL, "message": {"role": "assistant", "content": " html>"}, "done": False},
    {"model": MOCK_OLLAMA_MODEL, "message": {"role": "assistant", "content": "\n<html></html>"}, "done": False},
    {"model": MOCK_OLLAMA_MODEL, "message": {"role": "assistant", "content": ""}, "done": True,
     "done_reason": "stop", "total_duration": 1200000},
]


def ndjson(lines) -> str:
    """Join objects (or raw strings) into a newline-delimited JSON body."""
    return "".join(
        (line if isinstance(line, str) else json.dumps(line)) + "\n"
        for line in lines
    )


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Data Models
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def sample_history():
    """Return a short conversation ending with a user turn."""
    from codemax.adapters.schema import Message
    return [
        Message.user("Build a landing page"),
        Message.model("<html>v1</html>", model_name=MOCK_GEMINI_MODEL),
        Message.user("Make the header blue"),
    ]


@pytest.fixture
def recorder():
    """Return a cumulative-snapshot callback that records every call."""

    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, text: str) -> None:
            self.calls.append(text)

    return Recorder()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable codemax reads."""
    for key in ("API_KEY", "GEMINI_API_KEY", "OLLAMA_URL"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
