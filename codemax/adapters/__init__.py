"""
Streaming chat adapters for LLM backends.

Both adapters share one contract: a model identifier, a message history, and
a cumulative-text callback in; the final assembled text out.
"""

from .base import ChunkCallback
from .gemini import stream_gemini_chat
from .ollama import OllamaError, stream_ollama_chat
from .schema import InlineData, Message, Part

__all__ = [
    "ChunkCallback",
    "InlineData",
    "Message",
    "OllamaError",
    "Part",
    "stream_gemini_chat",
    "stream_ollama_chat",
]
