"""
Ollama adapter - streams a chat through a locally hosted Ollama server.

Unlike the Gemini adapter, the ENTIRE history is forwarded on every call.
The local /api/chat schema carries text only, so inline attachments are
not sent.
"""

import json
import logging
from typing import Optional, Sequence

import httpx

from codemax.adapters.base import ChunkCallback
from codemax.adapters.schema import Message
from codemax.config import SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)


class OllamaError(Exception):
    """Explicit failure reported by (or about) an Ollama server."""
    pass


def _parse_ollama_error(body: bytes) -> str:
    """Extract a readable message from an Ollama error body."""
    try:
        data = json.loads(body)
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
    except (json.JSONDecodeError, UnicodeDecodeError):
        pass
    return body.decode("utf-8", errors="replace")[:200]


def build_ollama_messages(
    history: Sequence[Message],
    system_instruction: str = SYSTEM_INSTRUCTION,
) -> list[dict]:
    """
    Convert history to Ollama chat messages with a leading system message.

    Role "model" becomes "assistant"; text parts are joined with newlines.
    """
    messages = [{"role": "system", "content": system_instruction}]
    messages.extend(
        {
            "role": "assistant" if msg.role == "model" else "user",
            "content": msg.get_text(),
        }
        for msg in history
    )
    return messages


async def stream_ollama_chat(
    base_url: str,
    model_name: str,
    history: Sequence[Message],
    on_chunk: ChunkCallback,
    *,
    system_instruction: str = SYSTEM_INSTRUCTION,
    timeout_seconds: Optional[float] = None,
) -> str:
    """
    Stream a chat reply from an Ollama server.

    The response body is newline-delimited JSON. Lines are reassembled across
    read boundaries; a line that still fails to parse is skipped.

    Args:
        base_url: Server address, e.g. "http://localhost:11434"
        model_name: Model tag known to the server
        history: Full conversation, forwarded in order
        on_chunk: Called with the cumulative text after every content fragment
        system_instruction: Prepended as a system-role message
        timeout_seconds: None waits indefinitely

    Returns:
        The fully accumulated reply text

    Raises:
        OllamaError: On a non-2xx status after redirects, or an empty response body
        httpx.HTTPError: On transport failure
    """
    if not model_name:
        raise ValueError("Model name must not be empty")

    url = f"{base_url.rstrip('/')}/api/chat"
    payload = {
        "model": model_name,
        "messages": build_ollama_messages(history, system_instruction),
        "stream": True,
    }
    logger.debug("POST %s model=%s messages=%d", url, model_name, len(payload["messages"]))

    full_text = ""
    # Redirects are followed like a browser fetch; anything still non-2xx fails
    async with httpx.AsyncClient(timeout=timeout_seconds, follow_redirects=True) as client:
        async with client.stream("POST", url, json=payload) as response:
            if not response.is_success:
                error_body = await response.aread()
                raise OllamaError(
                    f"Ollama error for '{model_name}' (HTTP {response.status_code}): "
                    f"{_parse_ollama_error(error_body)}"
                )

            async for line in response.aiter_lines():
                if not line.strip():
                    continue
                try:
                    chunk = json.loads(line)
                except json.JSONDecodeError:
                    logger.debug("Skipping unparseable line: %r", line[:80])
                    continue

                if isinstance(chunk, dict) and chunk.get("error"):
                    logger.warning("Ollama reported an error mid-stream for %s: %s", model_name, chunk["error"])
                    continue

                message = chunk.get("message") if isinstance(chunk, dict) else None
                content = message.get("content") if isinstance(message, dict) else None
                if isinstance(content, str) and content:
                    full_text += content
                    on_chunk(full_text)

            if response.num_bytes_downloaded == 0:
                raise OllamaError(
                    f"Ollama stream failed for '{model_name}': empty response body"
                )

    return full_text
