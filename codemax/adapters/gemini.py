"""
Gemini adapter - streams a chat turn through the hosted Gemini API.

Each call opens a fresh chat session (no reuse across calls) and sends only
the last history entry. Callers own any conversation memory; prior turns are
not replayed to the provider.
"""

import logging
from typing import Any, Optional, Sequence

from google import genai
from google.genai import types

from codemax.adapters.base import ChunkCallback
from codemax.adapters.schema import Message, Part
from codemax.config import SYSTEM_INSTRUCTION, get_api_key

logger = logging.getLogger(__name__)


def _to_genai_parts(parts: Sequence[Part]) -> list[types.Part]:
    """
    Convert message parts to SDK parts. Inline data is sent as raw bytes.

    Parts with neither text nor inline data are dropped; the API rejects
    empty text parts.
    """
    converted = []
    for part in parts:
        if part.inline_data is not None:
            converted.append(types.Part.from_bytes(
                data=part.inline_data.to_bytes(),
                mime_type=part.inline_data.mime_type,
            ))
        elif part.text:
            converted.append(types.Part.from_text(text=part.text))
    return converted


def _build_client(api_key: Optional[str]) -> genai.Client:
    api_key = api_key or get_api_key()
    if not api_key:
        raise ValueError(
            "Gemini API key required. "
            "Provide api_key parameter or set API_KEY environment variable."
        )
    return genai.Client(api_key=api_key)


async def _stream_session(
    client: Any,
    model_name: str,
    history: Sequence[Message],
    on_chunk: ChunkCallback,
    system_instruction: str,
) -> str:
    chat = client.aio.chats.create(
        model=model_name,
        config=types.GenerateContentConfig(
            system_instruction=system_instruction,
            # Direct output only, no intermediate deliberation
            thinking_config=types.ThinkingConfig(thinking_budget=0),
        ),
    )

    last_message = history[-1]
    logger.debug(
        "Sending %d part(s) to %s (history length %d)",
        len(last_message.parts), model_name, len(history),
    )

    full_text = ""
    async for chunk in await chat.send_message_stream(
        message=_to_genai_parts(last_message.parts)
    ):
        full_text += chunk.text or ""
        on_chunk(full_text)

    logger.debug("Gemini stream for %s finished: %d chars", model_name, len(full_text))
    return full_text


async def stream_gemini_chat(
    model_name: str,
    history: Sequence[Message],
    on_chunk: ChunkCallback,
    *,
    api_key: Optional[str] = None,
    system_instruction: str = SYSTEM_INSTRUCTION,
    client: Optional[Any] = None,
) -> str:
    """
    Stream a reply to the last turn of history from Gemini.

    Args:
        model_name: Gemini model identifier (e.g. "gemini-3-flash-preview")
        history: Conversation so far; the last entry is the new user turn
        on_chunk: Called with the cumulative text after every fragment
        api_key: Falls back to API_KEY / GEMINI_API_KEY env vars
        system_instruction: Instruction configured on the session
        client: Pre-built genai.Client; skips API key lookup when given and
            is left open for the caller to reuse

    Returns:
        The fully accumulated reply text

    Raises:
        ValueError: On empty model name, empty history, or missing API key.
        SDK errors from session creation, send or iteration propagate unchanged.
    """
    if not model_name:
        raise ValueError("Model name must not be empty")
    if not history:
        raise ValueError("History must contain at least one message")

    if client is not None:
        return await _stream_session(client, model_name, history, on_chunk, system_instruction)

    # Client built here is scoped to this call
    client = _build_client(api_key)
    try:
        return await _stream_session(client, model_name, history, on_chunk, system_instruction)
    finally:
        await client.aio.aclose()
