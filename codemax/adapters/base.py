"""
ChunkCallback Protocol - the contract both streaming adapters report through.

See gemini.py and ollama.py for the adapters that call it.
"""

from typing import Protocol


class ChunkCallback(Protocol):
    """
    Cumulative-snapshot callback.

    Called synchronously once per received fragment with the ENTIRE text
    assembled so far, not just the newest increment. Consumers can render
    the argument directly as the full visible output.
    """

    def __call__(self, text: str) -> None:
        ...
