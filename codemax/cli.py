"""CLI entry point for codemax.

Streams a code-generation turn from Gemini or a local Ollama server to the
terminal. Same adapters a UI would call.

Entry point:
    codemax models [--json]
    codemax chat "<prompt>" [--model <tier|id>] [--provider gemini|ollama]
                 [--history <file>] [--attach <file> ...] [-o out.html]
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import httpx
from google.genai import errors as genai_errors
from pydantic import TypeAdapter

from codemax.adapters import (
    Message,
    OllamaError,
    Part,
    stream_gemini_chat,
    stream_ollama_chat,
)
from codemax.config import DEFAULT_MODEL_TIER, MODELS, get_ollama_url, resolve_model

logger = logging.getLogger(__name__)

_HISTORY_ADAPTER = TypeAdapter(list[Message])


# ─────────────────────────────────────────────────────────────────────
# ARGUMENT PARSING
# ─────────────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codemax",
        description="Stream generated source code from Gemini or Ollama.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    # models
    models_p = sub.add_parser("models", help="List model tiers")
    models_p.add_argument(
        "--json", action="store_true", dest="json_output",
        help="Print the tier table as JSON",
    )

    # chat
    chat_p = sub.add_parser("chat", help="Send a prompt and stream the reply")
    chat_p.add_argument("prompt", help="User prompt text")
    chat_p.add_argument(
        "--model", default=None,
        help=f"Tier name or model ID (default: {DEFAULT_MODEL_TIER}; required for ollama)",
    )
    chat_p.add_argument(
        "--provider", choices=["gemini", "ollama"], default="gemini",
        help="Backend to stream from (default: gemini)",
    )
    chat_p.add_argument("--ollama-url", default=None, help="Ollama base URL (default: $OLLAMA_URL)")
    chat_p.add_argument("--history", default=None, help="JSON file with prior messages")
    chat_p.add_argument(
        "--attach", action="append", default=[], metavar="FILE",
        help="Attach a file as inline data (repeatable)",
    )
    chat_p.add_argument("-o", "--output", default=None, help="Also write the final text to this file")

    return parser


# ─────────────────────────────────────────────────────────────────────
# COMMANDS
# ─────────────────────────────────────────────────────────────────────


def _cmd_models(json_output: bool = False) -> int:
    """Print the model tier table. Returns exit code."""
    if json_output:
        json.dump(dict(MODELS), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for tier, model_id in MODELS.items():
            print(f"{tier}\t{model_id}")
    return 0


def load_history(path: str) -> list[Message]:
    """Load a list of messages from a JSON file."""
    return _HISTORY_ADAPTER.validate_json(Path(path).read_bytes())


class _TerminalPrinter:
    """Writes only the new suffix of each cumulative snapshot."""

    def __init__(self, stream=None):
        self._stream = stream or sys.stdout
        self._shown = 0

    def __call__(self, text: str) -> None:
        self._stream.write(text[self._shown:])
        self._stream.flush()
        self._shown = len(text)


async def _cmd_chat(
    prompt: str,
    model: Optional[str],
    provider: str,
    ollama_url: Optional[str] = None,
    history_path: Optional[str] = None,
    attachments: Sequence[str] = (),
    output: Optional[str] = None,
) -> int:
    """Stream one chat turn to stdout. Returns exit code."""
    if provider == "ollama" and not model:
        raise ValueError("--model is required with --provider ollama")

    history = load_history(history_path) if history_path else []
    history.append(Message.user(prompt, [Part.from_file(p) for p in attachments]))

    printer = _TerminalPrinter()
    if provider == "ollama":
        # Local tags are used as given; tier names only map to Gemini models
        base_url = ollama_url or get_ollama_url()
        text = await stream_ollama_chat(base_url, model, history, printer)
    else:
        text = await stream_gemini_chat(resolve_model(model or DEFAULT_MODEL_TIER), history, printer)
    sys.stdout.write("\n")

    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"Output written to {output}", file=sys.stderr)

    return 0


# ─────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────


def main(argv: Optional[Sequence[str]] = None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s %(message)s", stream=sys.stderr)

    # Load env
    from dotenv import load_dotenv
    load_dotenv()

    # Dispatch
    if args.command == "models":
        code = _cmd_models(json_output=args.json_output)
    elif args.command == "chat":
        try:
            code = asyncio.run(_cmd_chat(
                prompt=args.prompt,
                model=args.model,
                provider=args.provider,
                ollama_url=args.ollama_url,
                history_path=args.history,
                attachments=args.attach,
                output=args.output,
            ))
        except (OllamaError, ValueError, OSError,
                httpx.HTTPError, genai_errors.APIError) as e:
            logger.debug("chat failed", exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            code = 1
    else:
        parser.print_help()
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
