"""codemax - streaming chat adapters for Gemini and local Ollama servers."""

__version__ = "0.1.0"
