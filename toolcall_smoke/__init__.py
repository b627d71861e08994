"""Tool-calling smoke harness for OpenAI-compatible chat-completion providers."""

__version__ = "1.0.0"
