"""
Backend adapters for the supported text-generation services.
"""

from .base import HTTPBackendAdapter
from .anthropic_adapter import AnthropicAdapter
from .openai_adapter import OpenAIAdapter
from .google_adapter import GoogleAdapter
from .groq_adapter import GroqAdapter
from .ollama_adapter import OllamaAdapter

__all__ = [
    "HTTPBackendAdapter",
    "AnthropicAdapter",
    "OpenAIAdapter",
    "GoogleAdapter",
    "GroqAdapter",
    "OllamaAdapter",
]
