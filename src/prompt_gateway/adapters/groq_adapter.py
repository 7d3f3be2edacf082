"""
Groq adapter (OpenAI-compatible API).
"""

from ..models.request import BackendIdentifier
from .openai_adapter import OpenAIAdapter


class GroqAdapter(OpenAIAdapter):
    """Adapter for Groq-hosted open models."""

    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
    VALIDATION_MODEL = "gemma2-9b-it"

    @property
    def backend(self) -> BackendIdentifier:
        return BackendIdentifier.GROQ
