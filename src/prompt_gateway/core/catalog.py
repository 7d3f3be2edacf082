"""
Model catalog.

Static, curated model lists for hosted backends; the local backend's
models are discovered on every request.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..models.request import BackendIdentifier
from ..models.response import ModelDescriptor
from .errors import UnknownBackendError
from .interface import BackendCapability

logger = logging.getLogger(__name__)


def _model(id: str, display_name: str, description: str) -> ModelDescriptor:
    return ModelDescriptor(id=id, display_name=display_name, description=description)


# Ordered most-capable first; the first entry is the default selection.
STATIC_MODELS: Dict[BackendIdentifier, Tuple[ModelDescriptor, ...]] = {
    BackendIdentifier.ANTHROPIC: (
        _model("claude-opus-4-5-20251101", "Claude Opus 4.5", "Most capable"),
        _model("claude-sonnet-4-20250514", "Claude Sonnet 4", "Balanced"),
        _model("claude-3-5-haiku-20241022", "Claude Haiku", "Fast & affordable"),
    ),
    BackendIdentifier.OPENAI: (
        _model("gpt-4o", "GPT-4o", "Latest flagship"),
        _model("gpt-4-turbo", "GPT-4 Turbo", "Fast & capable"),
        _model("gpt-4", "GPT-4", "Original GPT-4"),
        _model("gpt-3.5-turbo", "GPT-3.5 Turbo", "Fast & affordable"),
    ),
    BackendIdentifier.GOOGLE: (
        _model("gemini-2.0-flash", "Gemini 2.0 Flash", "Latest & fastest"),
        _model("gemini-1.5-pro", "Gemini 1.5 Pro", "Most capable"),
        _model("gemini-1.5-flash", "Gemini 1.5 Flash", "Fast & efficient"),
    ),
    BackendIdentifier.GROQ: (
        _model("llama-3.3-70b-versatile", "Llama 3.3 70B", "Most capable"),
        _model("mixtral-8x7b-32768", "Mixtral 8x7B", "Fast mixture of experts"),
        _model("gemma2-9b-it", "Gemma 2 9B", "Compact & fast"),
    ),
    BackendIdentifier.OLLAMA: (),
}

BACKEND_NAMES: Dict[BackendIdentifier, str] = {
    BackendIdentifier.ANTHROPIC: "Anthropic (Claude)",
    BackendIdentifier.OPENAI: "OpenAI (GPT)",
    BackendIdentifier.GOOGLE: "Google (Gemini)",
    BackendIdentifier.GROQ: "Groq",
    BackendIdentifier.OLLAMA: "Ollama (Local)",
}

# Console pages where each hosted backend issues API keys.
CREDENTIAL_URLS: Dict[BackendIdentifier, Optional[str]] = {
    BackendIdentifier.ANTHROPIC: "https://console.anthropic.com/settings/keys",
    BackendIdentifier.OPENAI: "https://platform.openai.com/api-keys",
    BackendIdentifier.GOOGLE: "https://aistudio.google.com/app/apikey",
    BackendIdentifier.GROQ: "https://console.groq.com/keys",
    BackendIdentifier.OLLAMA: None,
}


def resolve_backend(backend) -> BackendIdentifier:
    """
    Resolve a backend identifier.

    Raises:
        UnknownBackendError: If the identifier is not a known backend
    """
    try:
        return BackendIdentifier(backend)
    except ValueError:
        raise UnknownBackendError(f"Unknown provider: {backend}", backend=str(backend))


def requires_credential(backend) -> bool:
    """Whether a backend needs an API key."""
    return resolve_backend(backend) != BackendIdentifier.OLLAMA


def credential_url(backend) -> Optional[str]:
    """Console URL where an API key for the backend can be created."""
    return CREDENTIAL_URLS[resolve_backend(backend)]


class ModelCatalog:
    """
    Per-backend model lookup.

    Backends whose adapter supports model discovery are asked live;
    every other backend answers from the static table.

    Args:
        registry: Registry to look discovery adapters up in; when None
            only the static table is used
    """

    def __init__(self, registry=None):
        self._registry = registry

    async def models_for(self, backend) -> List[ModelDescriptor]:
        """
        Get the selectable models of a backend.

        Args:
            backend: Backend identifier

        Returns:
            Fresh, ordered list of model descriptors
        """
        identifier = resolve_backend(backend)

        adapter = self._discovery_adapter(identifier)
        if adapter is not None:
            return await adapter.list_models()

        return list(STATIC_MODELS[identifier])

    def _discovery_adapter(self, identifier: BackendIdentifier):
        if self._registry is None:
            return None
        for adapter in self._registry.find_with_capability(BackendCapability.MODEL_DISCOVERY):
            if adapter.backend == identifier:
                return adapter
        return None

    async def default_model(self, backend) -> Optional[ModelDescriptor]:
        """First model of a backend's list, or None when it has none."""
        models = await self.models_for(backend)
        return models[0] if models else None
