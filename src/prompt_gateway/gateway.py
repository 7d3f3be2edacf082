"""
Prompt gateway dispatcher.

The single entry point callers use: enhance a prompt, probe a
credential, or discover local models, whatever the backend.
"""

import logging
from typing import Dict, Iterable, List, Optional, Type

import httpx

from .adapters import AnthropicAdapter, GoogleAdapter, GroqAdapter, OllamaAdapter, OpenAIAdapter
from .core.catalog import ModelCatalog
from .core.config import GatewayConfig
from .core.errors import GatewayError
from .core.interface import AbstractBackend
from .core.registry import BackendRegistry
from .models.request import BackendIdentifier, EnhancementRequest
from .models.response import CredentialCheckResult, ModelDescriptor

logger = logging.getLogger(__name__)

ADAPTER_CLASSES: Dict[BackendIdentifier, Type[AbstractBackend]] = {
    BackendIdentifier.ANTHROPIC: AnthropicAdapter,
    BackendIdentifier.OPENAI: OpenAIAdapter,
    BackendIdentifier.GOOGLE: GoogleAdapter,
    BackendIdentifier.GROQ: GroqAdapter,
    BackendIdentifier.OLLAMA: OllamaAdapter,
}


def build_registry(
    config: Optional[GatewayConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> BackendRegistry:
    """
    Create a registry holding one adapter per backend.

    Args:
        config: Transport configuration, defaults when None
        client: Optional HTTP client shared by all adapters

    Returns:
        Populated registry
    """
    config = config or GatewayConfig()
    registry = BackendRegistry()

    for backend in BackendIdentifier:
        registry.register_adapter(backend, ADAPTER_CLASSES[backend])
        overrides = config.for_backend(backend.value)
        registry.create_adapter(backend, {
            "base_url": overrides.base_url,
            "timeout": overrides.timeout or config.timeout,
            "max_tokens": config.max_tokens,
            "validation_model": overrides.validation_model,
            "client": client,
        })

    return registry


class PromptGateway:
    """
    Uniform front over all backend adapters.

    Holds no mutable state after construction, so calls may run
    concurrently. Nothing is retried or cached.

    Args:
        config: Transport configuration, used when ``adapters`` is None
        adapters: Explicit adapters, replacing the defaults per backend
        client: Optional HTTP client shared by the default adapters
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        adapters: Optional[Iterable[AbstractBackend]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._registry = build_registry(config, client)
        for adapter in adapters or ():
            self._registry.add(adapter)

        self._catalog = ModelCatalog(self._registry)

    @property
    def registry(self) -> BackendRegistry:
        return self._registry

    @property
    def catalog(self) -> ModelCatalog:
        return self._catalog

    async def enhance(self, request: EnhancementRequest) -> str:
        """
        Enhance a prompt through the requested backend.

        Args:
            request: Enhancement request

        Returns:
            Enhanced prompt text

        Raises:
            UnknownBackendError: If the backend identifier is not known
            BackendError: If the backend call fails; propagated unchanged
        """
        adapter = self._registry.get(request.backend)

        try:
            return await adapter.enhance(
                request.prompt_text,
                request.model_id,
                request.credential,
                request.system_prompt,
            )
        except GatewayError as e:
            logger.error(f"Enhancement error ({request.backend}/{request.model_id}): {e}")
            raise

    async def validate_credential(self, backend, credential: Optional[str]) -> CredentialCheckResult:
        """
        Check whether a backend accepts a credential.

        Never raises: every failure is reported as an invalid result.

        Args:
            backend: Backend identifier
            credential: API key to check

        Returns:
            Check result
        """
        try:
            adapter = self._registry.get(backend)
            return await adapter.validate_credential(credential)
        except Exception as e:
            logger.warning(f"Credential check for {backend} failed: {e}")
            return CredentialCheckResult.rejected(str(e) or e.__class__.__name__)

    async def list_local_models(self) -> List[ModelDescriptor]:
        """
        Discover models installed in the local daemon.

        Never raises: any failure yields an empty list.
        """
        try:
            return await self._catalog.models_for(BackendIdentifier.OLLAMA)
        except Exception as e:
            logger.debug(f"Local model discovery failed: {e}")
            return []

    async def models_for(self, backend) -> List[ModelDescriptor]:
        """Selectable models of a backend, in display order."""
        return await self._catalog.models_for(backend)
