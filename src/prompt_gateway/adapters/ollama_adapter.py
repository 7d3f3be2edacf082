"""
Ollama adapter.

Talks to a locally running Ollama daemon. No credential is needed, and
the daemon being absent is a normal condition for model discovery.
"""

import logging
from typing import Any, Dict, List, Optional, Set

from ..core.interface import BackendCapability
from ..models.request import BackendIdentifier
from ..models.response import CredentialCheckResult, ModelDescriptor
from .base import HTTPBackendAdapter

logger = logging.getLogger(__name__)


class OllamaAdapter(HTTPBackendAdapter):
    """
    Adapter for a local Ollama daemon.

    The generate endpoint has no system/user roles, so the system prompt
    and the user prompt are sent as one string.
    """

    DEFAULT_BASE_URL = "http://localhost:11434"

    @property
    def backend(self) -> BackendIdentifier:
        return BackendIdentifier.OLLAMA

    @property
    def capabilities(self) -> Set[BackendCapability]:
        return {
            BackendCapability.ENHANCE,
            BackendCapability.VALIDATE_CREDENTIAL,
            BackendCapability.MODEL_DISCOVERY,
        }

    @property
    def requires_credential(self) -> bool:
        return False

    def _endpoint(self, model_id: str) -> str:
        return "/api/generate"

    def _headers(self, credential: Optional[str]) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _build_payload(
        self,
        prompt_text: str,
        model_id: str,
        system_prompt: Optional[str],
        max_tokens: int,
    ) -> Dict[str, Any]:
        prompt = prompt_text
        if system_prompt:
            prompt = f"{system_prompt}\n\nUser prompt to enhance: {prompt_text}"

        return {
            "model": model_id,
            "prompt": prompt,
            "stream": False,
            "options": {"num_predict": max_tokens},
        }

    def _extract_text(self, data: Dict[str, Any]) -> str:
        return data["response"]

    async def enhance(
        self,
        prompt_text: str,
        model_id: str,
        credential: Optional[str],
        system_prompt: str,
    ) -> str:
        # Never forward a credential to the local daemon.
        return await super().enhance(prompt_text, model_id, None, system_prompt)

    async def validate_credential(self, credential: Optional[str]) -> CredentialCheckResult:
        """No key needed."""
        return CredentialCheckResult.accepted()

    async def list_models(self) -> List[ModelDescriptor]:
        """
        List models installed in the local daemon.

        Returns:
            Model descriptors in daemon order; empty if the daemon is not
            running or answers with something unexpected
        """
        try:
            data = await self._request("GET", "/api/tags")
            return [ModelDescriptor.from_ollama_tag(m) for m in data.get("models") or []]
        except Exception as e:
            logger.debug(f"Ollama model discovery failed: {e}")
            return []
