"""
OpenAI Chat Completions adapter.
"""

from typing import Any, Dict, Optional

from ..models.request import BackendIdentifier
from .base import HTTPBackendAdapter


class OpenAIAdapter(HTTPBackendAdapter):
    """
    Adapter for OpenAI's GPT models.

    Also the base for OpenAI-compatible vendors, which differ only in
    base URL and probe model.
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    VALIDATION_MODEL = "gpt-3.5-turbo"

    @property
    def backend(self) -> BackendIdentifier:
        return BackendIdentifier.OPENAI

    def _endpoint(self, model_id: str) -> str:
        return "/chat/completions"

    def _headers(self, credential: Optional[str]) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential or ''}",
        }

    def _build_payload(
        self,
        prompt_text: str,
        model_id: str,
        system_prompt: Optional[str],
        max_tokens: int,
    ) -> Dict[str, Any]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt_text})

        return {
            "model": model_id,
            "max_tokens": max_tokens,
            "messages": messages,
        }

    def _extract_text(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]
