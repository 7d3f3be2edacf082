"""
Anthropic Messages API adapter.
"""

from typing import Any, Dict, Optional

from ..models.request import BackendIdentifier
from .base import HTTPBackendAdapter


class AnthropicAdapter(HTTPBackendAdapter):
    """
    Adapter for Anthropic's Claude models.

    The system prompt travels in the top-level ``system`` field; the
    answer is the first content block's text.
    """

    DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
    ANTHROPIC_VERSION = "2023-06-01"
    VALIDATION_MODEL = "claude-3-5-haiku-20241022"

    @property
    def backend(self) -> BackendIdentifier:
        return BackendIdentifier.ANTHROPIC

    def _endpoint(self, model_id: str) -> str:
        return "/messages"

    def _headers(self, credential: Optional[str]) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": credential or "",
            "anthropic-version": self.ANTHROPIC_VERSION,
        }

    def _build_payload(
        self,
        prompt_text: str,
        model_id: str,
        system_prompt: Optional[str],
        max_tokens: int,
    ) -> Dict[str, Any]:
        data = {
            "model": model_id,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt_text}],
        }

        if system_prompt:
            data["system"] = system_prompt

        return data

    def _extract_text(self, data: Dict[str, Any]) -> str:
        return data["content"][0]["text"]
