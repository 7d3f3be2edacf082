"""
Google Gemini adapter.

Uses the Generative Language ``generateContent`` endpoint with an API key.
"""

from typing import Any, Dict, Optional

from ..models.request import BackendIdentifier
from .base import HTTPBackendAdapter


class GoogleAdapter(HTTPBackendAdapter):
    """
    Adapter for Google's Gemini models.

    The system prompt is folded into the single user turn. An invalid key
    is reported as 400 INVALID_ARGUMENT rather than 401, so the error
    message is checked as well.
    """

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    VALIDATION_MODEL = "gemini-1.5-flash"

    @property
    def backend(self) -> BackendIdentifier:
        return BackendIdentifier.GOOGLE

    def _endpoint(self, model_id: str) -> str:
        return f"/models/{model_id}:generateContent"

    def _headers(self, credential: Optional[str]) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": credential or "",
        }

    def _build_payload(
        self,
        prompt_text: str,
        model_id: str,
        system_prompt: Optional[str],
        max_tokens: int,
    ) -> Dict[str, Any]:
        text = prompt_text
        if system_prompt:
            text = f"{system_prompt}\n\nUser prompt to enhance: {prompt_text}"

        return {
            "contents": [{"role": "user", "parts": [{"text": text}]}],
            "generationConfig": {"maxOutputTokens": max_tokens},
        }

    def _extract_text(self, data: Dict[str, Any]) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]

    def _is_auth_rejection(self, status: int, detail: str) -> bool:
        if status == 401:
            return True
        return status in (400, 403) and "api key" in detail.lower()
