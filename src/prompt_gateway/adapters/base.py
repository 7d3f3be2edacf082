"""
Shared HTTP machinery for backend adapters.

Subclasses describe the wire format (endpoint, headers, payload, text
extraction); this module owns transport, status classification and
credential probing.
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, Optional

import httpx

from ..core.catalog import BACKEND_NAMES
from ..core.config import DEFAULT_MAX_TOKENS, DEFAULT_TIMEOUT
from ..core.errors import AuthError, BackendError, ConnectivityError, RateLimitError
from ..core.interface import AbstractBackend
from ..models.response import CredentialCheckResult

logger = logging.getLogger(__name__)

INVALID_CREDENTIAL_REASON = "Invalid API key"
MISSING_CREDENTIAL_REASON = "API key required"


def mask_credential(credential: Optional[str]) -> str:
    """Mask a credential for logging."""
    if not credential:
        return "<none>"
    return f"...{credential[-4:]}" if len(credential) > 4 else "****"


class HTTPBackendAdapter(AbstractBackend):
    """
    Base adapter for backends reached over HTTPS JSON.

    Args:
        base_url: API base URL (defaults to the vendor's public endpoint)
        timeout: Request timeout in seconds
        max_tokens: Output token ceiling for enhancement calls
        validation_model: Model used for credential probes
        client: Optional shared HTTP client; one is opened per call otherwise
    """

    DEFAULT_BASE_URL: str = ""
    VALIDATION_MODEL: str = ""
    VALIDATION_PROMPT = "Hi"
    VALIDATION_MAX_TOKENS = 10

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        validation_model: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        **kwargs,
    ):
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._max_tokens = max_tokens
        self._validation_model = validation_model or self.VALIDATION_MODEL
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def display_name(self) -> str:
        return BACKEND_NAMES.get(self.backend, self.backend.value)

    @property
    def requires_credential(self) -> bool:
        return True

    # Wire format

    @abstractmethod
    def _endpoint(self, model_id: str) -> str:
        """Path of the generation endpoint, relative to the base URL."""
        pass

    @abstractmethod
    def _headers(self, credential: Optional[str]) -> Dict[str, str]:
        """Request headers, including authentication."""
        pass

    @abstractmethod
    def _build_payload(
        self,
        prompt_text: str,
        model_id: str,
        system_prompt: Optional[str],
        max_tokens: int,
    ) -> Dict[str, Any]:
        """Build the generation request body."""
        pass

    @abstractmethod
    def _extract_text(self, data: Dict[str, Any]) -> str:
        """Pull the answer text out of a successful response body."""
        pass

    # Contract

    async def enhance(
        self,
        prompt_text: str,
        model_id: str,
        credential: Optional[str],
        system_prompt: str,
    ) -> str:
        """Rewrite a prompt through the backend."""
        self._require_credential(credential)

        payload = self._build_payload(prompt_text, model_id, system_prompt, self._max_tokens)
        data = await self._request("POST", self._endpoint(model_id), credential, payload)

        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise BackendError(
                f"{self.display_name} response is missing the generated text",
                backend=self.backend.value,
            ) from e

        if not isinstance(text, str) or not text:
            raise BackendError(
                f"{self.display_name} returned an empty response",
                backend=self.backend.value,
            )

        logger.info(f"{self.display_name} ({model_id}) enhanced prompt: {len(text)} chars")
        return text

    async def validate_credential(self, credential: Optional[str]) -> CredentialCheckResult:
        """Probe the backend with a minimal completion."""
        if self.requires_credential and not credential:
            return CredentialCheckResult.rejected(MISSING_CREDENTIAL_REASON)
        if credential and not credential.isascii():
            return CredentialCheckResult.rejected(INVALID_CREDENTIAL_REASON)

        payload = self._build_payload(
            self.VALIDATION_PROMPT,
            self._validation_model,
            None,
            self.VALIDATION_MAX_TOKENS,
        )

        try:
            await self._request("POST", self._endpoint(self._validation_model), credential, payload)
        except AuthError:
            logger.info(f"{self.display_name} rejected API key {mask_credential(credential)}")
            return CredentialCheckResult.rejected(INVALID_CREDENTIAL_REASON)

        return CredentialCheckResult.accepted()

    # Transport

    def _require_credential(self, credential: Optional[str]) -> None:
        if self.requires_credential and not credential:
            raise AuthError(MISSING_CREDENTIAL_REASON, backend=self.backend.value)
        # Header values must be ASCII.
        if credential and not credential.isascii():
            raise AuthError(INVALID_CREDENTIAL_REASON, backend=self.backend.value)

    async def _request(
        self,
        method: str,
        path: str,
        credential: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send one request and return the decoded JSON body."""
        url = f"{self._base_url}{path}"
        headers = self._headers(credential)
        logger.debug(f"{method} {url} (key {mask_credential(credential)})")

        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, json=payload, headers=headers, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(method, url, json=payload, headers=headers)

        except httpx.TimeoutException as e:
            raise ConnectivityError(
                f"{self.display_name} request timed out",
                backend=self.backend.value,
            ) from e
        except httpx.RequestError as e:
            raise ConnectivityError(
                f"Cannot connect to {self.display_name}: {e}",
                backend=self.backend.value,
            ) from e

        self._check_response_errors(response)

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"{self.display_name} returned a malformed response",
                backend=self.backend.value,
                status_code=response.status_code,
            ) from e

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Check response for errors and raise appropriate exceptions."""
        if response.is_success:
            return

        status = response.status_code
        detail = self._error_detail(response)
        message = f"{self.display_name} error {status}: {detail}"

        if self._is_auth_rejection(status, detail):
            raise AuthError(message, backend=self.backend.value, status_code=status)

        if status == 429:
            retry_after = response.headers.get("retry-after")
            logger.warning(f"{self.display_name} rate limited (retry-after={retry_after})")
            raise RateLimitError(
                message,
                backend=self.backend.value,
                retry_after=_parse_retry_after(retry_after),
            )

        logger.error(message)
        raise BackendError(message, backend=self.backend.value, status_code=status)

    def _is_auth_rejection(self, status: int, detail: str) -> bool:
        return status == 401

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Best-effort human-readable error message from a failed response."""
        try:
            data = response.json()
        except ValueError:
            return response.text[:200] or response.reason_phrase

        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str):
                return error
            if data.get("message"):
                return str(data["message"])

        return str(data)[:200]


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None
