"""
Tests for backend adapters against stubbed HTTP backends.

Covers request shape, text extraction, status classification and
credential probing for every backend.
"""

import httpx
import pytest

from prompt_gateway.adapters import (
    AnthropicAdapter,
    GoogleAdapter,
    GroqAdapter,
    OllamaAdapter,
    OpenAIAdapter,
)
from prompt_gateway.core.errors import (
    AuthError,
    BackendError,
    ConnectivityError,
    ErrorKind,
    RateLimitError,
)
from prompt_gateway.core.interface import BackendCapability
from prompt_gateway.models import BackendIdentifier, ModelDescriptor

from stubs import (
    ANTHROPIC_URL,
    ENHANCED,
    GROQ_URL,
    OLLAMA_URL,
    OPENAI_URL,
    ROUGH_PROMPT,
    SYSTEM_PROMPT,
    anthropic_body,
    google_body,
    google_url,
    ollama_body,
    openai_body,
    sent_json,
)


class TestAnthropicAdapter:
    """Test Anthropic adapter."""

    @pytest.mark.asyncio
    async def test_enhance_returns_first_content_text(self, respx_mock):
        """The first content block's text is returned unchanged."""
        route = respx_mock.post(ANTHROPIC_URL).mock(
            return_value=httpx.Response(200, json=anthropic_body())
        )
        adapter = AnthropicAdapter()

        result = await adapter.enhance(ROUGH_PROMPT, "claude-3-5-haiku-20241022", "sk-valid", SYSTEM_PROMPT)

        assert result == ENHANCED
        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_enhance_request_shape(self, respx_mock):
        """System prompt goes in the top-level field with a 1024 token cap."""
        route = respx_mock.post(ANTHROPIC_URL).mock(
            return_value=httpx.Response(200, json=anthropic_body())
        )

        await AnthropicAdapter().enhance(ROUGH_PROMPT, "claude-sonnet-4-20250514", "sk-valid", SYSTEM_PROMPT)

        body = sent_json(route)
        assert body["model"] == "claude-sonnet-4-20250514"
        assert body["system"] == SYSTEM_PROMPT
        assert body["max_tokens"] == 1024
        assert body["messages"] == [{"role": "user", "content": ROUGH_PROMPT}]

        headers = route.calls.last.request.headers
        assert headers["x-api-key"] == "sk-valid"
        assert headers["anthropic-version"] == AnthropicAdapter.ANTHROPIC_VERSION

    @pytest.mark.asyncio
    async def test_validate_accepts_key(self, respx_mock):
        """A successful probe reports the key as valid."""
        route = respx_mock.post(ANTHROPIC_URL).mock(
            return_value=httpx.Response(200, json=anthropic_body("Hello"))
        )

        result = await AnthropicAdapter().validate_credential("sk-valid")

        assert result.valid is True
        assert result.reason is None
        body = sent_json(route)
        assert body["model"] == "claude-3-5-haiku-20241022"
        assert body["max_tokens"] == 10
        assert "system" not in body

    @pytest.mark.asyncio
    async def test_validate_rejects_key_on_401(self, respx_mock):
        """A 401 probe reports the key as invalid."""
        respx_mock.post(ANTHROPIC_URL).mock(
            return_value=httpx.Response(
                401,
                json={"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}},
            )
        )

        result = await AnthropicAdapter().validate_credential("sk-bad")

        assert result.valid is False
        assert result.reason == "Invalid API key"

    @pytest.mark.asyncio
    async def test_validate_reraises_other_failures(self, respx_mock):
        """Failures other than auth rejection are not reported as invalid keys."""
        respx_mock.post(ANTHROPIC_URL).mock(
            return_value=httpx.Response(529, json={"error": {"message": "Overloaded"}})
        )

        with pytest.raises(BackendError) as exc_info:
            await AnthropicAdapter().validate_credential("sk-valid")

        assert not isinstance(exc_info.value, AuthError)
        assert exc_info.value.status_code == 529
        assert "Overloaded" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_enhance_401_raises_auth_error(self, respx_mock):
        """An auth rejection during enhance is a tagged BackendError."""
        respx_mock.post(ANTHROPIC_URL).mock(
            return_value=httpx.Response(401, json={"error": {"message": "invalid x-api-key"}})
        )

        with pytest.raises(BackendError) as exc_info:
            await AnthropicAdapter().enhance(ROUGH_PROMPT, "claude-3-5-haiku-20241022", "sk-bad", SYSTEM_PROMPT)

        assert exc_info.value.kind == ErrorKind.AUTH
        assert "401" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_credential_sends_nothing(self, respx_mock):
        """Enhance without a key fails before any request."""
        with pytest.raises(AuthError):
            await AnthropicAdapter().enhance(ROUGH_PROMPT, "claude-3-5-haiku-20241022", None, SYSTEM_PROMPT)

        assert respx_mock.calls.call_count == 0

    @pytest.mark.asyncio
    async def test_validate_missing_credential(self, respx_mock):
        """Probing an empty key reports it without a request."""
        result = await AnthropicAdapter().validate_credential("")

        assert result.valid is False
        assert result.reason == "API key required"
        assert respx_mock.calls.call_count == 0


class TestOpenAIAdapter:
    """Test OpenAI adapter."""

    @pytest.mark.asyncio
    async def test_non_ascii_credential_rejected_before_request(self, respx_mock):
        """A key with a pasted ellipsis cannot go into a header; it is refused locally."""
        with pytest.raises(AuthError) as exc_info:
            await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-abc\u2026", SYSTEM_PROMPT)

        assert exc_info.value.kind == ErrorKind.AUTH
        assert str(exc_info.value) == "Invalid API key"
        assert respx_mock.calls.call_count == 0

    @pytest.mark.asyncio
    async def test_validate_non_ascii_credential(self, respx_mock):
        """Validating a non-ASCII key reports it invalid without a request."""
        result = await OpenAIAdapter().validate_credential("sk-abc\u2026")

        assert result.valid is False
        assert result.reason == "Invalid API key"
        assert respx_mock.calls.call_count == 0

    @pytest.mark.asyncio
    async def test_enhance_returns_first_choice(self, respx_mock):
        """The first choice's message content is returned unchanged."""
        route = respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(200, json=openai_body())
        )

        result = await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT)

        assert result == ENHANCED
        body = sent_json(route)
        assert body["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": ROUGH_PROMPT},
        ]
        assert body["max_tokens"] == 1024
        assert route.calls.last.request.headers["authorization"] == "Bearer sk-valid"

    @pytest.mark.asyncio
    async def test_validate_probe(self, respx_mock):
        """The probe uses the cheap model with a single user message."""
        route = respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(200, json=openai_body("Hi!"))
        )

        result = await OpenAIAdapter().validate_credential("sk-valid")

        assert result.valid is True
        body = sent_json(route)
        assert body["model"] == "gpt-3.5-turbo"
        assert body["messages"] == [{"role": "user", "content": "Hi"}]

    @pytest.mark.asyncio
    async def test_validate_rejects_key_on_401(self, respx_mock):
        """A 401 probe reports the key as invalid."""
        respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})
        )

        result = await OpenAIAdapter().validate_credential("sk-bad")

        assert result.valid is False
        assert result.reason == "Invalid API key"

    @pytest.mark.asyncio
    async def test_rate_limit(self, respx_mock):
        """A 429 raises RateLimitError with retry-after."""
        respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(
                429,
                headers={"Retry-After": "20"},
                json={"error": {"message": "Rate limit reached"}},
            )
        )

        with pytest.raises(RateLimitError) as exc_info:
            await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT)

        assert exc_info.value.retry_after == 20.0
        assert exc_info.value.kind == ErrorKind.RATE_LIMIT
        assert exc_info.value.backend == "openai"

    @pytest.mark.asyncio
    async def test_rate_limit_reraised_from_validate(self, respx_mock):
        """Throttling during a probe is not an invalid key."""
        respx_mock.post(OPENAI_URL).mock(return_value=httpx.Response(429, json={}))

        with pytest.raises(RateLimitError):
            await OpenAIAdapter().validate_credential("sk-valid")

    @pytest.mark.asyncio
    async def test_missing_text_field(self, respx_mock):
        """A response without a message is a BackendError."""
        respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(200, json={"choices": []})
        )

        with pytest.raises(BackendError, match="missing the generated text"):
            await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT)

    @pytest.mark.asyncio
    async def test_null_content(self, respx_mock):
        """A null or empty answer is a BackendError."""
        respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(200, json=openai_body(None))
        )

        with pytest.raises(BackendError, match="empty response"):
            await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT)

    @pytest.mark.asyncio
    async def test_malformed_body(self, respx_mock):
        """A non-JSON success body is a BackendError."""
        respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(200, text="<html>gateway</html>")
        )

        with pytest.raises(BackendError, match="malformed"):
            await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT)

    @pytest.mark.asyncio
    async def test_server_error(self, respx_mock):
        """Other non-success statuses are BackendError with the status kept."""
        respx_mock.post(OPENAI_URL).mock(
            return_value=httpx.Response(500, text="upstream exploded")
        )

        with pytest.raises(BackendError) as exc_info:
            await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT)

        assert exc_info.value.kind == ErrorKind.BACKEND
        assert exc_info.value.status_code == 500
        assert "upstream exploded" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_is_connectivity_error(self, respx_mock):
        """Transport timeouts are connectivity failures."""
        respx_mock.post(OPENAI_URL).mock(side_effect=httpx.ReadTimeout)

        with pytest.raises(ConnectivityError):
            await OpenAIAdapter().enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT)

    @pytest.mark.asyncio
    async def test_custom_base_url(self, respx_mock):
        """A configured base URL replaces the public endpoint."""
        route = respx_mock.post("https://proxy.internal/v1/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_body())
        )

        adapter = OpenAIAdapter(base_url="https://proxy.internal/v1/")
        assert await adapter.enhance(ROUGH_PROMPT, "gpt-4o", "sk-valid", SYSTEM_PROMPT) == ENHANCED
        assert route.called


class TestGroqAdapter:
    """Test Groq adapter."""

    def test_backend(self):
        """Groq reports its own identifier."""
        assert GroqAdapter().backend == BackendIdentifier.GROQ

    @pytest.mark.asyncio
    async def test_enhance(self, respx_mock):
        """Groq speaks the OpenAI format at its own URL."""
        route = respx_mock.post(GROQ_URL).mock(
            return_value=httpx.Response(200, json=openai_body())
        )

        result = await GroqAdapter().enhance(ROUGH_PROMPT, "llama-3.3-70b-versatile", "gsk-valid", SYSTEM_PROMPT)

        assert result == ENHANCED
        assert sent_json(route)["model"] == "llama-3.3-70b-versatile"

    @pytest.mark.asyncio
    async def test_validate_probe_model(self, respx_mock):
        """The probe uses Groq's compact model."""
        route = respx_mock.post(GROQ_URL).mock(
            return_value=httpx.Response(200, json=openai_body("Hi"))
        )

        result = await GroqAdapter().validate_credential("gsk-valid")

        assert result.valid is True
        assert sent_json(route)["model"] == "gemma2-9b-it"

    @pytest.mark.asyncio
    async def test_validate_rejects_key_on_401(self, respx_mock):
        """A 401 probe reports the key as invalid."""
        respx_mock.post(GROQ_URL).mock(
            return_value=httpx.Response(401, json={"error": {"message": "Invalid API Key"}})
        )

        result = await GroqAdapter().validate_credential("gsk-bad")

        assert result.valid is False
        assert result.reason == "Invalid API key"


class TestGoogleAdapter:
    """Test Google adapter."""

    @pytest.mark.asyncio
    async def test_enhance_folds_system_prompt(self, respx_mock):
        """The system prompt is prepended to the single user turn."""
        route = respx_mock.post(google_url("gemini-2.0-flash")).mock(
            return_value=httpx.Response(200, json=google_body())
        )

        result = await GoogleAdapter().enhance(ROUGH_PROMPT, "gemini-2.0-flash", "AIza-valid", SYSTEM_PROMPT)

        assert result == ENHANCED
        body = sent_json(route)
        assert body["contents"] == [{
            "role": "user",
            "parts": [{"text": f"{SYSTEM_PROMPT}\n\nUser prompt to enhance: {ROUGH_PROMPT}"}],
        }]
        assert body["generationConfig"]["maxOutputTokens"] == 1024
        assert route.calls.last.request.headers["x-goog-api-key"] == "AIza-valid"

    @pytest.mark.asyncio
    async def test_validate_accepts_key(self, respx_mock):
        """A successful probe reports the key as valid."""
        route = respx_mock.post(google_url("gemini-1.5-flash")).mock(
            return_value=httpx.Response(200, json=google_body("Hello"))
        )

        result = await GoogleAdapter().validate_credential("AIza-valid")

        assert result.valid is True
        assert sent_json(route)["contents"][0]["parts"][0]["text"] == "Hi"

    @pytest.mark.asyncio
    async def test_validate_rejects_invalid_key_400(self, respx_mock):
        """Gemini's 400 'API key not valid' counts as an auth rejection."""
        respx_mock.post(google_url("gemini-1.5-flash")).mock(
            return_value=httpx.Response(
                400,
                json={"error": {
                    "code": 400,
                    "message": "API key not valid. Please pass a valid API key.",
                    "status": "INVALID_ARGUMENT",
                }},
            )
        )

        result = await GoogleAdapter().validate_credential("AIza-bad")

        assert result.valid is False
        assert result.reason == "Invalid API key"

    @pytest.mark.asyncio
    async def test_validate_rejects_key_on_401(self, respx_mock):
        """A plain 401 is also an auth rejection."""
        respx_mock.post(google_url("gemini-1.5-flash")).mock(
            return_value=httpx.Response(401, json={"error": {"message": "Unauthorized"}})
        )

        result = await GoogleAdapter().validate_credential("AIza-bad")

        assert result.valid is False

    @pytest.mark.asyncio
    async def test_other_400_is_backend_error(self, respx_mock):
        """A 400 unrelated to the key is an ordinary backend error."""
        respx_mock.post(google_url("gemini-1.5-pro")).mock(
            return_value=httpx.Response(400, json={"error": {"message": "Request contains an invalid argument."}})
        )

        with pytest.raises(BackendError) as exc_info:
            await GoogleAdapter().enhance(ROUGH_PROMPT, "gemini-1.5-pro", "AIza-valid", SYSTEM_PROMPT)

        assert exc_info.value.kind == ErrorKind.BACKEND

    @pytest.mark.asyncio
    async def test_blocked_prompt_without_candidates(self, respx_mock):
        """A response with no candidates is a BackendError."""
        respx_mock.post(google_url("gemini-2.0-flash")).mock(
            return_value=httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})
        )

        with pytest.raises(BackendError):
            await GoogleAdapter().enhance(ROUGH_PROMPT, "gemini-2.0-flash", "AIza-valid", SYSTEM_PROMPT)


class TestOllamaAdapter:
    """Test Ollama adapter."""

    def test_default_url(self):
        """The local daemon defaults to localhost:11434."""
        assert OllamaAdapter().base_url == OLLAMA_URL

    def test_environment_not_read(self, monkeypatch):
        """The adapter takes its URL from arguments only."""
        monkeypatch.setenv("OLLAMA_HOST", "127.0.0.1:8080")
        assert OllamaAdapter().base_url == OLLAMA_URL
        assert OllamaAdapter(base_url="http://gpu-box:11434").base_url == "http://gpu-box:11434"

    def test_capabilities(self):
        """Only the local adapter discovers models."""
        assert OllamaAdapter().supports(BackendCapability.MODEL_DISCOVERY)
        assert not OpenAIAdapter().supports(BackendCapability.MODEL_DISCOVERY)

    @pytest.mark.asyncio
    async def test_enhance_single_prompt_string(self, respx_mock):
        """System and user prompt are concatenated into one string."""
        route = respx_mock.post(f"{OLLAMA_URL}/api/generate").mock(
            return_value=httpx.Response(200, json=ollama_body())
        )

        result = await OllamaAdapter().enhance(ROUGH_PROMPT, "llama3:8b", None, SYSTEM_PROMPT)

        assert result == ENHANCED
        body = sent_json(route)
        assert body["model"] == "llama3:8b"
        assert body["prompt"] == f"{SYSTEM_PROMPT}\n\nUser prompt to enhance: {ROUGH_PROMPT}"
        assert body["stream"] is False
        assert body["options"]["num_predict"] == 1024

    @pytest.mark.asyncio
    async def test_enhance_ignores_credential(self, respx_mock):
        """A stray credential never reaches the daemon."""
        route = respx_mock.post(f"{OLLAMA_URL}/api/generate").mock(
            return_value=httpx.Response(200, json=ollama_body())
        )

        await OllamaAdapter().enhance(ROUGH_PROMPT, "llama3:8b", "sk-leak", SYSTEM_PROMPT)

        request = route.calls.last.request
        assert "authorization" not in request.headers
        assert b"sk-leak" not in request.content

    @pytest.mark.asyncio
    async def test_enhance_daemon_down(self, respx_mock):
        """A refused connection is a ConnectivityError."""
        respx_mock.post(f"{OLLAMA_URL}/api/generate").mock(side_effect=httpx.ConnectError)

        with pytest.raises(ConnectivityError) as exc_info:
            await OllamaAdapter().enhance(ROUGH_PROMPT, "llama3:8b", None, SYSTEM_PROMPT)

        assert exc_info.value.backend == "ollama"

    @pytest.mark.asyncio
    async def test_enhance_unknown_model(self, respx_mock):
        """A daemon error status is a BackendError carrying its message."""
        respx_mock.post(f"{OLLAMA_URL}/api/generate").mock(
            return_value=httpx.Response(404, json={"error": "model 'nope' not found"})
        )

        with pytest.raises(BackendError, match="not found"):
            await OllamaAdapter().enhance(ROUGH_PROMPT, "nope", None, SYSTEM_PROMPT)

    @pytest.mark.asyncio
    async def test_validate_without_network(self, respx_mock):
        """No key is needed, so nothing is sent."""
        result = await OllamaAdapter().validate_credential("anything")

        assert result.valid is True
        assert respx_mock.calls.call_count == 0

    @pytest.mark.asyncio
    async def test_list_models(self, respx_mock):
        """Tags map to descriptors with a gigabyte size description."""
        respx_mock.get(f"{OLLAMA_URL}/api/tags").mock(
            return_value=httpx.Response(200, json={"models": [
                {"name": "llama3:8b", "size": 4700000000},
                {"name": "mistral:latest", "size": 4109865159},
            ]})
        )

        models = await OllamaAdapter().list_models()

        assert models == [
            ModelDescriptor(id="llama3:8b", display_name="llama3:8b", description="4.7GB"),
            ModelDescriptor(id="mistral:latest", display_name="mistral:latest", description="4.1GB"),
        ]

    @pytest.mark.asyncio
    async def test_list_models_connection_refused(self, respx_mock):
        """A missing daemon yields an empty list."""
        respx_mock.get(f"{OLLAMA_URL}/api/tags").mock(side_effect=httpx.ConnectError)

        assert await OllamaAdapter().list_models() == []

    @pytest.mark.asyncio
    async def test_list_models_error_status(self, respx_mock):
        """A failing daemon yields an empty list."""
        respx_mock.get(f"{OLLAMA_URL}/api/tags").mock(return_value=httpx.Response(500))

        assert await OllamaAdapter().list_models() == []

    @pytest.mark.asyncio
    async def test_list_models_malformed(self, respx_mock):
        """Unexpected payloads yield an empty list."""
        respx_mock.get(f"{OLLAMA_URL}/api/tags").mock(
            return_value=httpx.Response(200, json={"models": [{"size": 12}]})
        )

        assert await OllamaAdapter().list_models() == []
