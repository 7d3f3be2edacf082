"""
Prompt Gateway

A single async interface for rewriting prompts through several
text-generation backends:
- Anthropic, OpenAI, Google and Groq hosted APIs
- A local Ollama daemon with model discovery
- One error taxonomy across all of them
"""

from .gateway import PromptGateway, build_registry
from .core.interface import AbstractBackend, BackendCapability
from .core.config import GatewayConfig, load_config
from .core.catalog import ModelCatalog
from .core.errors import (
    ErrorKind,
    GatewayError,
    BackendError,
    AuthError,
    RateLimitError,
    ConnectivityError,
    UnknownBackendError,
    describe_error,
)
from .models.request import BackendIdentifier, EnhancementRequest
from .models.response import CredentialCheckResult, ModelDescriptor
from .prompts import DEFAULT_SYSTEM_PROMPT, resolve_system_prompt

__all__ = [
    "PromptGateway",
    "build_registry",
    "AbstractBackend",
    "BackendCapability",
    "GatewayConfig",
    "load_config",
    "ModelCatalog",
    "ErrorKind",
    "GatewayError",
    "BackendError",
    "AuthError",
    "RateLimitError",
    "ConnectivityError",
    "UnknownBackendError",
    "describe_error",
    "BackendIdentifier",
    "EnhancementRequest",
    "CredentialCheckResult",
    "ModelDescriptor",
    "DEFAULT_SYSTEM_PROMPT",
    "resolve_system_prompt",
]
