"""
Core gateway components.
"""

from .interface import AbstractBackend, BackendCapability
from .registry import BackendRegistry
from .config import BackendConfig, GatewayConfig, load_config
from .catalog import ModelCatalog, STATIC_MODELS, BACKEND_NAMES, credential_url, requires_credential
from .errors import (
    ErrorKind,
    GatewayError,
    BackendError,
    AuthError,
    RateLimitError,
    ConnectivityError,
    UnknownBackendError,
    describe_error,
)

__all__ = [
    "AbstractBackend",
    "BackendCapability",
    "BackendRegistry",
    "BackendConfig",
    "GatewayConfig",
    "load_config",
    "ModelCatalog",
    "STATIC_MODELS",
    "BACKEND_NAMES",
    "credential_url",
    "requires_credential",
    "ErrorKind",
    "GatewayError",
    "BackendError",
    "AuthError",
    "RateLimitError",
    "ConnectivityError",
    "UnknownBackendError",
    "describe_error",
]
