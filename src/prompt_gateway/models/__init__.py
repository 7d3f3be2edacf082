"""
Prompt gateway data models.
"""

from .request import BackendIdentifier, EnhancementRequest
from .response import CredentialCheckResult, ModelDescriptor

__all__ = [
    "BackendIdentifier",
    "EnhancementRequest",
    "CredentialCheckResult",
    "ModelDescriptor",
]
