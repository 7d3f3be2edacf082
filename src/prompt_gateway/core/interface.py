"""
Abstract backend interface definition.

Defines the contract that all backend adapters must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Set
from enum import Enum

from ..models.request import BackendIdentifier
from ..models.response import CredentialCheckResult, ModelDescriptor


class BackendCapability(str, Enum):
    """Capabilities that a backend adapter may support."""
    ENHANCE = "enhance"
    VALIDATE_CREDENTIAL = "validate_credential"
    MODEL_DISCOVERY = "model_discovery"


class AbstractBackend(ABC):
    """
    Abstract base class for backend adapters.

    Adapters hold no per-call state, so a single instance may serve
    any number of concurrent calls.
    """

    @property
    @abstractmethod
    def backend(self) -> BackendIdentifier:
        """
        Identifier of the backend this adapter speaks to.

        Returns:
            Backend identifier
        """
        pass

    @property
    def capabilities(self) -> Set[BackendCapability]:
        """
        Set of capabilities this adapter supports.

        Returns:
            Set of BackendCapability values
        """
        return {BackendCapability.ENHANCE, BackendCapability.VALIDATE_CREDENTIAL}

    @abstractmethod
    async def enhance(
        self,
        prompt_text: str,
        model_id: str,
        credential: Optional[str],
        system_prompt: str,
    ) -> str:
        """
        Rewrite a prompt through the backend.

        Args:
            prompt_text: Rough prompt from the user
            model_id: Model id, passed verbatim to the backend
            credential: API key, None for backends that need none
            system_prompt: Enhancement instructions

        Returns:
            Enhanced prompt text, never empty

        Raises:
            BackendError: On any failure; subclasses narrow the cause
        """
        pass

    @abstractmethod
    async def validate_credential(self, credential: Optional[str]) -> CredentialCheckResult:
        """
        Probe the backend to confirm a credential is accepted.

        Args:
            credential: API key to check

        Returns:
            Check result; an authorization rejection is reported, not raised

        Raises:
            BackendError: On any failure other than an authorization rejection
        """
        pass

    async def list_models(self) -> List[ModelDescriptor]:
        """
        Discover models available on the backend.

        Only dynamic backends override this.

        Returns:
            Model descriptors in backend order
        """
        return []

    def supports(self, capability: BackendCapability) -> bool:
        """
        Check if adapter supports a capability.

        Args:
            capability: Capability to check

        Returns:
            True if supported
        """
        return capability in self.capabilities

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(backend={self.backend.value!r})"
