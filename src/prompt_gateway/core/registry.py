"""
Backend registry mapping identifiers to adapters.
"""

import logging
from typing import Dict, List, Type, Any

from ..models.request import BackendIdentifier
from .errors import UnknownBackendError
from .catalog import resolve_backend
from .interface import AbstractBackend, BackendCapability

logger = logging.getLogger(__name__)


class BackendRegistry:
    """
    Registry of backend adapters.

    Holds one adapter instance per backend identifier. Instances are
    created once and never mutated afterwards.
    """

    def __init__(self):
        """Initialize the registry."""
        self._adapter_classes: Dict[BackendIdentifier, Type[AbstractBackend]] = {}
        self._instances: Dict[BackendIdentifier, AbstractBackend] = {}

    def register_adapter(
        self,
        backend: BackendIdentifier,
        adapter_class: Type[AbstractBackend],
    ) -> None:
        """
        Register an adapter class for a backend.

        Args:
            backend: Backend identifier
            adapter_class: Adapter class to register
        """
        self._adapter_classes[backend] = adapter_class
        logger.debug(f"Registered backend adapter: {backend.value} -> {adapter_class.__name__}")

    def create_adapter(self, backend: BackendIdentifier, config: Dict[str, Any]) -> AbstractBackend:
        """
        Create an adapter instance from its registered class.

        Args:
            backend: Backend to create
            config: Keyword arguments for the adapter

        Returns:
            Configured adapter instance
        """
        if backend not in self._adapter_classes:
            raise UnknownBackendError(f"No adapter registered for: {backend.value}", backend=backend.value)

        instance = self._adapter_classes[backend](**config)
        self._instances[backend] = instance
        return instance

    def add(self, adapter: AbstractBackend) -> None:
        """Add a ready-made adapter instance."""
        self._instances[adapter.backend] = adapter

    def get(self, backend) -> AbstractBackend:
        """
        Get the adapter for a backend.

        Args:
            backend: Backend identifier (enum or string)

        Returns:
            Adapter instance

        Raises:
            UnknownBackendError: If the backend is unknown or has no adapter
        """
        identifier = resolve_backend(backend)
        if identifier not in self._instances:
            raise UnknownBackendError(f"Unknown provider: {identifier.value}", backend=identifier.value)
        return self._instances[identifier]

    def list_backends(self) -> List[Dict[str, Any]]:
        """
        List registered adapters.

        Returns:
            List of backend info dicts
        """
        return [
            {
                "backend": adapter.backend.value,
                "adapter": adapter.__class__.__name__,
                "capabilities": sorted(c.value for c in adapter.capabilities),
            }
            for adapter in self._instances.values()
        ]

    def find_with_capability(self, capability: BackendCapability) -> List[AbstractBackend]:
        """Find all adapters that support a capability."""
        return [a for a in self._instances.values() if a.supports(capability)]
