"""
Resource registry for dispatch by resource kind.

This module implements the Registry pattern: each resource kind
("postgres", ...) maps to the provider class that knows how to provision
it. The workflow looks the kind up here instead of branching inline.

How Registration Works:
    Each provider package registers its classes when imported:

        # In providers/azure/__init__.py
        from compose_azure.core.registry import ResourceRegistry
        from .provider import AzurePostgresProvider
        ResourceRegistry.register("postgres", AzurePostgresProvider)

    Importing compose_azure.providers triggers all registrations.
"""

from typing import Any, Dict, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from .protocols import ResourceProvider

from .exceptions import UnsupportedResourceError


class ResourceRegistry:
    """
    Central registry of resource provider implementations.

    Class-level state: registration happens at import time, before any
    instance would exist.
    """

    # Key: resource kind (e.g., "postgres")
    # Value: provider class (not instance)
    _providers: Dict[str, Type['ResourceProvider']] = {}

    @classmethod
    def register(cls, name: str, provider_class: Type['ResourceProvider']) -> None:
        """
        Register a provider class for a resource kind.

        Registering the same class twice is allowed; a different class
        under an existing name is an error.

        Raises:
            ValueError: If name is already registered with a different class
        """
        if name in cls._providers:
            existing_class = cls._providers[name]
            if existing_class is not provider_class:
                raise ValueError(
                    f"Resource '{name}' is already registered with {existing_class.__name__}. "
                    f"Cannot re-register with {provider_class.__name__}."
                )
            return

        cls._providers[name] = provider_class

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> 'ResourceProvider':
        """
        Create a new provider instance for the resource kind.

        Args:
            name: Resource kind (e.g., "postgres")
            **kwargs: Passed to the provider constructor

        Raises:
            UnsupportedResourceError: If no provider is registered for name
        """
        if name not in cls._providers:
            raise UnsupportedResourceError(name, cls.list_resources())
        return cls._providers[name](**kwargs)

    @classmethod
    def list_resources(cls) -> list[str]:
        """Return the sorted list of registered resource kinds."""
        return sorted(cls._providers.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._providers

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a registration (used by tests)."""
        cls._providers.pop(name, None)
