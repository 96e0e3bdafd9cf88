"""
Protocol definitions for the provider plugin.

Design Pattern: Strategy Pattern
    - ResourceProvider: one implementation per resource kind
    - MessageSink: where progress and result messages are written

Protocols (structural subtyping) keep test doubles free of inheritance;
@runtime_checkable allows isinstance() checks where useful.
"""

from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ConnectionInfo, DeprovisionRequest, ProvisionRequest


@runtime_checkable
class ResourceProvider(Protocol):
    """
    Interface every resource kind implements.

    Implementations run their steps strictly in sequence and block on
    long-running cloud operations. They raise ProvisioningError subclasses
    and never terminate the process.

    Example Implementation:
        class AzurePostgresProvider:
            def provision(self, request):
                self.ensure_resource_group(...)
                ...
                return ConnectionInfo(...)

            def deprovision(self, request):
                self.delete_server(...)
    """

    def provision(self, request: 'ProvisionRequest') -> 'ConnectionInfo':
        """
        Make sure every resource for the request exists.

        Returns:
            Connection attributes for the provisioned database
        """
        ...

    def deprovision(self, request: 'DeprovisionRequest') -> None:
        """Delete the resources identified by the request."""
        ...


@runtime_checkable
class MessageSink(Protocol):
    """Receives protocol messages (info, debug, error, setenv) in order."""

    def emit(self, kind: str, text: str) -> None:
        ...
