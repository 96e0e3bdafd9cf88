"""
Provisioning and deprovisioning workflows.

The workflow validates what it can without the network, picks the provider
for the requested resource kind, and runs it. It reports failure by raising
ProvisioningError subclasses and leaves exit codes to the command layer.

Checks before any provider call, in order:
    1. AZURE_SUBSCRIPTION_ID configured -> MissingCredentialConfigurationError
    2. Resource kind registered -> UnsupportedResourceError

Concurrency:
    Two invocations racing on the same server are not coordinated here.
    Azure rejects the second create, which surfaces as ProviderApiError.
"""

import logging
from typing import Any, Callable, TYPE_CHECKING

from compose_azure.core.exceptions import (
    MissingCredentialConfigurationError,
    ProvisioningError,
    UnexpectedError,
)
from compose_azure.core.registry import ResourceRegistry
from compose_azure.messages import MessageType

# Registers the built-in providers
import compose_azure.providers  # noqa: F401

if TYPE_CHECKING:
    from compose_azure.config import Settings
    from compose_azure.core.models import ConnectionInfo, DeprovisionRequest, ProvisionRequest
    from compose_azure.core.protocols import MessageSink, ResourceProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[..., 'ResourceProvider']


class Workflow:
    """
    Runs one provisioning or deprovisioning request.

    Args:
        settings: Environment configuration
        sink: Destination for progress messages
        provider_factory: Creates a provider for a resource kind; called as
            provider_factory(kind, settings=..., sink=...). Defaults to
            ResourceRegistry.create.
    """

    def __init__(
        self,
        settings: 'Settings',
        sink: 'MessageSink',
        provider_factory: ProviderFactory = ResourceRegistry.create
    ):
        self.settings = settings
        self.sink = sink
        self._provider_factory = provider_factory

    def provision(self, request: 'ProvisionRequest') -> 'ConnectionInfo':
        """
        Provision the requested resource.

        Raises:
            ProvisioningError: Any failure, already categorized
        """
        provider = self._provider_for(request.resource_kind)
        logger.debug(f"Provisioning {request.resource_kind} server {request.server_name} "
                     f"in {request.resource_group} ({request.location})")
        return self._run(provider.provision, request)

    def deprovision(self, request: 'DeprovisionRequest') -> None:
        """
        Delete the requested resource.

        Raises:
            ProvisioningError: Any failure, already categorized
        """
        provider = self._provider_for(request.resource_kind)
        logger.debug(f"Deprovisioning {request.resource_kind} server {request.server_name} "
                     f"in {request.resource_group}")
        self._run(provider.deprovision, request)

    def _provider_for(self, resource_kind: str) -> 'ResourceProvider':
        if not self.settings.AZURE_SUBSCRIPTION_ID:
            raise MissingCredentialConfigurationError()
        provider = self._provider_factory(resource_kind, settings=self.settings, sink=self.sink)
        self.sink.emit(MessageType.INFO.value, "Authenticating with Azure...")
        return provider

    @staticmethod
    def _run(step: Callable[[Any], Any], request: Any) -> Any:
        try:
            return step(request)
        except ProvisioningError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error: {type(e).__name__}: {e}")
            raise UnexpectedError(e) from e
