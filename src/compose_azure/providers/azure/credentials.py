"""
Azure credential chain.

Credential sources are tried in a fixed order and the first one that
returns a token wins:
    1. Azure CLI session (`az login`)
    2. Service principal secret (AZURE_TENANT_ID / AZURE_CLIENT_ID /
       AZURE_CLIENT_SECRET), only when all three are configured
    3. Managed identity of the host platform

No token is requested here; the chain is consulted on the first API call,
so authentication problems surface from the first provisioning step.
"""

import logging
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from compose_azure.config import Settings

logger = logging.getLogger(__name__)


def build_credential(settings: 'Settings') -> Any:
    """Create the chained credential used by all management clients."""
    from azure.identity import (
        AzureCliCredential,
        ChainedTokenCredential,
        ClientSecretCredential,
        ManagedIdentityCredential,
    )

    sources = [AzureCliCredential()]
    names = ["AzureCliCredential"]

    if settings.has_service_principal:
        sources.append(ClientSecretCredential(
            tenant_id=settings.AZURE_TENANT_ID,
            client_id=settings.AZURE_CLIENT_ID,
            client_secret=settings.AZURE_CLIENT_SECRET
        ))
        names.append("ClientSecretCredential")

    sources.append(ManagedIdentityCredential())
    names.append("ManagedIdentityCredential")

    logger.debug(f"Credential chain: {' -> '.join(names)}")
    return ChainedTokenCredential(*sources)
