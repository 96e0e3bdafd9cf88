"""
Azure Provider package.

Azure Database for PostgreSQL Flexible Server implementation of the
ResourceProvider protocol. Auto-registers with ResourceRegistry on import.
"""

import compose_azure.constants as CONSTANTS
from compose_azure.core.registry import ResourceRegistry
from .provider import AzurePostgresProvider

# Auto-register this provider
ResourceRegistry.register(CONSTANTS.RESOURCE_POSTGRES, AzurePostgresProvider)

__all__ = ["AzurePostgresProvider"]
