"""
Azure naming and tagging conventions.

The server name is supplied by the caller and used unchanged; only derived
values (host name, tags) are computed here.

Naming Convention:
    - Host: {server_name}.postgres.database.azure.com
    - Firewall rules: AllowAllAzureIps, AllowAll
    - Tags: managed_by=docker-compose, created_at=<UTC ISO-8601>,
      compose_project / compose_service when known
"""

from datetime import datetime, timezone
from typing import Dict, Optional

import compose_azure.constants as CONSTANTS


def server_host(server_name: str) -> str:
    """
    Fully qualified host name of a flexible server.

    Example:
        >>> server_host("srv1")
        "srv1.postgres.database.azure.com"
    """
    return f"{server_name}.{CONSTANTS.POSTGRES_DOMAIN_SUFFIX}"


def sku_tier(sku: str) -> str:
    """Pricing tier for a SKU name (Standard_B* is Burstable)."""
    if sku.startswith(CONSTANTS.BURSTABLE_SKU_PREFIX):
        return CONSTANTS.TIER_BURSTABLE
    return CONSTANTS.TIER_GENERAL_PURPOSE


def storage_size_gb(storage_mb: int) -> int:
    """Round a megabyte size up to whole gigabytes."""
    return -(-storage_mb // 1024)


def resource_tags(
    project_name: Optional[str] = None,
    instance_name: Optional[str] = None,
    now: Optional[datetime] = None
) -> Dict[str, str]:
    """
    Tags for resources created by the plugin.

    Args:
        project_name: Compose project name, if passed by Docker Compose
        instance_name: Compose service name
        now: Creation timestamp (defaults to the current UTC time)
    """
    created_at = (now or datetime.now(timezone.utc)).isoformat()
    tags = {
        CONSTANTS.TAG_MANAGED_BY: CONSTANTS.TAG_MANAGED_BY_VALUE,
        CONSTANTS.TAG_CREATED_AT: created_at,
    }
    if project_name:
        tags[CONSTANTS.TAG_COMPOSE_PROJECT] = project_name
    if instance_name:
        tags[CONSTANTS.TAG_COMPOSE_SERVICE] = instance_name
    return tags
