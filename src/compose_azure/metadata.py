"""
Provider metadata returned by the `metadata` command.

Docker Compose uses this document to validate the `options` of a provider
service before calling `up` / `down`. It is printed as one pretty-printed
JSON object, not as protocol messages.
"""

import json
from typing import Any, Dict, List, Optional

import compose_azure.constants as CONSTANTS

PARAMETER_TYPES = ("string", "integer", "boolean", "number")


def _parameter(
    name: str,
    description: str,
    type: str = "string",
    required: bool = False,
    default: Optional[Any] = None,
    enum: Optional[str] = None
) -> Dict[str, Any]:
    if type not in PARAMETER_TYPES:
        raise ValueError(f"Invalid parameter type '{type}' for {name}")
    parameter: Dict[str, Any] = {
        "name": name,
        "description": description,
        "required": required,
        "type": type,
    }
    if enum is not None:
        parameter["enum"] = enum
    if default is not None:
        # Compose passes every option as a string, defaults are strings too
        parameter["default"] = str(default).lower() if isinstance(default, bool) else str(default)
    return parameter


def up_parameters() -> List[Dict[str, Any]]:
    return [
        _parameter("resource", "Azure resource type (postgres, mysql)",
                   required=True, enum=CONSTANTS.RESOURCE_POSTGRES),
        _parameter("server_name", "Globally unique server name", required=True),
        _parameter("database_name", "Name of the database to create",
                   default=CONSTANTS.DEFAULT_DATABASE_NAME),
        _parameter("resource_group", "Azure resource group name",
                   default=CONSTANTS.DEFAULT_RESOURCE_GROUP),
        _parameter("location", "Azure region (e.g., eastus, westus2)",
                   default=CONSTANTS.DEFAULT_LOCATION),
        _parameter("sku", "Pricing tier (e.g., Standard_B1ms, Standard_D2s_v3)",
                   default=CONSTANTS.DEFAULT_SKU),
        _parameter("storage_mb", "Storage size in megabytes",
                   type="integer", default=CONSTANTS.DEFAULT_STORAGE_MB),
        _parameter("backup_retention_days", "Number of days to retain backups",
                   type="integer", default=CONSTANTS.DEFAULT_BACKUP_RETENTION_DAYS),
        _parameter("geo_redundant_backup", "Enable geo-redundant backups",
                   type="boolean", default=CONSTANTS.DEFAULT_GEO_REDUNDANT_BACKUP),
        _parameter("admin_username", "Administrator username",
                   default=CONSTANTS.DEFAULT_ADMIN_USERNAME),
        _parameter("version", "PostgreSQL version",
                   default=CONSTANTS.DEFAULT_POSTGRES_VERSION),
    ]


def down_parameters() -> List[Dict[str, Any]]:
    return [
        _parameter("server_name", "Name of the server to delete", required=True),
        _parameter("resource_group", "Azure resource group name",
                   default=CONSTANTS.DEFAULT_RESOURCE_GROUP),
    ]


def build_metadata() -> Dict[str, Any]:
    """Return the metadata document for both sub-commands."""
    return {
        "description": CONSTANTS.METADATA_DESCRIPTION,
        "up": {"parameters": up_parameters()},
        "down": {"parameters": down_parameters()},
    }


def render_metadata() -> str:
    return json.dumps(build_metadata(), indent=2)
