"""
Request and result types for one plugin invocation.

A request is built once from the command arguments, consumed by the
workflow, and discarded. Nothing here survives between invocations.

Design Pattern: Parameter Object
    - CLI options arrive as loose strings
    - from_options() applies defaults and type conversion in one place
    - The workflow only ever sees normalized, typed values
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

import compose_azure.constants as CONSTANTS
from .exceptions import InvalidParameterError

if TYPE_CHECKING:
    from compose_azure.config import Settings

logger = logging.getLogger(__name__)


# ==========================================
# Option Parsing Helpers
# ==========================================

def _text(options: Mapping[str, Any], key: str) -> Optional[str]:
    """Return a stripped string option, or None when missing or blank."""
    value = options.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _positive_int(options: Mapping[str, Any], key: str, default: int) -> int:
    """Parse an integer option, falling back to the default on bad input."""
    raw = options.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        logger.warning(f"Ignoring non-numeric {key}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {key}={raw!r}, using {default}")
        return default
    return value


def _flag(options: Mapping[str, Any], key: str, default: bool) -> bool:
    raw = options.get(key)
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in CONSTANTS.TRUTHY_VALUES


def _require_server_name(options: Mapping[str, Any]) -> str:
    server_name = _text(options, "server_name")
    if not server_name:
        raise InvalidParameterError("Missing required parameter: server_name", parameter="server_name")
    return server_name


# ==========================================
# Requests
# ==========================================

@dataclass(frozen=True)
class ProvisionRequest:
    """
    Input to the provisioning workflow.

    server_name and resource_group together identify the managed server.
    The configuration attributes (sku .. version) only matter when the
    server does not exist yet.

    Attributes:
        resource_kind: Resource type, currently only "postgres"
        server_name: Globally unique server name (never altered)
        database_name: Database to create on the server
        resource_group: Azure resource group holding the server
        location: Azure region
        sku: Compute SKU (e.g., "Standard_B1ms")
        storage_mb: Storage size in megabytes
        backup_retention_days: Days to keep backups
        geo_redundant_backup: Enable geo-redundant backups
        admin_username: Administrator login
        version: PostgreSQL engine version
        instance_name: Compose service name (tagging only)
        project_name: Compose project name (tagging only)
    """

    resource_kind: str
    server_name: str
    database_name: str = CONSTANTS.DEFAULT_DATABASE_NAME
    resource_group: str = CONSTANTS.DEFAULT_RESOURCE_GROUP
    location: str = CONSTANTS.DEFAULT_LOCATION
    sku: str = CONSTANTS.DEFAULT_SKU
    storage_mb: int = CONSTANTS.DEFAULT_STORAGE_MB
    backup_retention_days: int = CONSTANTS.DEFAULT_BACKUP_RETENTION_DAYS
    geo_redundant_backup: bool = CONSTANTS.DEFAULT_GEO_REDUNDANT_BACKUP
    admin_username: str = CONSTANTS.DEFAULT_ADMIN_USERNAME
    version: str = CONSTANTS.DEFAULT_POSTGRES_VERSION
    instance_name: Optional[str] = None
    project_name: Optional[str] = None

    @classmethod
    def from_options(
        cls,
        instance_name: Optional[str],
        options: Mapping[str, Any],
        settings: 'Settings'
    ) -> 'ProvisionRequest':
        """
        Build a request from raw `up` options.

        Args:
            instance_name: Compose service name passed as positional argument
            options: Option name -> raw value (strings from the CLI)
            settings: Configured environment defaults

        Returns:
            Normalized ProvisionRequest

        Raises:
            InvalidParameterError: If server_name is missing
        """
        resource_kind = (
            _text(options, "resource")
            or _text(options, "type")
            or CONSTANTS.DEFAULT_RESOURCE
        ).lower()

        return cls(
            resource_kind=resource_kind,
            server_name=_require_server_name(options),
            database_name=_text(options, "database_name") or CONSTANTS.DEFAULT_DATABASE_NAME,
            resource_group=_text(options, "resource_group") or settings.AZURE_RESOURCE_GROUP,
            location=_text(options, "location") or settings.AZURE_LOCATION,
            sku=_text(options, "sku") or CONSTANTS.DEFAULT_SKU,
            storage_mb=_positive_int(options, "storage_mb", CONSTANTS.DEFAULT_STORAGE_MB),
            backup_retention_days=_positive_int(
                options, "backup_retention_days", CONSTANTS.DEFAULT_BACKUP_RETENTION_DAYS
            ),
            geo_redundant_backup=_flag(
                options, "geo_redundant_backup", CONSTANTS.DEFAULT_GEO_REDUNDANT_BACKUP
            ),
            admin_username=_text(options, "admin_username") or CONSTANTS.DEFAULT_ADMIN_USERNAME,
            version=_text(options, "version") or CONSTANTS.DEFAULT_POSTGRES_VERSION,
            instance_name=instance_name,
            project_name=_text(options, "project_name"),
        )


@dataclass(frozen=True)
class DeprovisionRequest:
    """Input to the deprovisioning workflow."""

    server_name: str
    resource_group: str = CONSTANTS.DEFAULT_RESOURCE_GROUP
    resource_kind: str = CONSTANTS.DEFAULT_RESOURCE
    instance_name: Optional[str] = None
    project_name: Optional[str] = None

    @classmethod
    def from_options(
        cls,
        instance_name: Optional[str],
        options: Mapping[str, Any],
        settings: 'Settings'
    ) -> 'DeprovisionRequest':
        """Build a request from raw `down` options."""
        resource_kind = (
            _text(options, "resource")
            or _text(options, "type")
            or CONSTANTS.DEFAULT_RESOURCE
        ).lower()

        return cls(
            server_name=_require_server_name(options),
            resource_group=_text(options, "resource_group") or settings.AZURE_RESOURCE_GROUP,
            resource_kind=resource_kind,
            instance_name=instance_name,
            project_name=_text(options, "project_name"),
        )


# ==========================================
# Result
# ==========================================

def build_connection_url(user: str, password: str, host: str, port: int, database: str) -> str:
    """
    Build the PostgreSQL connection URL.

    The password is inserted verbatim; generated passwords avoid the
    characters that would break user-info parsing.

    Example:
        >>> build_connection_url("dbadmin", "P@ss1234", "srv1.postgres.database.azure.com", 5432, "db1")
        "postgresql://dbadmin:P@ss1234@srv1.postgres.database.azure.com:5432/db1?sslmode=require"
    """
    return (
        f"postgresql://{user}:{password}@{host}:{port}/{database}"
        f"?sslmode={CONSTANTS.POSTGRES_SSL_MODE}"
    )


@dataclass(frozen=True)
class ConnectionInfo:
    """Connection attributes handed back to the compose services."""

    host: str
    port: int
    database: str
    user: str
    password: str
    ssl_mode: str = CONSTANTS.POSTGRES_SSL_MODE
    url: str = field(default="")

    def __post_init__(self):
        if not self.url:
            # frozen dataclass: bypass __setattr__ for the derived field
            object.__setattr__(
                self, "url",
                build_connection_url(self.user, self.password, self.host, self.port, self.database)
            )

    def to_env(self) -> Dict[str, str]:
        """
        Return the environment mapping in setenv order.

        Keys and order come from CONSTANTS.CONNECTION_INFO_KEYS.
        """
        values = {
            "HOST": self.host,
            "PORT": str(self.port),
            "DATABASE": self.database,
            "USER": self.user,
            "PASSWORD": self.password,
            "URL": self.url,
            "SSL_MODE": self.ssl_mode,
        }
        return {key: values[key] for key in CONSTANTS.CONNECTION_INFO_KEYS}
