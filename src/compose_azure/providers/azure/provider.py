"""
Azure Database for PostgreSQL Flexible Server provider.

Provisioning runs four idempotent steps strictly in order, each blocking
until Azure reports completion:

    1. Resource Group: read, create when missing (never modified otherwise)
    2. Server: read, create when missing (5-10 minutes), reuse otherwise
    3. Firewall: upsert AllowAllAzureIps and AllowAll, every time
    4. Database: create, a conflict means it already exists
    5. Password: a reused server gets the new administrator password last,
       so a failed run never leaves it with a password that was not reported

Deprovisioning deletes the server only; Azure removes its databases and
firewall rules with it. The resource group stays, other servers may live
in it.

SDK Clients Initialized:
    - ResourceManagementClient: Resource Group management
    - PostgreSQLManagementClient: Servers, firewall rules, databases

Usage:
    provider = AzurePostgresProvider(settings=settings, sink=sink)
    info = provider.provision(request)
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, TYPE_CHECKING

from azure.core.exceptions import HttpResponseError

import compose_azure.constants as CONSTANTS
from compose_azure.core.exceptions import ProviderApiError
from compose_azure.core.models import ConnectionInfo
from compose_azure.providers.base import BaseProvider
from .credentials import build_credential
from .errors import azure_errors, is_conflict, is_not_found
from .naming import resource_tags, server_host, sku_tier, storage_size_gb
from .passwords import generate_password

if TYPE_CHECKING:
    from compose_azure.config import Settings
    from compose_azure.core.models import DeprovisionRequest, ProvisionRequest
    from compose_azure.core.protocols import MessageSink

logger = logging.getLogger(__name__)


def build_server_parameters(request: 'ProvisionRequest', admin_password: str) -> Dict[str, Any]:
    """
    Create payload for a new flexible server.

    Only used when the server does not exist yet.
    """
    return {
        "location": request.location,
        "sku": {
            "name": request.sku,
            "tier": sku_tier(request.sku)
        },
        "storage": {
            "storageSizeGB": storage_size_gb(request.storage_mb)
        },
        "backup": {
            "backupRetentionDays": request.backup_retention_days,
            "geoRedundantBackup": "Enabled" if request.geo_redundant_backup else "Disabled"
        },
        "version": request.version,
        "administratorLogin": request.admin_username,
        "administratorLoginPassword": admin_password,
        "highAvailability": {
            "mode": "Disabled"
        },
        "tags": resource_tags(request.project_name, request.instance_name),
    }


class AzurePostgresProvider(BaseProvider):
    """
    Provisions PostgreSQL Flexible Servers and databases.

    Attributes:
        name: Resource kind served by this provider ("postgres")
        clients: {"resource": ResourceManagementClient,
                  "postgres": PostgreSQLManagementClient}
    """

    name: str = CONSTANTS.RESOURCE_POSTGRES

    def __init__(
        self,
        settings: 'Settings',
        sink: 'MessageSink',
        clients: Optional[Dict[str, Any]] = None,
        password_factory: Callable[[], str] = generate_password
    ):
        super().__init__(settings, sink, clients)
        self._password_factory = password_factory

    def initialize_clients(self) -> None:
        """Initialize the Azure management clients."""
        from azure.mgmt.resource.resources import ResourceManagementClient
        from azure.mgmt.postgresqlflexibleservers import PostgreSQLManagementClient

        subscription_id = self.settings.AZURE_SUBSCRIPTION_ID
        credential = build_credential(self.settings)

        self._clients["resource"] = ResourceManagementClient(credential=credential, subscription_id=subscription_id)
        self._clients["postgres"] = PostgreSQLManagementClient(credential=credential, subscription_id=subscription_id)

    # ==========================================
    # Workflow
    # ==========================================

    def provision(self, request: 'ProvisionRequest') -> ConnectionInfo:
        """
        Ensure resource group, server, firewall rules and database exist.

        Calling this twice with the same request creates nothing the second
        time; the firewall upsert runs both times and the reused server
        gets the newly generated password as the final step.

        Returns:
            ConnectionInfo for the database

        Raises:
            AuthenticationFailureError: Azure rejected the credential
            ProviderApiError: Any Azure error other than the expected
                "not found" / "conflict" responses
        """
        self._debug(f"Provisioning PostgreSQL server: {request.server_name}")

        self.ensure_resource_group(request)

        admin_password = self._password_factory()
        admin_username, created = self.ensure_server(request, admin_password)

        self.configure_firewall(request)
        self.ensure_database(request)

        if not created:
            self.reset_admin_password(request, admin_password)

        return ConnectionInfo(
            host=server_host(request.server_name),
            port=CONSTANTS.POSTGRES_PORT,
            database=request.database_name,
            user=admin_username,
            password=admin_password,
        )

    def deprovision(self, request: 'DeprovisionRequest') -> None:
        """
        Delete the server and wait for Azure to confirm.

        Deleting a server that does not exist is reported by Azure as a
        no-op or as an error; errors become ProviderApiError.
        """
        self._info(f"Deprovisioning PostgreSQL server: {request.server_name}")

        with azure_errors("delete server", request.server_name):
            poller = self.clients["postgres"].servers.begin_delete(
                resource_group_name=request.resource_group,
                server_name=request.server_name
            )
            poller.result()

        self._info("Server deleted successfully")

    # ==========================================
    # Step 1: Resource Group
    # ==========================================

    def check_resource_group(self, rg_name: str) -> bool:
        """
        Check if the Resource Group exists.

        Returns:
            True if it exists, False on "not found"

        Raises:
            ProviderApiError: On any other error
        """
        with azure_errors("read resource group", rg_name):
            try:
                self.clients["resource"].resource_groups.get(resource_group_name=rg_name)
                return True
            except HttpResponseError as e:
                if is_not_found(e):
                    return False
                raise

    def ensure_resource_group(self, request: 'ProvisionRequest') -> bool:
        """
        Create the Resource Group when missing.

        Returns:
            True if it was created, False if it already existed
        """
        rg_name = request.resource_group

        if self.check_resource_group(rg_name):
            self._debug(f"Using existing resource group: {rg_name}")
            return False

        self._log_resource_creation("resource group", rg_name)
        with azure_errors("create resource group", rg_name):
            self.clients["resource"].resource_groups.create_or_update(
                resource_group_name=rg_name,
                parameters={
                    "location": request.location,
                    "tags": resource_tags(request.project_name),
                }
            )
        logger.info(f"✓ Resource Group created: {rg_name}")
        return True

    # ==========================================
    # Step 2: Server
    # ==========================================

    def get_server(self, rg_name: str, server_name: str) -> Optional[Any]:
        """
        Read the server.

        Returns:
            The server resource, or None on "not found"
        """
        with azure_errors("read server", server_name):
            try:
                return self.clients["postgres"].servers.get(
                    resource_group_name=rg_name,
                    server_name=server_name
                )
            except HttpResponseError as e:
                if is_not_found(e):
                    return None
                raise

    def ensure_server(self, request: 'ProvisionRequest', admin_password: str) -> Tuple[str, bool]:
        """
        Create the server, or reuse an existing one.

        admin_password is only used for a new server. Azure never returns
        the password of an existing one; provision() resets it once every
        other step has succeeded.

        Returns:
            (administrator login to connect with, True if the server was created)

        Raises:
            ProviderApiError: If an existing server is not Ready (e.g. still
                being created by an interrupted run)
        """
        server_name = request.server_name
        server = self.get_server(request.resource_group, server_name)

        if server is not None:
            self._require_ready(server, server_name)
            self._log_resource_exists("Server", server_name)

            admin_login = getattr(server, "administrator_login", None)
            if isinstance(admin_login, str) and admin_login:
                if admin_login != request.admin_username:
                    logger.warning(
                        f"Server {server_name} uses admin login '{admin_login}', "
                        f"ignoring requested '{request.admin_username}'"
                    )
                return admin_login, False
            return request.admin_username, False

        self._info("Creating PostgreSQL server (this may take 5-10 minutes)...")
        with azure_errors("create server", server_name):
            poller = self.clients["postgres"].servers.begin_create_or_update(
                resource_group_name=request.resource_group,
                server_name=server_name,
                parameters=build_server_parameters(request, admin_password)
            )
            poller.result()
        self._info("Server created successfully")
        return request.admin_username, True

    def reset_admin_password(self, request: 'ProvisionRequest', admin_password: str) -> None:
        """Set the administrator password of an existing server."""
        self._debug(f"Resetting administrator password for server: {request.server_name}")
        with azure_errors("update server", request.server_name):
            poller = self.clients["postgres"].servers.begin_update(
                resource_group_name=request.resource_group,
                server_name=request.server_name,
                parameters={"administratorLoginPassword": admin_password}
            )
            poller.result()

    @staticmethod
    def _require_ready(server: Any, server_name: str) -> None:
        state = getattr(server, "state", None)
        state = getattr(state, "value", state)
        if isinstance(state, str) and state != CONSTANTS.POSTGRES_READY_STATE:
            raise ProviderApiError(
                "use server",
                server_name,
                message=(
                    f"Server '{server_name}' exists but is in state '{state}'; "
                    f"wait until it is {CONSTANTS.POSTGRES_READY_STATE} and run again"
                )
            )

    # ==========================================
    # Step 3: Firewall
    # ==========================================

    def configure_firewall(self, request: 'ProvisionRequest') -> None:
        """Upsert the firewall rules. Re-applying identical bounds is a no-op in Azure."""
        self._debug("Configuring firewall rules...")
        for rule_name, start_ip, end_ip in CONSTANTS.FIREWALL_RULES:
            with azure_errors("configure firewall rule", rule_name):
                poller = self.clients["postgres"].firewall_rules.begin_create_or_update(
                    resource_group_name=request.resource_group,
                    server_name=request.server_name,
                    firewall_rule_name=rule_name,
                    parameters={
                        "startIpAddress": start_ip,
                        "endIpAddress": end_ip
                    }
                )
                poller.result()
            logger.debug(f"Firewall rule {rule_name}: {start_ip} - {end_ip}")

    # ==========================================
    # Step 4: Database
    # ==========================================

    def ensure_database(self, request: 'ProvisionRequest') -> bool:
        """
        Create the database. A conflict (already exists) is success.

        Returns:
            True if created, False if it already existed
        """
        db_name = request.database_name
        self._info(f"Creating database: {db_name}")

        with azure_errors("create database", db_name):
            try:
                poller = self.clients["postgres"].databases.begin_create(
                    resource_group_name=request.resource_group,
                    server_name=request.server_name,
                    database_name=db_name,
                    parameters={
                        "charset": CONSTANTS.POSTGRES_CHARSET,
                        "collation": CONSTANTS.POSTGRES_COLLATION
                    }
                )
                poller.result()
            except HttpResponseError as e:
                if not is_conflict(e):
                    raise
                self._debug(f"Database {db_name} already exists")
                return False
        return True
