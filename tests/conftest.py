import os
import sys
from types import SimpleNamespace

import pytest
from unittest.mock import MagicMock

# Set PYTHONPATH to include src if the package is not installed
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError

from compose_azure.config import Settings


# ==========================================
# Environment
# ==========================================

@pytest.fixture(scope="function", autouse=True)
def mock_env_vars(monkeypatch):
    """Remove real Azure configuration so no test can reach a subscription."""
    for name in (
        "AZURE_SUBSCRIPTION_ID",
        "AZURE_RESOURCE_GROUP",
        "AZURE_LOCATION",
        "AZURE_TENANT_ID",
        "AZURE_CLIENT_ID",
        "AZURE_CLIENT_SECRET",
        "DOCKER_AZURE_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.setitem(Settings.model_config, "env_file", None)


@pytest.fixture
def settings():
    """Settings with a subscription configured."""
    return Settings(AZURE_SUBSCRIPTION_ID="test-subscription-123")


# ==========================================
# Message Sink
# ==========================================

class RecordingSink:
    """Collects emitted protocol messages as (type, message) tuples."""

    def __init__(self):
        self.messages = []

    def emit(self, kind, text):
        self.messages.append((kind, text))

    def of_type(self, kind):
        return [text for message_kind, text in self.messages if message_kind == kind]

    @property
    def kinds(self):
        return [kind for kind, _ in self.messages]


@pytest.fixture
def sink():
    return RecordingSink()


# ==========================================
# Azure Fakes
# ==========================================

class FakePoller:
    def __init__(self, value=None):
        self._value = value

    def result(self):
        return self._value


class FakeAzure:
    """
    In-memory stand-in for the resource and PostgreSQL management clients.

    Mirrors the Azure semantics the provider relies on: reads of missing
    resources raise ResourceNotFoundError, creating an existing database
    raises ResourceExistsError, firewall rules are upserts.
    """

    def __init__(self):
        self.resource_groups = {}
        self.servers = {}
        self.firewall_rules = {}
        self.databases = set()
        self.calls = []

        self.resource_client = SimpleNamespace(resource_groups=SimpleNamespace(
            get=self._get_resource_group,
            create_or_update=self._create_resource_group,
        ))
        self.postgres_client = SimpleNamespace(
            servers=SimpleNamespace(
                get=self._get_server,
                begin_create_or_update=self._create_server,
                begin_update=self._update_server,
                begin_delete=self._delete_server,
            ),
            firewall_rules=SimpleNamespace(begin_create_or_update=self._upsert_firewall_rule),
            databases=SimpleNamespace(begin_create=self._create_database),
        )

    @property
    def clients(self):
        return {"resource": self.resource_client, "postgres": self.postgres_client}

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)

    # Resource groups
    def _get_resource_group(self, resource_group_name):
        self.calls.append(("get_resource_group", resource_group_name))
        if resource_group_name not in self.resource_groups:
            raise ResourceNotFoundError(f"Resource group '{resource_group_name}' could not be found.")
        return self.resource_groups[resource_group_name]

    def _create_resource_group(self, resource_group_name, parameters):
        self.calls.append(("create_resource_group", resource_group_name))
        group = SimpleNamespace(name=resource_group_name, **parameters)
        self.resource_groups[resource_group_name] = group
        return group

    # Servers
    def _get_server(self, resource_group_name, server_name):
        self.calls.append(("get_server", server_name))
        if (resource_group_name, server_name) not in self.servers:
            raise ResourceNotFoundError(f"The requested resource of type 'servers' with name '{server_name}' was not found.")
        return self.servers[(resource_group_name, server_name)]

    def _create_server(self, resource_group_name, server_name, parameters):
        self.calls.append(("create_server", server_name))
        server = SimpleNamespace(
            name=server_name,
            state="Ready",
            administrator_login=parameters["administratorLogin"],
            password=parameters["administratorLoginPassword"],
            parameters=parameters,
        )
        self.servers[(resource_group_name, server_name)] = server
        return FakePoller(server)

    def _update_server(self, resource_group_name, server_name, parameters):
        self.calls.append(("update_server", server_name))
        server = self.servers[(resource_group_name, server_name)]
        server.password = parameters["administratorLoginPassword"]
        return FakePoller(server)

    def _delete_server(self, resource_group_name, server_name):
        self.calls.append(("delete_server", server_name))
        self.servers.pop((resource_group_name, server_name), None)
        self.databases = {key for key in self.databases if key[:2] != (resource_group_name, server_name)}
        return FakePoller()

    # Firewall rules
    def _upsert_firewall_rule(self, resource_group_name, server_name, firewall_rule_name, parameters):
        self.calls.append(("upsert_firewall_rule", firewall_rule_name))
        self.firewall_rules[(resource_group_name, server_name, firewall_rule_name)] = (
            parameters["startIpAddress"], parameters["endIpAddress"]
        )
        return FakePoller()

    # Databases
    def _create_database(self, resource_group_name, server_name, database_name, parameters):
        self.calls.append(("create_database", database_name))
        key = (resource_group_name, server_name, database_name)
        if key in self.databases:
            raise ResourceExistsError(f"Database '{database_name}' already exists.")
        self.databases.add(key)
        return FakePoller()


@pytest.fixture
def fake_azure():
    return FakeAzure()


@pytest.fixture
def mock_azure_clients():
    """MagicMock clients: every read succeeds, every poller returns None."""
    resource = MagicMock()
    postgres = MagicMock()
    server = MagicMock()
    server.state = "Ready"
    server.administrator_login = "dbadmin"
    postgres.servers.get.return_value = server
    return {"resource": resource, "postgres": postgres}
