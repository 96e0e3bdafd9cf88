"""
Azure naming and tagging tests.
"""

from datetime import datetime, timezone

import pytest

from compose_azure.providers.azure.naming import (
    resource_tags,
    server_host,
    sku_tier,
    storage_size_gb,
)


class TestServerHost:
    def test_server_host_uses_fixed_suffix(self):
        assert server_host("srv1") == "srv1.postgres.database.azure.com"

    def test_server_name_not_altered(self):
        """The caller's server name is used verbatim."""
        assert server_host("My-Server-01").startswith("My-Server-01.")


class TestSkuTier:
    @pytest.mark.parametrize("sku,tier", [
        ("Standard_B1ms", "Burstable"),
        ("Standard_B2s", "Burstable"),
        ("Standard_D2s_v3", "GeneralPurpose"),
        ("Standard_E4s_v3", "GeneralPurpose"),
    ])
    def test_sku_tier(self, sku, tier):
        assert sku_tier(sku) == tier


class TestStorageSize:
    @pytest.mark.parametrize("storage_mb,expected", [
        (32768, 32),
        (1024, 1),
        (1025, 2),
        (1, 1),
    ])
    def test_storage_size_rounds_up(self, storage_mb, expected):
        assert storage_size_gb(storage_mb) == expected


class TestResourceTags:
    def test_base_tags(self):
        now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        tags = resource_tags(now=now)

        assert tags == {"managed_by": "docker-compose", "created_at": "2024-01-02T03:04:05+00:00"}

    def test_compose_tags_added_when_known(self):
        tags = resource_tags(project_name="shop", instance_name="db")

        assert tags["compose_project"] == "shop"
        assert tags["compose_service"] == "db"

    def test_created_at_is_utc(self):
        created_at = datetime.fromisoformat(resource_tags()["created_at"])

        assert created_at.utcoffset().total_seconds() == 0
