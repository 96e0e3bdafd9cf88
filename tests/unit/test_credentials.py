"""
Credential chain tests.

azure.identity classes are patched, no token is ever requested.
"""

from unittest.mock import patch

from compose_azure.config import Settings
from compose_azure.providers.azure.credentials import build_credential


class TestBuildCredential:
    @patch("azure.identity.ChainedTokenCredential")
    @patch("azure.identity.ManagedIdentityCredential")
    @patch("azure.identity.ClientSecretCredential")
    @patch("azure.identity.AzureCliCredential")
    def test_chain_without_service_principal(self, mock_cli, mock_secret, mock_msi, mock_chain):
        """Happy path: CLI then managed identity."""
        result = build_credential(Settings(AZURE_SUBSCRIPTION_ID="sub"))

        mock_secret.assert_not_called()
        mock_chain.assert_called_once_with(mock_cli.return_value, mock_msi.return_value)
        assert result is mock_chain.return_value

    @patch("azure.identity.ChainedTokenCredential")
    @patch("azure.identity.ManagedIdentityCredential")
    @patch("azure.identity.ClientSecretCredential")
    @patch("azure.identity.AzureCliCredential")
    def test_chain_with_service_principal(self, mock_cli, mock_secret, mock_msi, mock_chain):
        """Service principal sits between CLI and managed identity."""
        settings = Settings(
            AZURE_SUBSCRIPTION_ID="sub",
            AZURE_TENANT_ID="tenant",
            AZURE_CLIENT_ID="client",
            AZURE_CLIENT_SECRET="secret",
        )

        build_credential(settings)

        mock_secret.assert_called_once_with(tenant_id="tenant", client_id="client", client_secret="secret")
        mock_chain.assert_called_once_with(
            mock_cli.return_value, mock_secret.return_value, mock_msi.return_value
        )
