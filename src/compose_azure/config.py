from pydantic_settings import BaseSettings, SettingsConfigDict

import compose_azure.constants as CONSTANTS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Azure account
    AZURE_SUBSCRIPTION_ID: str = ""

    # Defaults applied when the compose file does not set them
    AZURE_RESOURCE_GROUP: str = CONSTANTS.DEFAULT_RESOURCE_GROUP
    AZURE_LOCATION: str = CONSTANTS.DEFAULT_LOCATION

    # Service principal (optional, tried after the Azure CLI session)
    AZURE_TENANT_ID: str = ""
    AZURE_CLIENT_ID: str = ""
    AZURE_CLIENT_SECRET: str = ""

    # Logging
    DOCKER_AZURE_DEBUG: bool = False

    @property
    def has_service_principal(self) -> bool:
        return bool(self.AZURE_TENANT_ID and self.AZURE_CLIENT_ID and self.AZURE_CLIENT_SECRET)


def load_settings() -> Settings:
    """Read settings from the environment (and .env) for one invocation."""
    return Settings()
