# ==========================================
# 1. Supported Resources
# ==========================================
RESOURCE_POSTGRES = "postgres"
DEFAULT_RESOURCE = RESOURCE_POSTGRES

# ==========================================
# 2. Request Defaults
# ==========================================
DEFAULT_DATABASE_NAME = "defaultdb"
DEFAULT_RESOURCE_GROUP = "docker-compose-rg"
DEFAULT_LOCATION = "eastus"
DEFAULT_SKU = "Standard_B1ms"
DEFAULT_STORAGE_MB = 32768
DEFAULT_BACKUP_RETENTION_DAYS = 7
DEFAULT_GEO_REDUNDANT_BACKUP = False
DEFAULT_ADMIN_USERNAME = "dbadmin"
DEFAULT_POSTGRES_VERSION = "14"

TRUTHY_VALUES = ("true", "1", "yes", "y")

# ==========================================
# 3. Azure PostgreSQL Flexible Server
# ==========================================
POSTGRES_DOMAIN_SUFFIX = "postgres.database.azure.com"
POSTGRES_PORT = 5432
POSTGRES_SSL_MODE = "require"
POSTGRES_CHARSET = "UTF8"
POSTGRES_COLLATION = "en_US.utf8"
POSTGRES_READY_STATE = "Ready"

# SKUs starting with this prefix belong to the Burstable tier
BURSTABLE_SKU_PREFIX = "Standard_B"
TIER_BURSTABLE = "Burstable"
TIER_GENERAL_PURPOSE = "GeneralPurpose"

# Firewall rules: (name, start ip, end ip)
# AllowAll is a development convenience and must be removed for production servers.
FIREWALL_RULES = [
    ("AllowAllAzureIps", "0.0.0.0", "0.0.0.0"),
    ("AllowAll", "0.0.0.0", "255.255.255.255"),
]

# ==========================================
# 4. Tagging
# ==========================================
TAG_MANAGED_BY = "managed_by"
TAG_MANAGED_BY_VALUE = "docker-compose"
TAG_CREATED_AT = "created_at"
TAG_COMPOSE_PROJECT = "compose_project"
TAG_COMPOSE_SERVICE = "compose_service"

# ==========================================
# 5. Connection Info Keys (setenv order)
# ==========================================
CONNECTION_INFO_KEYS = ["HOST", "PORT", "DATABASE", "USER", "PASSWORD", "URL", "SSL_MODE"]

# ==========================================
# 6. CLI
# ==========================================
PROGRAM_NAME = "docker-azure"
PROGRAM_VERSION = "1.0.0"
PROGRAM_DESCRIPTION = "Docker Compose provider plugin for Azure services"
METADATA_DESCRIPTION = "Manage Azure services (PostgreSQL, MySQL, etc.)"
COMMANDS = ("up", "down", "metadata")
# Compose-level options that may carry their value as the next argument
COMPOSE_VALUE_OPTIONS = ("--project-name", "--project_name")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# ==========================================
# 7. Passwords
# ==========================================
PASSWORD_LENGTH = 24
PASSWORD_MIN_LENGTH = 8
# '#', '%', '/', '?' and ':' are left out so the URL user-info stays parseable
PASSWORD_SYMBOLS = "!@$^*-_"
