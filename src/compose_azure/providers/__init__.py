"""
Provider implementations package.

Auto-Registration:
    Importing this package registers every resource provider with the
    ResourceRegistry, because each provider package calls
    ResourceRegistry.register() when imported.

Package Structure:
    providers/
    ├── __init__.py         # This file - imports all providers
    ├── base.py             # Shared base class
    └── azure/              # Azure implementation
        ├── __init__.py     # Registers AzurePostgresProvider as "postgres"
        ├── provider.py     # Provisioning / deprovisioning steps
        ├── credentials.py  # Credential chain
        ├── errors.py       # azure-core exception mapping
        ├── naming.py       # Host names, tags, SKU tier
        └── passwords.py    # Administrator password generation
"""

# Import provider modules to trigger auto-registration
from . import azure
