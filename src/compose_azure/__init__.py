"""
compose_azure - Docker Compose provider plugin for Azure services.

Provisions Azure Database for PostgreSQL Flexible Servers for compose
services declared with `provider: {type: azure}` and hands the connection
details back to Docker Compose as environment variables.
"""

from compose_azure.constants import PROGRAM_VERSION as __version__

__all__ = ["__version__"]
