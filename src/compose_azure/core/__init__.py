"""
Core types shared by the workflow, the providers and the command layer.

Contents:
    - models: ProvisionRequest, DeprovisionRequest, ConnectionInfo
    - exceptions: Error taxonomy reported to Docker Compose
    - protocols: ResourceProvider, MessageSink
    - registry: ResourceRegistry (resource kind -> provider class)
"""

from .exceptions import (
    ProvisioningError,
    MissingCredentialConfigurationError,
    UnsupportedResourceError,
    InvalidParameterError,
    AuthenticationFailureError,
    ProviderApiError,
    UnexpectedError,
)
from .models import ProvisionRequest, DeprovisionRequest, ConnectionInfo, build_connection_url
from .protocols import ResourceProvider, MessageSink
from .registry import ResourceRegistry

__all__ = [
    "ProvisioningError",
    "MissingCredentialConfigurationError",
    "UnsupportedResourceError",
    "InvalidParameterError",
    "AuthenticationFailureError",
    "ProviderApiError",
    "UnexpectedError",
    "ProvisionRequest",
    "DeprovisionRequest",
    "ConnectionInfo",
    "build_connection_url",
    "ResourceProvider",
    "MessageSink",
    "ResourceRegistry",
]
