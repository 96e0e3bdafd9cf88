"""
Custom exceptions for the Azure provider plugin.

Every failure a workflow can report maps to exactly one of these classes.
The command layer turns them into an `error` protocol message and a
non-zero exit code; nothing below the command layer exits the process.

Exception Hierarchy:
    ProvisioningError (base)
    ├── MissingCredentialConfigurationError - No subscription configured
    ├── UnsupportedResourceError - Unknown resource kind requested
    ├── InvalidParameterError - Required CLI parameter missing or invalid
    ├── AuthenticationFailureError - Azure rejected or could not obtain credentials
    ├── ProviderApiError - Any other Azure management API failure
    └── UnexpectedError - Anything else (bug, unexpected library error)
"""

from typing import Optional


class ProvisioningError(Exception):
    """
    Base exception for all provisioning-related errors.

    Attributes:
        message: Human-readable error description
        operation: Optional step that failed (e.g., "create server")
        resource_name: Optional name of the resource involved
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        resource_name: Optional[str] = None
    ):
        self.message = message
        self.operation = operation
        self.resource_name = resource_name

        details = []
        if operation:
            details.append(f"operation={operation}")
        if resource_name:
            details.append(f"resource={resource_name}")

        if details:
            full_message = f"{message} [{', '.join(details)}]"
        else:
            full_message = message

        super().__init__(full_message)


class MissingCredentialConfigurationError(ProvisioningError):
    """
    Raised when no Azure subscription is configured.

    Checked before any network call is made.
    """

    def __init__(self, variable: str = "AZURE_SUBSCRIPTION_ID"):
        self.variable = variable
        super().__init__(f"{variable} environment variable is required")


class UnsupportedResourceError(ProvisioningError):
    """
    Raised when the requested resource kind has no registered provider.

    Example:
        >>> ResourceRegistry.create("mysql")
        UnsupportedResourceError: Unsupported resource type: mysql. Currently only 'postgres' is supported.
    """

    def __init__(self, resource_kind: str, available_resources: list[str]):
        self.resource_kind = resource_kind
        self.available_resources = available_resources
        supported = ", ".join(f"'{name}'" for name in available_resources) or "none"
        message = (
            f"Unsupported resource type: {resource_kind}. "
            f"Currently only {supported} is supported."
        )
        super().__init__(message)


class InvalidParameterError(ProvisioningError):
    """Raised when a command parameter is missing or cannot be used."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        self.parameter = parameter
        super().__init__(message)


class AuthenticationFailureError(ProvisioningError):
    """
    Raised when Azure authentication fails.

    Covers both "no credential source available" and "token rejected".
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        resource_name: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.original_error = original_error
        super().__init__(message, operation=operation, resource_name=resource_name)


class ProviderApiError(ProvisioningError):
    """
    Raised when the Azure management API returns an error that the workflow
    does not treat as "not found" or "conflict".

    Attributes:
        status_code: HTTP status reported by Azure, if any
        original_error: The underlying SDK exception
    """

    def __init__(
        self,
        operation: str,
        resource_name: str,
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
        message: Optional[str] = None
    ):
        self.original_error = original_error
        self.status_code = status_code

        if message is None:
            message = f"Failed to {operation} '{resource_name}'"
            if status_code:
                message += f" (HTTP {status_code})"
            if original_error:
                message += f": {_describe(original_error)}"

        super().__init__(message, operation=operation, resource_name=resource_name)


class UnexpectedError(ProvisioningError):
    """Raised for any failure outside the other categories."""

    def __init__(self, original_error: Exception):
        self.original_error = original_error
        super().__init__(f"{type(original_error).__name__}: {original_error}")


def _describe(error: Exception) -> str:
    # azure-core errors carry a cleaner `message` than str()
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message.splitlines()[0]
    return str(error)
