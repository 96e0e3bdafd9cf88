"""
Translation of azure-core exceptions into the plugin's error taxonomy.

Only two Azure responses are ever treated as non-errors, and only by the
step that expects them: "not found" on existence checks and "conflict" on
database creation. Everything else ends the workflow.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
)

from compose_azure.core.exceptions import AuthenticationFailureError, ProviderApiError

logger = logging.getLogger(__name__)


def status_code_of(error: BaseException) -> Optional[int]:
    status_code = getattr(error, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def is_not_found(error: BaseException) -> bool:
    """True for ResourceNotFoundError or any HTTP 404 response."""
    return isinstance(error, ResourceNotFoundError) or (
        isinstance(error, HttpResponseError) and status_code_of(error) == 404
    )


def is_conflict(error: BaseException) -> bool:
    """True for ResourceExistsError or any HTTP 409 response."""
    return isinstance(error, ResourceExistsError) or (
        isinstance(error, HttpResponseError) and status_code_of(error) == 409
    )


@contextmanager
def azure_errors(operation: str, resource_name: str) -> Iterator[None]:
    """
    Map Azure SDK exceptions raised inside the block.

    ClientAuthenticationError is checked first: it is a subclass of
    HttpResponseError.

    Raises:
        AuthenticationFailureError: Credential missing or rejected
        ProviderApiError: Any other Azure error
    """
    try:
        yield
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED during {operation} ({resource_name}): {e.message}")
        raise AuthenticationFailureError(
            f"Azure authentication failed: {e.message}",
            operation=operation,
            resource_name=resource_name,
            original_error=e
        ) from e
    except HttpResponseError as e:
        logger.error(f"Failed to {operation} ({resource_name}): {e.status_code} - {e.message}")
        raise ProviderApiError(
            operation, resource_name, original_error=e, status_code=status_code_of(e)
        ) from e
    except AzureError as e:
        logger.error(f"Azure error during {operation} ({resource_name}): {type(e).__name__}: {e}")
        raise ProviderApiError(operation, resource_name, original_error=e) from e
