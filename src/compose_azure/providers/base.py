"""
Shared base class for resource provider implementations.

Contents:
    - BaseProvider: settings/sink/client storage plus progress helpers that
      log a line and send the matching protocol message in one call
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from compose_azure.messages import MessageType

if TYPE_CHECKING:
    from compose_azure.config import Settings
    from compose_azure.core.protocols import MessageSink

logger = logging.getLogger(__name__)


class BaseProvider:
    """
    Optional base class for resource providers.

    Providers only have to satisfy the ResourceProvider protocol; this class
    bundles the plumbing every one of them needs.

    Common Functionality:
        - Settings and message sink storage
        - Lazily initialized SDK clients
        - Consistent progress messages
    """

    def __init__(
        self,
        settings: 'Settings',
        sink: 'MessageSink',
        clients: Optional[Dict[str, Any]] = None
    ):
        self._settings = settings
        self._sink = sink
        self._clients: Dict[str, Any] = dict(clients) if clients else {}
        self._initialized: bool = bool(clients)

    @property
    def settings(self) -> 'Settings':
        return self._settings

    @property
    def sink(self) -> 'MessageSink':
        return self._sink

    @property
    def clients(self) -> Dict[str, Any]:
        """Return SDK clients, creating them on first use."""
        if not self._initialized:
            self.initialize_clients()
            self._initialized = True
        return self._clients

    def initialize_clients(self) -> None:
        """Create SDK clients. Subclasses that talk to a cloud API override this."""
        raise NotImplementedError(f"{type(self).__name__} does not create SDK clients")

    # ==========================================
    # Progress Messages
    # ==========================================

    def _info(self, text: str) -> None:
        logger.info(text)
        self._sink.emit(MessageType.INFO.value, text)

    def _debug(self, text: str) -> None:
        logger.debug(text)
        self._sink.emit(MessageType.DEBUG.value, text)

    def _log_resource_creation(self, resource_type: str, resource_name: str) -> None:
        self._info(f"Creating {resource_type}: {resource_name}")

    def _log_resource_exists(self, resource_type: str, resource_name: str) -> None:
        """Report that an existing resource is reused (idempotent path)."""
        self._info(f"{resource_type} {resource_name} already exists, using existing {resource_type.lower()}")
