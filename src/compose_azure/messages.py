"""
Docker Compose provider message protocol.

Docker Compose reads the plugin's stdout line by line. Each line is one
JSON object with exactly two fields:

    {"type": "info", "message": "Creating resource group: docker-compose-rg"}

Message types:
    - info: Progress shown to the user
    - debug: Detail shown in verbose mode
    - error: Failure summary (always followed by a non-zero exit code)
    - setenv: "KEY=VALUE" injected into dependent services

Usage:
    sink = StdoutMessageSink()
    sink.emit(MessageType.INFO, "Authenticating with Azure...")
    emit_connection_info(sink, connection_info)
"""

import json
import sys
from enum import Enum
from typing import TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from compose_azure.core.models import ConnectionInfo
    from compose_azure.core.protocols import MessageSink


class MessageType(str, Enum):
    INFO = "info"
    DEBUG = "debug"
    ERROR = "error"
    SETENV = "setenv"


def format_message(kind: str, text: str) -> str:
    """
    Serialize one message as a single-line JSON object.

    Newlines inside text are escaped by the JSON encoder, so the result
    never spans more than one line.
    """
    kind = MessageType(kind).value
    return json.dumps({"type": kind, "message": str(text)})


def setenv_text(key: str, value: str) -> str:
    """
    Build the KEY=VALUE payload of a setenv message.

    Raises:
        ValueError: If the key is empty, contains '=' or whitespace, or if
            either part contains a line break
    """
    if not key or "=" in key or any(ch.isspace() for ch in key):
        raise ValueError(f"Invalid environment variable name: {key!r}")
    value = str(value)
    if "\n" in value or "\r" in value:
        raise ValueError(f"Value for {key} must not contain line breaks")
    return f"{key}={value}"


class StdoutMessageSink:
    """
    Writes protocol messages to stdout, one flushed line per message.

    Docker Compose renders progress while the plugin is still running, so
    every message is flushed immediately.
    """

    def __init__(self, stream: TextIO = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so test harnesses that swap sys.stdout are honoured
        return self._stream or sys.stdout

    def emit(self, kind: str, text: str) -> None:
        line = format_message(kind, text)
        self.stream.write(line + "\n")
        self.stream.flush()


def emit_connection_info(sink: 'MessageSink', info: 'ConnectionInfo') -> None:
    """
    Emit one setenv message per connection attribute, in fixed order.

    All payloads are validated before the first one is written, so a bad
    value never leaves a partial set of variables behind.
    """
    payloads = [setenv_text(key, value) for key, value in info.to_env().items()]
    for payload in payloads:
        sink.emit(MessageType.SETENV.value, payload)
