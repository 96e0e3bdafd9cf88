"""
docker-azure - Docker Compose provider plugin entry point.

Docker Compose runs the plugin once per provider service:

    docker-azure compose --project-name=<project> up --resource=postgres --server_name=<name> <service>
    docker-azure compose --project-name=<project> down --server_name=<name> <service>
    docker-azure metadata

`up` and `down` talk to Compose through protocol messages on stdout and the
exit code (0 success, 1 failure). `metadata` prints one JSON document.
Unknown options are ignored: Compose may pass options this plugin does
not use.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from pydantic import ValidationError

import compose_azure.constants as CONSTANTS
from compose_azure.config import load_settings
from compose_azure.core.exceptions import (
    InvalidParameterError,
    ProvisioningError,
    UnexpectedError,
)
from compose_azure.core.models import DeprovisionRequest, ProvisionRequest
from compose_azure.logger import format_stack_trace, setup_logger
from compose_azure.messages import MessageType, StdoutMessageSink, emit_connection_info
from compose_azure.metadata import render_metadata
from compose_azure.workflow import Workflow

if TYPE_CHECKING:
    from compose_azure.config import Settings
    from compose_azure.core.protocols import MessageSink

logger = logging.getLogger(__name__)

# Namespace attributes that are not workflow options
_NON_OPTION_KEYS = ("group", "command", "instance_name")


# ==========================================
# Argument Parsing
# ==========================================

class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message):
        raise InvalidParameterError(f"{self.prog}: {message}")


def preprocess_args(argv: List[str]) -> List[str]:
    """
    Move compose-level options after the command verb.

    Docker Compose sends:  compose --project-name=dc up --option=value service
    The parser expects:    compose up --project-name=dc --option=value service

    The value of `--project-name <value>` is never taken for the verb, so a
    project named "down" cannot turn `up` into `down`.

    Example:
        >>> preprocess_args(["compose", "--project-name", "dc", "up", "db"])
        ["compose", "up", "--project-name", "dc", "db"]
    """
    command_index = None
    skip_value = False
    for i, arg in enumerate(argv):
        if skip_value:
            skip_value = False
            continue
        if arg in CONSTANTS.COMPOSE_VALUE_OPTIONS:
            skip_value = True
            continue
        if arg in CONSTANTS.COMMANDS:
            command_index = i
            break

    if command_index is None:
        return list(argv)

    before = argv[:command_index]
    command = argv[command_index]
    after = argv[command_index + 1:]

    prefix = [arg for arg in before if arg == "compose"]
    compose_options = [arg for arg in before if arg != "compose"]

    return prefix + [command] + compose_options + after


def _add_up_parser(subparsers) -> None:
    up = subparsers.add_parser("up", help="Provision an Azure resource")
    up.add_argument("instance_name", metavar="service-name", help="Compose service name")
    up.add_argument("--project-name", "--project_name", dest="project_name", help="Compose project name")
    up.add_argument("--resource", help="Resource type (postgres)")
    up.add_argument("--type", help="Alias for --resource")
    up.add_argument("--server_name", "--server-name", dest="server_name", help="Server name (required)")
    up.add_argument("--database_name", "--database-name", dest="database_name", help="Database name")
    up.add_argument("--resource_group", "--resource-group", dest="resource_group", help="Resource group")
    up.add_argument("--location", help="Azure region")
    up.add_argument("--sku", help="Pricing tier")
    up.add_argument("--storage_mb", "--storage-mb", dest="storage_mb", help="Storage size in MB")
    up.add_argument("--backup_retention_days", "--backup-retention-days",
                    dest="backup_retention_days", help="Backup retention days")
    up.add_argument("--geo_redundant_backup", "--geo-redundant-backup",
                    dest="geo_redundant_backup", help="Geo-redundant backup (true/false)")
    up.add_argument("--admin_username", "--admin-username", dest="admin_username", help="Admin username")
    up.add_argument("--version", help="PostgreSQL version")
    up.set_defaults(command="up")


def _add_down_parser(subparsers) -> None:
    down = subparsers.add_parser("down", help="Deprovision an Azure resource")
    down.add_argument("instance_name", metavar="service-name", help="Compose service name")
    down.add_argument("--project-name", "--project_name", dest="project_name", help="Compose project name")
    down.add_argument("--resource", help="Resource type (postgres)")
    down.add_argument("--type", help="Alias for --resource")
    down.add_argument("--server_name", "--server-name", dest="server_name", help="Server name (required)")
    down.add_argument("--resource_group", "--resource-group", dest="resource_group", help="Resource group")
    down.set_defaults(command="down")


def _add_metadata_parser(subparsers) -> None:
    metadata = subparsers.add_parser("metadata", help="Get provider metadata")
    metadata.set_defaults(command="metadata")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command tree.

        docker-azure [--version]
        ├── compose {up, down, metadata}
        ├── up / down        (same as under compose)
        └── metadata
    """
    parser = _ArgumentParser(prog=CONSTANTS.PROGRAM_NAME, description=CONSTANTS.PROGRAM_DESCRIPTION)
    parser.add_argument("--version", action="version", version=CONSTANTS.PROGRAM_VERSION)
    commands = parser.add_subparsers(dest="group")

    compose = commands.add_parser("compose", help="Compose provider commands")
    compose_commands = compose.add_subparsers(dest="command")
    _add_up_parser(compose_commands)
    _add_down_parser(compose_commands)
    _add_metadata_parser(compose_commands)

    _add_up_parser(commands)
    _add_down_parser(commands)
    _add_metadata_parser(commands)

    return parser


def _resolve_service_name(namespace: argparse.Namespace, args: List[str], unknown: List[str]) -> None:
    """
    Docker Compose passes the service name as the last argument.

    An unknown option given a separate value (`--foo bar`) makes argparse
    take `bar` as the service name and leave the real one in `unknown`.
    """
    last = args[-1] if args else None
    if last and not last.startswith("-") and last in unknown:
        logger.debug(f"Using last argument '{last}' as service name instead of '{namespace.instance_name}'")
        namespace.instance_name = last


def _options(namespace: argparse.Namespace) -> Dict[str, Any]:
    return {key: value for key, value in vars(namespace).items() if key not in _NON_OPTION_KEYS}


# ==========================================
# Command Handlers
# ==========================================

def _wrap_unexpected(error: Exception) -> UnexpectedError:
    wrapped = UnexpectedError(error)
    wrapped.__cause__ = error
    return wrapped


def _report_failure(sink: 'MessageSink', summary: str, error: BaseException) -> int:
    """Emit exactly one error message plus the detailed trace, return the exit code."""
    logger.error(f"{summary}: {error}")
    sink.emit(MessageType.ERROR.value, f"{summary}: {error}")
    sink.emit(MessageType.DEBUG.value, format_stack_trace(error))
    return CONSTANTS.EXIT_FAILURE


def run_up(
    instance_name: str,
    options: Dict[str, Any],
    settings: 'Settings',
    sink: 'MessageSink',
    workflow: Optional[Workflow] = None
) -> int:
    """
    Handle `up`: provision and hand the connection info to Compose.

    Returns:
        0 after all setenv messages were written, 1 on any failure
    """
    sink.emit(MessageType.DEBUG.value, f"Starting provisioning for service: {instance_name}")
    workflow = workflow or Workflow(settings, sink)

    try:
        request = ProvisionRequest.from_options(instance_name, options, settings)
        connection_info = workflow.provision(request)
        sink.emit(MessageType.INFO.value, "PostgreSQL server provisioned successfully")
        emit_connection_info(sink, connection_info)
    except ProvisioningError as e:
        return _report_failure(sink, "Failed to provision", e)
    except Exception as e:
        return _report_failure(sink, "Failed to provision", _wrap_unexpected(e))

    sink.emit(MessageType.DEBUG.value, "Provisioning completed")
    return CONSTANTS.EXIT_SUCCESS


def run_down(
    instance_name: str,
    options: Dict[str, Any],
    settings: 'Settings',
    sink: 'MessageSink',
    workflow: Optional[Workflow] = None
) -> int:
    """Handle `down`: delete the server. Returns the exit code."""
    sink.emit(MessageType.DEBUG.value, f"Starting deprovisioning for service: {instance_name}")
    workflow = workflow or Workflow(settings, sink)

    try:
        request = DeprovisionRequest.from_options(instance_name, options, settings)
        sink.emit(MessageType.INFO.value, "Deprovisioning Azure resources...")
        workflow.deprovision(request)
    except ProvisioningError as e:
        return _report_failure(sink, "Failed to deprovision", e)
    except Exception as e:
        return _report_failure(sink, "Failed to deprovision", _wrap_unexpected(e))

    sink.emit(MessageType.INFO.value, "Resources deprovisioned successfully")
    return CONSTANTS.EXIT_SUCCESS


def run_metadata(stream=None) -> int:
    """Print the metadata document. Never touches Azure."""
    stream = stream or sys.stdout
    stream.write(render_metadata() + "\n")
    stream.flush()
    return CONSTANTS.EXIT_SUCCESS


# ==========================================
# Main
# ==========================================

def main(
    argv: Optional[List[str]] = None,
    sink: Optional['MessageSink'] = None,
    settings: Optional['Settings'] = None
) -> int:
    """
    Run one command and return the process exit code.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        sink: Message destination (defaults to stdout)
        settings: Configuration (defaults to the environment)
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    sink = sink or StdoutMessageSink()
    setup_logger()

    parser = build_parser()
    args = preprocess_args(argv)
    try:
        namespace, unknown = parser.parse_known_args(args)
    except InvalidParameterError as e:
        return _report_failure(sink, "Invalid arguments", e)

    if unknown:
        logger.debug(f"Ignoring unknown arguments: {unknown}")

    command = getattr(namespace, "command", None)

    if command == "metadata":
        return run_metadata()

    if command not in ("up", "down"):
        parser.print_help()
        return CONSTANTS.EXIT_SUCCESS

    _resolve_service_name(namespace, args, unknown)

    if settings is None:
        try:
            settings = load_settings()
        except ValidationError as e:
            return _report_failure(sink, "Invalid configuration", e)

    if settings.DOCKER_AZURE_DEBUG:
        setup_logger(debug_mode=True)

    if command == "up":
        return run_up(namespace.instance_name, _options(namespace), settings, sink)
    return run_down(namespace.instance_name, _options(namespace), settings, sink)


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
