"""Composition root for the endpoints store.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Remote client and store instantiation
- Interactive CLI loop
"""

import asyncio
import json
import logging
import sys
from typing import Any

from endpoints_store.adapters.cli.commands import CLICommandHandler
from endpoints_store.adapters.remote.jsonrpc import EndpointsRpcClient
from endpoints_store.adapters.store.endpoints import EndpointsStore
from endpoints_store.config import Settings, load_settings
from endpoints_store.core.models import StoreConfig


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for store commands.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            # Read command from stdin in a thread to avoid blocking
            command_line = await loop.run_in_executor(
                None,
                input,
                "store> "
            )

            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            if not isinstance(args, dict):
                logger.error("Arguments must be a JSON object. Use 'help' for command syntax.")
                continue

            try:
                result = await _execute_cli_command(cli_handler, command, args)
                print(json.dumps(result, indent=2, default=str))
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({
                    "status": "error",
                    "message": str(e)
                }, indent=2))

        except EOFError:
            # Ctrl+D to exit
            logger.info("EOF received, exiting CLI")
            break


async def _execute_cli_command(
    cli_handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Execute a CLI command.

    Args:
        cli_handler: CLICommandHandler instance.
        command: Command name.
        args: Command arguments.

    Returns:
        Command result dictionary.

    Raises:
        ValueError: If command is not recognized or arguments are missing.
    """
    if command == "get":
        if "id" not in args:
            raise ValueError("Missing required parameter: id")
        return await cli_handler.get_record(args["id"])

    elif command == "put":
        if "record" not in args:
            raise ValueError("Missing required parameter: record")
        return await cli_handler.put_record(args["record"], args.get("options"))

    elif command == "add":
        if "record" not in args:
            raise ValueError("Missing required parameter: record")
        return await cli_handler.add_record(args["record"], args.get("options"))

    elif command == "remove":
        if "id" not in args:
            raise ValueError("Missing required parameter: id")
        return await cli_handler.remove_record(args["id"])

    elif command == "query":
        return await cli_handler.query_records(args.get("options"), args.get("query"))

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  get
    Fetch a record by identity.
    Required: id

    Example: get {"id": "42"}

  put
    Store a record. Records without an identity are created.
    Required: record
    Optional: options (id, overwrite)

    Example: put {"record": {"id": "42", "name": "widget"}}

  add
    Create a record.
    Required: record

    Example: add {"record": {"name": "widget"}}

  remove
    Delete a record by identity.
    Required: id

    Example: remove {"id": "42"}

  query
    List records.
    Optional: options (start, count, sort)

    Example: query {"options": {"start": 10, "count": 5, "sort": [{"attribute": "name"}]}}

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def build_store(settings: Settings) -> tuple[EndpointsRpcClient, EndpointsStore]:
    """Instantiate the remote client and the store from settings.

    Raises:
        ValueError: If no API name is configured.
    """
    client = EndpointsRpcClient(
        root_url=settings.endpoints_root_url,
        api_name=settings.endpoints_api_name,
        version=settings.endpoints_api_version,
        resource=settings.endpoints_resource,
        auth_token=settings.endpoints_auth_token,
        timeout=settings.request_timeout_seconds,
    )
    store = EndpointsStore(StoreConfig(api=client, id_property=settings.id_property))
    return client, store


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start the CLI.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate the remote client and store
    4. Run the interactive CLI

    Raises:
        SystemExit: On fatal configuration errors.
    """
    settings = load_settings()

    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    if not settings.endpoints_api_name:
        logger.error("ENDPOINTS_API_NAME is not set")
        sys.exit(1)

    client, store = build_store(settings)
    logger.info(
        f"Store ready: {client.method_id('*')} at {settings.endpoints_root_url} "
        f"(identity field '{store.id_property}')"
    )

    try:
        await _run_cli_interactive(CLICommandHandler(store))
    finally:
        await client.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
