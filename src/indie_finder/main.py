"""Main entry point for the Indie Game Finder service.

This module provides the application entry point with:
- Command-line argument parsing
- Logging and configuration setup
- Serving the API with uvicorn
"""

import argparse
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from . import __version__
from .api import create_app
from .context import ApplicationContext
from .models import AppConfig
from .services.config import ConfigurationService
from .services.errors import ConfigurationError
from .services.logging import ENVIRONMENTS, setup_logging

log = structlog.stdlib.get_logger()


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
        host: str | None,
        port: int | None,
        environment: str | None,
        check_config: bool,
        write_config: bool,
    ) -> None:
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir
        self.host: str | None = host
        self.port: int | None = port
        self.environment: str | None = environment
        self.check_config: bool = check_config
        self.write_config: bool = write_config


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Parsed arguments container
    """
    parser = argparse.ArgumentParser(
        prog="indie-finder",
        description="Indie game discovery API backed by the RAWG metadata service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  indie-finder                          Serve the API on the configured host/port
  indie-finder --port 8080              Serve on another port
  indie-finder --check-config           Print the effective configuration and exit
  indie-finder --port 8080 --write-config
                                        Save the port to the configuration file
        """
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/indie-game-finder/config.json)"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: from configuration)"
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: console only)"
    )

    _ = parser.add_argument("--host", default=None, help="Interface to bind (default: from configuration)")
    _ = parser.add_argument("--port", type=int, default=None, help="Port to bind (default: from configuration)")

    _ = parser.add_argument(
        "--environment",
        choices=ENVIRONMENTS,
        default=None,
        help="Log rendering: readable console output or JSON (default: from configuration)"
    )

    _ = parser.add_argument(
        "--check-config",
        action="store_true",
        help="Print the effective configuration and exit"
    )

    _ = parser.add_argument(
        "--write-config",
        action="store_true",
        help="Save the effective configuration (file, environment and options) to the config path and exit"
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
        host=ns.host,
        port=ns.port,
        environment=ns.environment,
        check_config=bool(ns.check_config),
        write_config=bool(ns.write_config),
    )


def apply_cli_overrides(config: AppConfig, args: ParsedArgs) -> AppConfig:
    """Command-line options take precedence over the file and the environment."""
    overrides: dict[str, Any] = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
        "environment": args.environment,
    }
    return replace(config, **{name: value for name, value in overrides.items() if value is not None})


def describe_config(config: AppConfig) -> str:
    """Render the configuration as JSON with the API key hidden."""
    data = asdict(config)
    data["api_key"] = "***" if config.api_key else ""
    return json.dumps(data, indent=2)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Bootstrap logging so configuration loading is visible
    _ = setup_logging(
        log_level=args.log_level or "INFO",
        log_dir=args.log_dir,
        environment=args.environment or "development",
    )

    config_service = ConfigurationService(config_path=args.config)
    config = apply_cli_overrides(config_service.load_config(), args)

    _ = setup_logging(log_level=config.log_level, log_dir=args.log_dir, environment=config.environment)

    if args.check_config:
        print(describe_config(config))
        sys.exit(0)

    if args.write_config:
        try:
            config_service.save_config(config)
        except ConfigurationError as e:
            log.error("Configuration not written", problems=e.problems)
            print(f"Invalid configuration: {'; '.join(e.problems)}", file=sys.stderr)
            sys.exit(2)
        print(f"Configuration written to {config_service.config_path}")
        sys.exit(0)

    context = ApplicationContext(config=config, config_path=args.config)

    log.info(
        "Starting Indie Game Finder",
        version=__version__,
        host=config.host,
        port=config.port,
        environment=config.environment,
        config_path=str(config_service.config_path),
    )

    exit_code = 0
    try:
        # log_config=None keeps the logging configured above
        uvicorn.run(create_app(context), host=config.host, port=config.port, log_config=None)
    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT
    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
