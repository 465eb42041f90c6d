"""
tidal-session CLI entry point.

Logs in to TIDAL once and prints the resulting session.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from tidal_session import __version__
from tidal_session.auth import (
    AuthRequestFailed,
    CreateSessionFailed,
    SessionExchanger,
    TidalCredentials,
)
from tidal_session.auth.session import mask
from tidal_session.config import Config, ConfigError, load_config

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_AUTH_ERROR = 2
EXIT_NETWORK_ERROR = 3


def setup_logging(level: str = "info") -> None:
    """Configure logging to stderr, keeping stdout for the session output."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="tidal-session",
        description="Log in to TIDAL and print the session",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tidal-session --config config.yaml
  tidal-session --token APPTOKEN --username user@example.com --password secret --json

Environment Variables:
  TIDAL_TOKEN, TIDAL_USERNAME, TIDAL_PASSWORD, TIDALSESSION_LOG_LEVEL
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("./config.yaml"),
        metavar="PATH",
        help="Path to config file (default: ./config.yaml)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the session as JSON",
    )

    # Authentication
    auth_group = parser.add_argument_group("Authentication")
    auth_group.add_argument(
        "--token",
        metavar="TEXT",
        help="TIDAL application token",
    )
    auth_group.add_argument(
        "--username",
        metavar="TEXT",
        help="TIDAL username",
    )
    auth_group.add_argument(
        "--password",
        metavar="TEXT",
        help="TIDAL password",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        metavar="LEVEL",
        help="Log level: debug, info, warning, error",
    )

    return parser.parse_args(argv)


def _set_nested(d: dict, path: tuple, value: Any) -> None:
    """Set a nested dictionary value."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def args_to_dict(args: argparse.Namespace) -> dict:
    """Convert argparse namespace to nested config dict."""
    result: dict = {}

    mappings = {
        "token": ("tidal", "token"),
        "username": ("tidal", "username"),
        "password": ("tidal", "password"),
        "log_level": ("logging", "level"),
    }

    for arg_name, path in mappings.items():
        value = getattr(args, arg_name, None)
        if value is None:
            continue
        _set_nested(result, path, value)

    return result


def log_config(config: Config) -> None:
    """Log configuration summary (without sensitive data)."""
    logger.info(f"Application token: {mask(config.tidal.token)}")
    logger.info(f"Username: {config.tidal.username}")


async def run_login(config: Config, json_output: bool) -> int:
    """
    Perform the login and print the session.

    Args:
        config: Validated configuration
        json_output: Output as JSON if True

    Returns:
        Exit code
    """
    credentials = TidalCredentials(config.tidal.token)

    try:
        credentials = await credentials.authenticate_or_raise(
            config.tidal.username,
            config.tidal.password,
            exchanger=SessionExchanger(),
        )
    except CreateSessionFailed as e:
        logger.error(f"Authentication failed: {e}")
        return EXIT_AUTH_ERROR
    except AuthRequestFailed as e:
        logger.error(f"Network error: {e}")
        return EXIT_NETWORK_ERROR

    session = credentials.session
    if session is None:
        logger.error("Authentication failed: no session returned")
        return EXIT_AUTH_ERROR

    if json_output:
        print(json.dumps(session.to_dict(), indent=2))
    else:
        print(f"User ID:      {session.user_id}")
        print(f"Session ID:   {session.session_id}")
        print(f"Country code: {session.country_code}")

    return EXIT_SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0=success, 1=config error, 2=auth error, 3=network error
    """
    args = parse_args(argv)

    # Basic logging first, reconfigured once the level is known
    setup_logging("info")

    try:
        config = load_config(args.config, args_to_dict(args))
        setup_logging(config.logging.level)
        log_config(config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    try:
        return asyncio.run(run_login(config, args.json_output))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
