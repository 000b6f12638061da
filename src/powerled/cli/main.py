"""Main CLI entry point."""

import logging
import logging.handlers
import signal
import sys
from pathlib import Path
from typing import Optional

import click

from powerled import __version__

from .commands import match, validate

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the daemon.

    Logs always go to stderr (picked up by journald); --log-file adds a
    rotating file.

    Args:
        verbose: Verbosity count (1+ = DEBUG)
        debug: If True, force DEBUG level
        log_file: Optional log file path
        log_level: Base log level (DEBUG/INFO/WARNING/ERROR)
    """
    if debug or verbose >= 1:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper())

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        # Rotating file handler (keeps last 5 files, max 10MB each)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger.debug(f"Logging configured: level={logging.getLevelName(level)}, file={log_file}")


def _echo_error(error: Exception) -> None:
    from powerled.exceptions import format_error_for_display

    user_message, recovery_hint = format_error_for_display(error)
    click.echo(f"ERROR: {user_message}", err=True)
    if recovery_hint:
        click.echo(recovery_hint, err=True)


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="powerled")
@click.option(
    '--config',
    '-c',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Path to power LED JSON config'
)
@click.option(
    '--node',
    '-n',
    type=click.IntRange(min=0),
    default=0,
    help='Host index used in the host state and POST code object paths (default: 0)'
)
@click.option(
    '--strict/--no-strict',
    default=False,
    help='Exit with status 1 (instead of 0) when the config is missing or invalid'
)
@click.option(
    '--require-history',
    is_flag=True,
    help='Abort startup if the POST code history cannot be read'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug logging'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Also log to this file (rotated at 10MB)'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level (default: INFO)'
)
def cli(
    ctx,
    config: Optional[Path],
    node: int,
    strict: bool,
    require_history: bool,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Power LED controller - drives the power LED from host power state and POST codes.

    \b
    The LED shows one of three presentations:
    - standby: host off, or POST not started (BMC booted group)
    - POST: the POST start code was seen (POST active group)
    - on: the POST end code was seen (fully powered on group)

    \b
    Examples:
      # Run the daemon
      powerled --config /usr/share/power-led/config.json

      # Second host on a multi-host platform
      powerled --config config.json --node 1

      # Check a config file
      powerled validate config.json

      # Compare two POST codes the way the daemon does
      powerled match "01 55 00" "55 07"
    """
    # If a subcommand was invoked, don't run the daemon
    if ctx.invoked_subcommand is not None:
        return

    from powerled.exceptions import ConfigurationError, PowerLedError
    from powerled.models import PowerLedConfig
    from powerled.orchestration import PowerLedDaemon
    from powerled.transport import DBusTransport

    setup_logging(verbose, debug, log_file, log_level)

    logger.info("Parsing power LED controller config.")
    try:
        config_obj = PowerLedConfig.load(config)
    except ConfigurationError as e:
        logger.error(e.technical_message)
        logger.info("Power LED config not provided or invalid. Exiting Power LED controller.")
        _echo_error(e)
        ctx.exit(EXIT_ERROR if strict else EXIT_OK)
    logger.info(f"Successfully parsed power LED controller config: {config_obj.describe()}")

    transport = DBusTransport(node=node)
    daemon = PowerLedDaemon(config_obj, transport, require_history=require_history)

    def _on_signal(signum, frame):
        logger.info(f"Received signal {signum}, stopping")
        daemon.stop()

    signal.signal(signal.SIGTERM, _on_signal)

    try:
        transport.connect()
        daemon.initialize()
        daemon.run()
    except KeyboardInterrupt:
        logger.info("Power LED controller interrupted")
    except PowerLedError as e:
        logger.error(f"Power LED controller stopped: {e.technical_message}")
        _echo_error(e)
        ctx.exit(EXIT_ERROR)
    except Exception:
        logger.exception("Error occurred during the event loop")
        ctx.exit(EXIT_ERROR)
    finally:
        daemon.shutdown()


cli.add_command(validate)
cli.add_command(match)

if __name__ == "__main__":
    cli()
