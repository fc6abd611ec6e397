"""Main CLI entry point."""

import asyncio
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Optional

import click

from playercore import __version__

logger = logging.getLogger(__name__)


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the command line.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable DEBUG level and log to ./playercore-debug.log
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if (debug or log_file) else level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if debug and not log_file:
        log_file = Path.cwd() / "playercore-debug.log"
    if log_file:
        file_level = logging.DEBUG if debug else getattr(logging, log_level.upper())
        # Rotating file handler (keeps last 5 files, max 10MB each)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_file}")


@click.group()
@click.version_option(version=__version__, prog_name="playercore")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./playercore-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    playercore - orchestration core of an embeddable media player.

    \b
    Examples:
      # Run a sandboxed session and print every event
      playercore demo --source intro.mp4 --source movie.mp4

      # Show the default options
      playercore options
    """
    setup_logging(verbose, debug, log_file, log_level)


class _EchoObserver:
    """Prints core events."""

    def on_core_event(self, event: Any, **kwargs: Any) -> None:
        details = ", ".join(f"{key}={value!r}" for key, value in kwargs.items())
        click.echo(f"[core] {event.value} {details}".rstrip())


async def _run_demo(sources: list[str], width: Any, height: Any, fullscreen: bool) -> None:
    from playercore.core import Core
    from playercore.protocols import PlayerEvent
    from playercore.sandbox import SandboxContainerFactory, SandboxMediaControl

    factory = SandboxContainerFactory(ready_delay=0.05)
    core = Core({"sources": sources, "width": width, "height": height}, factory)
    core.add_plugin(SandboxMediaControl(core))
    core.register_observer(_EchoObserver())
    core.channel.subscribe(
        PlayerEvent.RESIZE,
        lambda size: click.echo(f"[mediator] {core.channel.topic(PlayerEvent.RESIZE)} {size.width} x {size.height}"),
    )

    await core.create_containers()
    click.echo(f"Ready: {core.is_ready}, playback type: {core.get_playback_type()}")

    core.resize({"width": "50%", "height": "50%"})
    if fullscreen:
        core.toggle_fullscreen()
        core.toggle_fullscreen()

    await core.load(list(reversed(sources)))
    click.echo(f"Active container: {core.get_current_container()!r}")
    core.destroy()


@cli.command()
@click.option('--source', '-s', 'sources', multiple=True, default=("demo.mp4",), help='Media source (repeatable)')
@click.option('--width', type=int, default=640, help='Player width in pixels')
@click.option('--height', type=int, default=360, help='Player height in pixels')
@click.option('--fullscreen/--no-fullscreen', default=True, help='Toggle fullscreen on and off during the demo')
def demo(sources: tuple[str, ...], width: int, height: int, fullscreen: bool):
    """Run a sandboxed player session and print its events."""
    from playercore.exceptions import ErrorContext, PlayerCoreError

    try:
        with ErrorContext("run demo session", logger_instance=logger):
            asyncio.run(_run_demo(list(sources), width, height, fullscreen))
    except PlayerCoreError as e:
        click.echo(f"Error: {e.get_full_message()}", err=True)
        raise SystemExit(1)


@cli.command()
def options():
    """Print the default player options as JSON."""
    from playercore.models import CoreOptions

    click.echo(CoreOptions().model_dump_json(indent=2, exclude={"parent_element"}))


if __name__ == "__main__":
    cli()
