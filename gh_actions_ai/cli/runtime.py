"""Process-level setup shared by the CLI commands."""

import logging
import signal
from types import FrameType

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route library logging through rich.

    Args:
        verbose: Log at DEBUG instead of INFO
        console: Console the handler writes to, stderr by default
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console or Console(stderr=True),
                show_path=verbose,
                rich_tracebacks=True,
            )
        ],
        force=True,
    )
    # Request-level chatter from the HTTP stack is only useful when debugging.
    for name in ("urllib3", "httpx", "openai"):
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


def _raise_keyboard_interrupt(signum: int, frame: FrameType | None) -> None:
    raise KeyboardInterrupt


def install_sigterm_handler() -> None:
    """Turn SIGTERM into KeyboardInterrupt so cleanup runs on cancellation."""
    signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)
