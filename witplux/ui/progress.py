"""
Progress Indicators - Spinners shown while the plugin talks to the site.
"""

from contextlib import contextmanager

from rich.status import Status

from witplux.ui.console import get_console


@contextmanager
def status_spinner(message: str, spinner: str = "dots"):
    """Simple status spinner context manager."""
    console = get_console()
    status = Status(message, spinner=spinner, console=console)

    try:
        status.start()
        yield status
    finally:
        status.stop()


# Export progress helpers
__all__ = ["status_spinner"]
