import sys
import logging
from pathlib import Path
from typing import Optional

from appwatch.settings import LOG_FORMAT
from appwatch.local.errors import LoggingSetupError


class MainFormatter(logging.Formatter):
    """The single line format shared by every AppWatch log sink."""

    def __init__(self) -> None:
        super().__init__(fmt=LOG_FORMAT)


def _build_handler(log_file: Optional[str]) -> logging.Handler:
    """
    Creates the handler for the configured sink.

    :param log_file: Path of the log file, or None/empty for standard output.
    :raises LoggingSetupError: If the log file cannot be opened.
    """
    if not log_file:
        return logging.StreamHandler(sys.stdout)

    path = Path(log_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path, mode='a', encoding='utf-8')
    except OSError as e:
        raise LoggingSetupError(f"Cannot open log file '{path}': {e}") from e


def setup_logging(log_file: Optional[str] = None, console_level: int = logging.INFO) -> None:
    """
    Configures the root logger for the supervisor.
    Clears any previously configured handlers to prevent duplication, then
    attaches a single handler writing to the log file or to standard output.

    :param log_file: Path of the log file. Absent or empty means standard output.
    :param console_level: The logging level for the sink (e.g., logging.INFO).
    :raises LoggingSetupError: If the log file cannot be opened.
    """
    handler = _build_handler(log_file)
    handler.setLevel(console_level)
    handler.setFormatter(MainFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(console_level)

    # Clear any existing handlers to prevent re-adding them on re-runs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)
