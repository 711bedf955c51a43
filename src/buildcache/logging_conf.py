import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union


def resolve_log_level(log_level: Union[int, str]) -> int:
    """Maps a level name such as "debug" to its number; raises ValueError if unknown."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_logging(log_level: Union[int, str] = logging.INFO, log_file: Optional[str] = None):
    """
    Configures logging for the command line entry point.

    Args:
        log_level: The logging level, as a number or a name such as "DEBUG".
        log_file: Optional path to a file where logs should be written.
    """
    log_level = resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to prevent duplication
    if root_logger.handlers:
        root_logger.handlers = []

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(process)d | %(name)s:%(funcName)s:%(lineno)d - %(message)s'
    )

    # Logs go to stderr so stdout stays clean for printed entry paths
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"Failed to set up file logging at {log_file}: {e}", file=sys.stderr)
