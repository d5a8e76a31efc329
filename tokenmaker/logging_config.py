"""
Logging configuration writing to stdout and, optionally, a timestamped log file
"""

import logging
import logging.config
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

LOG_FORMAT = (
    "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Prefix for log file names, e.g. 20240131_142501_app.log
FILE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def get_logging_config(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    stream: str = "ext://sys.stdout"
) -> Dict[str, Any]:
    """Get logging configuration for stdout and an optional log file."""
    root_handlers = ["default"]
    handlers: Dict[str, Any] = {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": stream
        }
    }

    if log_file is not None:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(log_file),
            "mode": "a",
            "encoding": "utf-8"
        }
        root_handlers.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
                "datefmt": DATE_FORMAT
            }
        },
        "handlers": handlers,
        "loggers": {
            "tokenmaker": {
                "level": level,
                "propagate": True
            }
        },
        "root": {
            "level": level,
            "handlers": root_handlers
        }
    }


def setup_logger_file(
    log_file_name: str,
    log_dir: Union[str, Path] = "logs",
    level: str = "INFO",
    stream: str = "ext://sys.stdout"
) -> Optional[Path]:
    """
    Set up logging to both stdout and a log file.

    The log directory is created if it doesn't exist. The file name is
    prefixed with the current date and time, so every run gets its own
    file. If the file cannot be opened, logging falls back to the console only.

    Args:
        log_file_name: Base name for the log file (e.g. "app.log")
        log_dir: Directory holding log files
        level: Log level name
        stream: Console stream, as a dictConfig "ext://" reference

    Returns:
        Path of the log file, or None when falling back to the console

    Raises:
        OSError: If the log directory cannot be created

    Example:
        >>> log_path = setup_logger_file("app.log")
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime(FILE_TIMESTAMP_FORMAT)
    log_path = directory / f"{timestamp}_{log_file_name}"

    try:
        log_path.touch(exist_ok=True)
        logging.config.dictConfig(get_logging_config(level, log_path, stream))
    except (OSError, ValueError) as e:
        # dictConfig reports a FileHandler that fails to open as ValueError
        logging.config.dictConfig(get_logging_config(level, stream=stream))
        logger.warning(f"Error opening log file {log_path}, falling back to console only: {e}")
        return None

    logger.info(f"Logging initialized. Log file: {log_path}")
    return log_path
