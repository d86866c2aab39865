import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
):
    """Configure logging for the application."""
    # Set log level from environment or default
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "WARNING")

    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, str(log_level).upper()),
        format=fmt,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    if log_file:
        logger.info(f"Logging initialized. Log file: {log_file}")

    return logger
