"""Logging configuration for ghp_core."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "ghp_core"


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure the ``ghp_core`` logger.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
    """
    if verbose == 0 and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if verbose > 0:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("ghp_core logging started | %s | level=%s", timestamp, logging.getLevelName(level))
