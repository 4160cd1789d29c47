"""Logging configuration using Loguru."""

import sys
from pathlib import Path

from loguru import logger

from insightgraph.config import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{line} - {message}"

# Records logged without get_logger() still render the module column
logger.configure(extra={"module": "insightgraph"})


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure Loguru with a colorized stderr sink and an optional rotating file.

    Replaces any sinks added earlier, so it is safe to call again after the
    configuration changes.

    Args:
        config: Logging section of the main configuration
    """
    config = config or LoggingConfig()
    logger.remove()

    logger.add(
        sys.stderr,
        level=config.level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )

    if config.log_to_file:
        log_path = Path(config.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "insight_{time:YYYY-MM-DD}.log",
            level=config.level,
            format=FILE_FORMAT,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.compression,
            serialize=config.serialize,
            enqueue=True,
        )


def get_logger(name: str):
    """Get a logger bound to a module name."""
    return logger.bind(module=name)
