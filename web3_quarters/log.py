"""Loguru setup shared by the CLI and embedding applications."""

import sys

from loguru import logger

from web3_quarters.config import LogConfig, get_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(config: LogConfig | None = None) -> None:
    """Configure loguru logging.

    Args:
        config: Logging section to apply. Defaults to the global settings.
    """
    config = config or get_settings().log

    logger.remove()  # Remove default handler
    logger.add(sys.stderr, format=LOG_FORMAT, level=config.level)

    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(config.file),
            rotation=config.rotation,
            retention=config.retention,
            level="DEBUG",
        )
