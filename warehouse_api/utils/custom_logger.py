### Description ###
# Warehouse API - Clean J Shipping Backend
# - Custom Logger Setup -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

# Standard Imports
import logging
from datetime import datetime
from pathlib import Path

LOGS_DIR = Path(__file__).parent.parent.parent / "logs"


class CustomFormatter(logging.Formatter):
    """Warehouse API log format: HH:MM:SS AM/PM - name - LEVEL: message"""

    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created).strftime("%I:%M:%S %p")
        formatted_msg = f"{timestamp} - {record.name} - {record.levelname}: {record.getMessage()}"

        if record.exc_info:
            formatted_msg += "\n" + self.formatException(record.exc_info)

        return formatted_msg


def setup_logger(
    name: str, level: int | None = None, log_to_file: bool | None = None, log_to_console: bool | None = None
) -> logging.Logger:
    """
    Set up a logger for the Warehouse API.

    Arguments left as None fall back to the `application.logging` section of
    config.yaml.

    Args:
        name: Logger name (typically __name__)
        level: Logging level
        log_to_file: Write to logs/warehouse_api_<date>.log
        log_to_console: Write to stderr

    Returns:
        Configured logger instance

    Example:
        logger = setup_logger(__name__)
        logger.info("API key issued for CLEAN")
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers if logger already exists
    if logger.handlers:
        return logger

    if level is None or log_to_file is None or log_to_console is None:
        from warehouse_api.config import get_app_config

        logging_config = get_app_config().application.logging
        if level is None:
            level = getattr(logging, logging_config.level)
        if log_to_file is None:
            log_to_file = logging_config.log_to_file
        if log_to_console is None:
            log_to_console = logging_config.log_to_console

    logger.setLevel(level)
    formatter = CustomFormatter()

    if log_to_file:
        LOGS_DIR.mkdir(exist_ok=True)
        log_filepath = LOGS_DIR / f"warehouse_api_{datetime.now().strftime('%Y-%m-%d')}.log"

        file_handler = logging.FileHandler(log_filepath, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get an existing logger or create one from config.yaml settings"""
    return setup_logger(name)
