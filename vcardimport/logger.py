"""
Logging configuration and utilities for the vCard import tool.

This module provides logging setup and the summary helpers used by the
command-line interface.

Dependencies:
    - logging: Standard library for logging functionality
    - sys: Standard library for system-specific parameters
    - pathlib: Standard library for path handling
    - datetime: Standard library for date/time operations
    - typing: Standard library for type hints
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from logging import Logger

from vcardimport.record import Record

LOGGER_NAME = "vcardimport"


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> Logger:
    """
    Set up and configure the application logger.

    :param log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    :param log_file: Optional path to log file. If None, creates timestamped
                     log in logs/
    :param console_output: Whether to output logs to console
    :return: Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    if log_file is None:
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"vcardimport_{timestamp}.log"

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    logger.info("Logging initialized. Log file: %s", log_file)

    return logger


def log_record(logger: Logger, index: int, record: Record) -> None:
    """
    Log a short description of one parsed record.

    :param logger: Logger instance
    :param index: Position of the record in the input (1-based)
    :param record: Parsed record
    """
    logger.debug(f"Contact {index}: {record.display_name}")
    for key, numbers in record.phones.items():
        logger.debug(f"  TEL [{key}]: {', '.join(numbers)}")
    for key, emails in record.emails.items():
        logger.debug(f"  EMAIL [{key}]: {', '.join(emails)}")
    if record.birthday:
        logger.debug(f"  BDAY: {record.birthday.isoformat()}")


def log_statistics(logger: Logger, stats: Dict[str, Any]) -> None:
    """
    Log summary statistics.

    :param logger: Logger instance
    :param stats: Dictionary containing statistics
    """
    logger.info("=" * 60)
    logger.info("IMPORT SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Contacts parsed: {stats.get('total_contacts', 0)}")
    logger.info(f"Contacts with phones: {stats.get('contacts_with_phones', 0)}")
    logger.info(f"Contacts with emails: {stats.get('contacts_with_emails', 0)}")
    logger.info(f"Contacts with photos: {stats.get('contacts_with_photos', 0)}")
    if 'normalized_phones' in stats:
        logger.info(
            f"Phones normalized: {stats['normalized_phones']}/"
            f"{stats.get('total_phones', 0)}"
        )
    logger.info("=" * 60)
