"""
Logging configuration for PrimeSwitch
"""

import logging
import sys
import config


def setup_logger(name=None):
    """
    Setup application logger with file and console handlers

    Args:
        name: Logger name, defaults to the lowercased application name

    Returns:
        logging.Logger instance
    """
    logger = logging.getLogger(name or config.APP_NAME.lower())
    logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # File handler
    try:
        file_handler = logging.FileHandler(config.LOG_FILE, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except Exception as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)

    # Console handler goes to stderr so `primeswitch query` output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    return logger


# Create default logger instance
logger = setup_logger()
