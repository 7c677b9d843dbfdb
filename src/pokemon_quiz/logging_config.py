"""
Logging configuration for the quiz.

The game owns stdout for its full-screen display, so log records go to stderr
where they can be redirected to a file.
"""

import logging
import os
import sys


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """
    Setup a logger with stderr output.
    
    Args:
        name: Logger name (usually module name)
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var LOG_LEVEL or INFO
    
    Returns:
        Configured logger instance
    """
    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO')
    level_value = getattr(logging, level.upper(), logging.INFO)
    
    logger = logging.getLogger(name)
    logger.setLevel(level_value)
    
    # Avoid duplicate handlers
    if logger.handlers:
        return logger
    
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level_value)
    stderr_handler.setFormatter(logging.Formatter(
        '[%(asctime)s] %(name)s %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(stderr_handler)
    
    return logger
