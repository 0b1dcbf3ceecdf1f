"""
Logging configuration for the directory API
"""
import logging

from .config import settings


def setup_logger(name, level=None):
    """Setup logger with consistent formatting"""
    if level is None:
        level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    logger.addHandler(handler)

    return logger


def log_admin_action(logger, action, details=None):
    """Log moderation actions for the audit trail"""
    audit_msg = f"AUDIT: admin | Action: {action}"
    if details:
        audit_msg += f" | Details: {details}"
    logger.info(audit_msg)
