"""Services package.

Keep this module lightweight: importing `services` should not trigger heavy
imports, so the logger is the only export.
"""

from .logger import JsonFormatter, LoggerService, cleanup_logging, get_logger, setup_logging

__all__ = ["JsonFormatter", "LoggerService", "cleanup_logging", "get_logger", "setup_logging"]
