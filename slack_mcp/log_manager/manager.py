#!/usr/bin/env python3
"""
Centralized Logging Manager for the Slack MCP server

Log files go to SLACK_MCP_LOG_DIR (default ~/.slack-mcp/logs/).
The server talks HTTP, not stdio, so records are also written to stderr.
"""

import os
import sys
import time
import logging
import logging.handlers
import json
from pathlib import Path
from typing import Optional, Dict, Any


class LoggingManager:
    """
    Manages logging for all Slack MCP server components.

    Features:
    - Component-specific rotating log files
    - Shared error log
    - stderr echo for container/process supervisors
    - Debug mode support via SLACK_MCP_DEBUG
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize the logging manager (singleton)"""
        if not self._initialized:
            self.log_dir = Path(os.environ.get(
                'SLACK_MCP_LOG_DIR', Path.home() / '.slack-mcp' / 'logs'
            ))
            self.debug_mode = os.environ.get('SLACK_MCP_DEBUG', '').lower() in ('1', 'true', 'yes')
            self.loggers = {}
            self._initialized = True

            self._ensure_log_directories()

    def _ensure_log_directories(self):
        """Create necessary log directories"""
        for directory in (self.log_dir, self.log_dir / 'components'):
            directory.mkdir(parents=True, exist_ok=True)

    def get_logger(self, name: str, component: Optional[str] = None) -> logging.Logger:
        """
        Get or create a logger for a specific component.

        Args:
            name: Logger name (e.g., 'SlackClient')
            component: Component category ('transport', 'tools', None for main)

        Returns:
            Configured logger instance
        """
        logger_key = f"{component}.{name}" if component else name

        if logger_key in self.loggers:
            return self.loggers[logger_key]

        logger = logging.getLogger(f"slack-mcp.{logger_key}")
        logger.setLevel(logging.DEBUG if self.debug_mode else logging.INFO)

        # Remove any inherited handlers
        logger.handlers = []
        logger.propagate = False

        if component:
            log_file = self.log_dir / 'components' / f"{component}.log"
        else:
            log_file = self.log_dir / f"{name.lower()}.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )

        if self.debug_mode:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if self.debug_mode:
            debug_handler = logging.handlers.RotatingFileHandler(
                self.log_dir / 'debug.log',
                maxBytes=50 * 1024 * 1024,  # 50MB for debug
                backupCount=3,
                encoding='utf-8'
            )
            debug_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            debug_handler.setLevel(logging.DEBUG)
            logger.addHandler(debug_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / 'error.log',
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        error_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d]\n%(message)s\n',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        error_handler.setLevel(logging.ERROR)
        logger.addHandler(error_handler)

        self.loggers[logger_key] = logger
        return logger

    def log_with_context(self, logger: logging.Logger, level: int, message: str,
                         context: Optional[Dict[str, Any]] = None):
        """
        Log a message with additional context rendered as JSON.

        Args:
            logger: Logger instance
            level: Log level
            message: Log message
            context: Additional context dict
        """
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        logger.log(level, message)

    def cleanup_old_logs(self, days: int = 7) -> int:
        """
        Delete rotated log files older than the given number of days.

        Returns:
            Number of files removed
        """
        cutoff_time = time.time() - (days * 24 * 60 * 60)
        removed = 0

        for log_file in self.log_dir.rglob('*.log.*'):
            if log_file.stat().st_mtime < cutoff_time:
                log_file.unlink(missing_ok=True)
                removed += 1
        return removed


# Singleton instance
_logging_manager = None


def get_logging_manager() -> LoggingManager:
    """Get the singleton LoggingManager instance"""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def get_logger(name: str, component: Optional[str] = None) -> logging.Logger:
    """
    Convenience function to get a logger.

    Args:
        name: Logger name
        component: Component type ('transport', 'tools', or None)

    Returns:
        Configured logger
    """
    return get_logging_manager().get_logger(name, component)


def configure_logging() -> LoggingManager:
    """Initialize logging system (called once at startup)"""
    return get_logging_manager()
