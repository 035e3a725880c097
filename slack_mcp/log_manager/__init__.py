"""
Logging Package for the Slack MCP server

Provides centralized logging: rotating log files under SLACK_MCP_LOG_DIR
(default ~/.slack-mcp/logs/) with every record echoed to stderr.
"""

from .manager import LoggingManager, get_logger, configure_logging, get_logging_manager

__all__ = ['LoggingManager', 'get_logger', 'configure_logging', 'get_logging_manager']
