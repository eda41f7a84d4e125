"""Logging adapters implementing LoggerProtocol."""

from t212_dashboard.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
