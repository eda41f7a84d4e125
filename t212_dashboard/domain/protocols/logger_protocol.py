"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Implementations MUST keep logs
structured (message + key-value context) and safe: brokerage API keys are
never logged, only a masked prefix.

Usage:
    from t212_dashboard.core.container import get_logger

    logger: LoggerProtocol = get_logger()
    logger.info("export_run_started", start_year=2021)

    run_logger = logger.bind(run_id=str(run_id))
    run_logger.info("export_year_requested", year=2021)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Supports 5 standard log levels and context binding for run-scoped
    logging.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name (snake_case; use context, not f-strings).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
