"""Logging utilities for polyop."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOGGER_NAME = "polyop"


@dataclass
class OperationStats:
    """Statistics from a series of polygon operations."""

    operation_count: int = 0
    short_circuit_count: int = 0
    crossing_count: int = 0
    rings_emitted: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging for the polyop logger.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output entirely

    Returns:
        Configured structlog logger
    """
    stdlib_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(stdlib_logger.handlers):
        stdlib_logger.removeHandler(handler)
        handler.close()
    stdlib_logger.setLevel(logging.DEBUG)
    stdlib_logger.propagate = False

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        stdlib_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(console_handler)

    if not stdlib_logger.handlers:
        stdlib_logger.addHandler(logging.NullHandler())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(LOGGER_NAME)
    logger.debug("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class OperationLogger:
    """Reports operation progress and accumulates statistics.

    Without a logger the events are only counted. The statistics are
    cumulative over every operation reported to this instance.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def _debug(self, event: str, **kwargs: object) -> None:
        if self._logger is not None:
            self._logger.debug(event, **kwargs)

    def log_operation_start(self, operation: str, rings_a: int, rings_b: int) -> None:
        """Log start of a polygon operation."""
        self._debug("Operation started", operation=operation, rings_a=rings_a, rings_b=rings_b)

    def log_short_circuit(self, operation: str, reason: str) -> None:
        """Log an operation answered without traversal."""
        self._debug("Operation short-circuited", operation=operation, reason=reason)
        self._stats.short_circuit_count += 1

    def log_crossings(self, operation: str, count: int) -> None:
        """Log the number of crossings found for one pass."""
        self._debug("Crossings found", operation=operation, count=count)
        self._stats.crossing_count += count

    def log_ring_emitted(self, operation: str, point_count: int, area: float) -> None:
        """Log an output ring."""
        self._debug(
            "Ring emitted",
            operation=operation,
            points=point_count,
            area=round(area, 6),
        )
        self._stats.rings_emitted += 1

    def log_operation_complete(
        self,
        operation: str,
        ring_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful operation."""
        if self._logger is not None:
            self._logger.info(
                "Operation complete",
                operation=operation,
                rings=ring_count,
                duration_ms=round(duration_ms, 2),
            )
        self._stats.operation_count += 1

    def log_operation_error(self, operation: str, error: Exception) -> None:
        """Log failed operation."""
        if self._logger is not None:
            self._logger.error(
                "Operation failed",
                operation=operation,
                error=str(error),
                error_type=type(error).__name__,
            )
        self._stats.error_count += 1
        self._stats.errors.append((operation, str(error)))

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
