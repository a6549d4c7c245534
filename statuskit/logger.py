"""
Structured logging system for statuskit.

Provides centralized logging with console and file outputs, log levels,
and normalization metrics for spotting unrecognized upstream statuses.
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Any, Optional
from datetime import datetime
import json

from .normalize import status_text

ABSENT_LABEL = "<absent>"
OTHER_LABEL = "<other>"
# Bounds on the unrecognized-label tally, which is keyed by untrusted text
MAX_LABEL_LENGTH = 80
MAX_UNRECOGNIZED_LABELS = 500


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks how raw statuses were resolved during ingestion.
    """

    def __init__(
        self,
        name: str = "statuskit",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        # Metrics tracking
        self.metrics = {
            "normalized": 0,
            "by_status": {},
            "unrecognized": {},
            "records_invalid": 0,
        }

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"statuskit_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_normalization(self, raw: Any, status: str):
        """Record one resolved status; unrecognized raw labels are tallied by text."""
        self.metrics["normalized"] += 1
        by_status = self.metrics["by_status"]
        by_status[status] = by_status.get(status, 0) + 1

        if status == "unknown":
            label = (status_text(raw) or ABSENT_LABEL)[:MAX_LABEL_LENGTH]
            unrecognized = self.metrics["unrecognized"]
            if label not in unrecognized and len(unrecognized) >= MAX_UNRECOGNIZED_LABELS:
                label = OTHER_LABEL
            unrecognized[label] = unrecognized.get(label, 0) + 1

    def record_invalid(self):
        """Record a record rejected by validation."""
        self.metrics["records_invalid"] += 1

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics with the recognition rate."""
        metrics_copy = copy.deepcopy(self.metrics)
        total = metrics_copy["normalized"]
        unknown = metrics_copy["by_status"].get("unknown", 0)
        metrics_copy["recognition_rate"] = round((total - unknown) / total, 3) if total else 0.0
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Status Normalization Metrics ===")
        self.info(f"Normalized: {metrics['normalized']} ({metrics['recognition_rate'] * 100:.1f}% recognized)")
        self.info(f"Invalid records: {metrics['records_invalid']}")

        if metrics["by_status"]:
            self.info("By status:")
            for status, count in metrics["by_status"].items():
                self.info(f"  {status}: {count}")

        if metrics["unrecognized"]:
            self.info("Unrecognized labels:")
            for label, count in sorted(metrics["unrecognized"].items(), key=lambda kv: -kv[1]):
                self.info(f"  {label}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "statuskit",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
