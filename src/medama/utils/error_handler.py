"""
Error handling for the organizer.
Categorizes failures, records them and turns them into user-facing messages.
"""

import json
import logging
import traceback
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from ..errors import (
    ConfigurationError,
    EmptyInputError,
    NoResultToExportError,
    PlanWriteError,
)

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Categorization of different error types."""

    EMPTY_INPUT = "empty_input"
    NO_RESULT = "no_result"
    WRITE_FAILURE = "write_failure"
    FILE_ACCESS = "file_access"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ErrorRecord:
    """Record of an error occurrence."""

    def __init__(
        self,
        error: Exception,
        context: str,
        error_type: ErrorType,
        severity: ErrorSeverity,
    ):
        self.error = error
        self.context = context
        self.error_type = error_type
        self.severity = severity
        self.timestamp = datetime.now()
        self.traceback = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "error": str(self.error),
            "context": self.context,
            "error_type": self.error_type.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "traceback": self.traceback,
        }


class ErrorHandler:
    """Categorize and record errors reported to the user."""

    def __init__(self):
        self.error_history: List[ErrorRecord] = []
        self.error_counts: Dict[ErrorType, int] = {
            error_type: 0 for error_type in ErrorType
        }

    def handle_error(self, error: Exception, context: str) -> ErrorRecord:
        """
        Record an error and log it at a level matching its severity.

        Args:
            error: The exception to handle
            context: Context describing where the error occurred

        Returns:
            The ErrorRecord that was stored
        """
        error_type = self._categorize_error(error)
        severity = self._determine_severity(error_type)

        record = ErrorRecord(error, context, error_type, severity)
        self.error_history.append(record)
        self.error_counts[error_type] += 1

        logger.log(
            _LOG_LEVELS[severity],
            f"Error in {context}: {error}",
            extra={"error_type": error_type.value, "severity": severity.value},
        )
        if severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
            logger.debug(f"Traceback: {record.traceback}")

        return record

    def _categorize_error(self, error: Exception) -> ErrorType:
        """Categorize the error type."""
        if isinstance(error, EmptyInputError):
            return ErrorType.EMPTY_INPUT
        elif isinstance(error, NoResultToExportError):
            return ErrorType.NO_RESULT
        elif isinstance(error, PlanWriteError):
            return ErrorType.WRITE_FAILURE
        elif isinstance(error, ConfigurationError):
            return ErrorType.CONFIGURATION
        elif isinstance(error, OSError):
            return ErrorType.FILE_ACCESS
        else:
            return ErrorType.UNKNOWN

    def _determine_severity(self, error_type: ErrorType) -> ErrorSeverity:
        """Determine error severity based on error type."""
        if error_type in (ErrorType.EMPTY_INPUT, ErrorType.NO_RESULT):
            return ErrorSeverity.LOW
        elif error_type == ErrorType.FILE_ACCESS:
            return ErrorSeverity.MEDIUM
        elif error_type == ErrorType.CONFIGURATION:
            return ErrorSeverity.CRITICAL
        else:
            return ErrorSeverity.HIGH

    def user_message(self, record: ErrorRecord) -> str:
        """Short message suitable for showing to the user."""
        if record.error_type == ErrorType.EMPTY_INPUT:
            return "No files selected. Choose some files to organize first."
        elif record.error_type == ErrorType.NO_RESULT:
            return "Nothing to export. Organize the selected files first."
        return str(record.error)

    def get_error_statistics(self) -> Dict[str, Any]:
        """Get statistics about errors encountered."""
        return {
            "total_errors": len(self.error_history),
            "error_counts_by_type": {
                error_type.value: count
                for error_type, count in self.error_counts.items()
            },
            "recent_errors": [error.to_dict() for error in self.error_history[-10:]],
        }

    def save_error_report(self, filepath: Path):
        """Save a detailed error report to file."""
        report = {
            "generated_at": datetime.now().isoformat(),
            "statistics": self.get_error_statistics(),
            "error_history": [error.to_dict() for error in self.error_history],
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)

        logger.info(f"Error report saved to {filepath}")
