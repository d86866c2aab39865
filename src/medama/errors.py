"""
Exceptions raised by the organizer.
"""

from pathlib import Path
from typing import Optional, Union


class MedamaError(Exception):
    """Base error for the project."""


class EmptyInputError(MedamaError):
    """Organize was requested with no files selected."""

    def __init__(self, message: str = "No files to organize"):
        super().__init__(message)


class NoResultToExportError(MedamaError):
    """A plan was requested before any organize pass."""

    def __init__(self, message: str = "Nothing has been organized yet"):
        super().__init__(message)


class PlanWriteError(MedamaError):
    """The plan could not be written to its destination."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        message = f"Could not write organization plan to {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigurationError(MedamaError, ValueError):
    """Configuration values failed validation."""
