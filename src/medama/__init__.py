"""Medama - Intelligent Directory Organizer

Groups files into categories by type, date, size or extension and renders
the grouping as an organization plan.
"""

__version__ = "1.0.0"

from .errors import (
    ConfigurationError,
    EmptyInputError,
    MedamaError,
    NoResultToExportError,
    PlanWriteError,
)
from .models import FileRecord, OrganizedResult, Strategy
from .organization_logic import CategoryResolver, OrganizationEngine, category_for
from .session import OrganizerSession
from .utils.formatting import format_size, format_timestamp
from .utils.report_generator import PlanExporter

__all__ = [
    # Models
    "FileRecord",
    "OrganizedResult",
    "Strategy",
    # Core components
    "CategoryResolver",
    "OrganizationEngine",
    "OrganizerSession",
    "PlanExporter",
    "category_for",
    "format_size",
    "format_timestamp",
    # Errors
    "MedamaError",
    "EmptyInputError",
    "NoResultToExportError",
    "PlanWriteError",
    "ConfigurationError",
]
