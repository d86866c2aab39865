"""
Session state for one organizing workflow: the selected files, the active
strategy and the most recent result.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .errors import NoResultToExportError
from .models import FileRecord, OrganizedResult, Strategy
from .organization_logic.engine import OrganizationEngine
from .utils.formatting import format_size, format_timestamp
from .utils.report_generator import PlanExporter

logger = logging.getLogger(__name__)


class OrganizerSession:
    """Holds the selection and result owned by the host application."""

    def __init__(
        self,
        strategy: Union[Strategy, str, int] = Strategy.BY_TYPE,
        engine: Optional[OrganizationEngine] = None,
        exporter: Optional[PlanExporter] = None,
    ):
        self.engine = engine or OrganizationEngine()
        self.exporter = exporter or PlanExporter()
        self._strategy = Strategy.from_value(strategy)
        self._files: List[FileRecord] = []
        self._result: Optional[OrganizedResult] = None

    @property
    def files(self) -> List[FileRecord]:
        return list(self._files)

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @strategy.setter
    def strategy(self, value: Union[Strategy, str, int]):
        # Takes effect on the next organize() call.
        self._strategy = Strategy.from_value(value)

    @property
    def result(self) -> Optional[OrganizedResult]:
        return self._result

    @property
    def has_result(self) -> bool:
        return self._result is not None

    def select_files(self, records: Sequence[FileRecord]):
        """Replace the selection, discarding any previous result."""
        self._files = list(records)
        self._result = None
        logger.info(f"Selected {len(self._files)} files")

    def clear(self):
        self._files = []
        self._result = None

    def selected_rows(self) -> List[Tuple[str, str, str]]:
        """(name, size, modified) display rows for the selected files."""
        return [
            (f.name, format_size(f.size), format_timestamp(f.modified_at))
            for f in self._files
        ]

    def organize(self) -> OrganizedResult:
        """Run an organize pass over the selection with the active strategy.

        Raises:
            EmptyInputError: If no files are selected
        """
        self._result = self.engine.organize(self._files, self._strategy)
        return self._result

    def summary_line(self) -> str:
        if self._result is None:
            return ""
        return self._result.summary_line()

    def render_plan(self, output_format: str = "text") -> str:
        return self.exporter.render(self._result, output_format)

    def export_plan(self, output_path: Union[str, Path], output_format: str = "text") -> Path:
        """Write the current plan to output_path.

        Raises:
            NoResultToExportError: If organize() has not run
            PlanWriteError: If the file cannot be written
        """
        if self._result is None:
            raise NoResultToExportError()
        return self.exporter.export(self._result, output_path, output_format)
