"""
Plan generation for organized results.
Renders an organization plan as text or JSON and writes it to disk.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import NoResultToExportError, PlanWriteError
from ..models import OrganizedResult
from .formatting import format_size, format_timestamp

logger = logging.getLogger(__name__)

DEFAULT_PLAN_FILENAME = "organization-plan.txt"
SEPARATOR_WIDTH = 60
OUTPUT_FORMATS = ("text", "json")
PLAN_SUFFIXES = {"text": ".txt", "json": ".json"}


def plan_filename(filename: Union[str, Path], output_format: str = "text") -> Path:
    """Default plan path for a format.

    A '.txt' or '.json' suffix is swapped for the one matching output_format;
    any other name is used as given.
    """
    path = Path(filename)
    suffix = PLAN_SUFFIXES.get(output_format)
    if suffix and path.suffix.lower() in PLAN_SUFFIXES.values():
        return path.with_suffix(suffix)
    return path


class PlanExporter:
    """Render and export organization plans."""

    def __init__(self, decorated: bool = False, encoding: str = "utf-8"):
        """
        Initialize plan exporter.

        Args:
            decorated: Use folder and tree glyphs in text plans
            encoding: Encoding used when writing plans
        """
        self.decorated = decorated
        self.encoding = encoding

    def render(
        self, result: Optional[OrganizedResult], output_format: str = "text"
    ) -> str:
        """
        Render an organized result as a plan document.

        Args:
            result: Result of an organize pass
            output_format: 'text' or 'json'

        Returns:
            Plan document

        Raises:
            NoResultToExportError: If nothing has been organized
            ValueError: For an unsupported format
        """
        if result is None:
            raise NoResultToExportError()

        if output_format == "text":
            return self._generate_text_plan(result)
        elif output_format == "json":
            return json.dumps(self._plan_data(result), indent=2, ensure_ascii=False)
        else:
            raise ValueError(f"Unsupported output format: {output_format}")

    def _generate_text_plan(self, result: OrganizedResult) -> str:
        """Generate the text plan, categories in ordinal order."""
        folder_prefix = "📁 " if self.decorated else ""
        file_prefix = "   └─ " if self.decorated else "   "

        lines = [f"Directory Organization Plan ({result.strategy_label})"]
        lines.append("=" * SEPARATOR_WIDTH)
        lines.append("")

        for category in result.sorted_categories():
            files = result.buckets[category]
            lines.append(f"{folder_prefix}{category}/ ({len(files)} files)")
            for record in files:
                lines.append(f"{file_prefix}{record.name} ({format_size(record.size)})")
            lines.append("")

        return "\n".join(lines) + "\n"

    def _plan_data(self, result: OrganizedResult) -> Dict[str, Any]:
        categories: List[Dict[str, Any]] = []
        for category in result.sorted_categories():
            categories.append(
                {
                    "name": category,
                    "files": [
                        {
                            "name": record.name,
                            "path": record.path,
                            "size": record.size,
                            "size_formatted": format_size(record.size),
                            "modified": format_timestamp(record.modified_at, sep="T"),
                        }
                        for record in result.buckets[category]
                    ],
                }
            )

        return {
            "strategy": result.strategy.value,
            "generated_at": format_timestamp(result.reference_time, sep="T"),
            "summary": result.summary(),
            "categories": categories,
        }

    def export(
        self,
        result: Optional[OrganizedResult],
        output_path: Union[str, Path],
        output_format: str = "text",
    ) -> Path:
        """
        Write the plan to a file, replacing any existing content.

        Args:
            result: Result of an organize pass
            output_path: Destination file
            output_format: 'text' or 'json'

        Returns:
            Path that was written

        Raises:
            NoResultToExportError: If nothing has been organized
            PlanWriteError: If the file cannot be written
        """
        content = self.render(result, output_format)
        output_path = Path(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding=self.encoding, newline="\n") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing plan to {output_path}: {e}")
            raise PlanWriteError(output_path, str(e)) from e

        logger.info(f"Organization plan saved to {output_path}")
        return output_path
