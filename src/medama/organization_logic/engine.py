"""
Organization engine that partitions files into category buckets.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..errors import EmptyInputError
from ..models import FileRecord, OrganizedResult, Strategy
from .categories import CategoryResolver

logger = logging.getLogger(__name__)


class OrganizationEngine:
    """Engine for grouping files by the active strategy."""

    def __init__(
        self,
        resolver: Optional[CategoryResolver] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize organization engine.

        Args:
            resolver: Category resolver, a default one is created if omitted
            clock: Callable returning the reference instant for date
                categories
        """
        self.resolver = resolver or CategoryResolver()
        self.clock = clock

    def organize(
        self,
        records: Sequence[FileRecord],
        strategy: Union[Strategy, str, int],
        now: Optional[datetime] = None,
    ) -> OrganizedResult:
        """Partition files into buckets keyed by category label.

        Buckets keep the input order of their files and are created in the
        order their first file is seen.

        Args:
            records: Files to organize, in selection order
            strategy: Organizing strategy
            now: Reference instant, captured from the clock if omitted

        Returns:
            Fresh OrganizedResult

        Raises:
            EmptyInputError: If there are no files
        """
        if not records:
            raise EmptyInputError()

        strategy = Strategy.from_value(strategy)
        now = now or self.clock()

        buckets: Dict[str, List[FileRecord]] = {}
        for record, category in self.categorize(records, strategy, now):
            buckets.setdefault(category, []).append(record)

        result = OrganizedResult(buckets=buckets, strategy=strategy, reference_time=now)
        logger.info(
            f"Organized {result.file_count} files into "
            f"{result.category_count} categories ({strategy.label})"
        )
        return result

    def categorize(
        self,
        records: Sequence[FileRecord],
        strategy: Union[Strategy, str, int],
        now: Optional[datetime] = None,
    ) -> List[Tuple[FileRecord, str]]:
        """Pair every file with its category label without grouping.

        Args:
            records: Files to categorize
            strategy: Organizing strategy
            now: Reference instant shared by all files

        Returns:
            List of (record, category) tuples in input order
        """
        strategy = Strategy.from_value(strategy)
        now = now or self.clock()

        pairs = []
        for record in records:
            category = self.resolver.category_for(record, strategy, now)
            logger.debug(f"{record.name} -> {category}")
            pairs.append((record, category))

        return pairs
