"""
Category resolution for the four organizing strategies.

Every function here is pure and total: any file record resolves to a
non-empty label, with "Other" and "No Extension" as the fallbacks.
"""

from datetime import datetime
from typing import List, Optional, Tuple, FrozenSet

from ..models import FileRecord, Strategy, get_extension
from ..utils.formatting import KB, MB


OTHER_CATEGORY = "Other"
NO_EXTENSION_CATEGORY = "No Extension"

# Checked in order, first match wins.
TYPE_CATEGORIES: List[Tuple[str, FrozenSet[str]]] = [
    ("Images", frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico"})),
    ("Audio", frozenset({"mp3", "wav", "flac", "aac", "m4a", "ogg", "wma"})),
    (
        "Videos",
        frozenset({"mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "mpeg"}),
    ),
    (
        "Code",
        frozenset(
            {
                "js",
                "jsx",
                "ts",
                "tsx",
                "py",
                "java",
                "cpp",
                "c",
                "h",
                "cs",
                "php",
                "rb",
                "go",
                "rs",
                "swift",
                "html",
                "css",
                "json",
                "xml",
            }
        ),
    ),
    ("Archives", frozenset({"zip", "rar", "7z", "tar", "gz", "bz2", "xz"})),
    (
        "Documents",
        frozenset({"txt", "doc", "docx", "pdf", "rtf", "odt", "pages"}),
    ),
    ("Spreadsheets", frozenset({"xls", "xlsx", "csv", "ods", "numbers"})),
    ("Presentations", frozenset({"ppt", "pptx", "odp", "key"})),
]

# (exclusive upper bound in days, label)
DATE_CATEGORIES: List[Tuple[int, str]] = [
    (1, "Today"),
    (2, "Yesterday"),
    (7, "This Week"),
    (30, "This Month"),
    (90, "Last 3 Months"),
    (365, "This Year"),
]
OLDEST_DATE_CATEGORY = "Older"

# (exclusive upper bound in bytes, label)
SIZE_CATEGORIES: List[Tuple[int, str]] = [
    (100 * KB, "Tiny (< 100KB)"),
    (MB, "Small (< 1MB)"),
    (10 * MB, "Medium (< 10MB)"),
    (100 * MB, "Large (< 100MB)"),
]
LARGEST_SIZE_CATEGORY = "Very Large (> 100MB)"


def type_category(extension: str) -> str:
    """Map an extension to its file type category."""
    ext = extension.lower().lstrip(".")
    for label, extensions in TYPE_CATEGORIES:
        if ext in extensions:
            return label
    return OTHER_CATEGORY


def day_difference(modified_at: Optional[datetime], now: datetime) -> int:
    """Whole days elapsed between modified_at and now, never negative.

    A missing timestamp counts as modified at now. Naive and aware values are
    compared in naive local time.
    """
    if modified_at is None:
        return 0

    if (modified_at.tzinfo is None) != (now.tzinfo is None):
        modified_at = _as_naive_local(modified_at)
        now = _as_naive_local(now)

    days = (now - modified_at).days
    return max(days, 0)


def _as_naive_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def date_category(modified_at: Optional[datetime], now: datetime) -> str:
    """Map a modification time to a relative date category."""
    days = day_difference(modified_at, now)
    for bound, label in DATE_CATEGORIES:
        if days < bound:
            return label
    return OLDEST_DATE_CATEGORY


def size_category(size: int) -> str:
    """Map a byte count to a size category."""
    for bound, label in SIZE_CATEGORIES:
        if size < bound:
            return label
    return LARGEST_SIZE_CATEGORY


def extension_category(extension: str) -> str:
    """Map an extension to its own category, e.g. '.pdf'."""
    ext = extension.lower().lstrip(".")
    if ext:
        return f".{ext}"
    return NO_EXTENSION_CATEGORY


class CategoryResolver:
    """Resolves file records to category labels under a strategy."""

    def category_for(
        self,
        record: FileRecord,
        strategy: Strategy,
        now: Optional[datetime] = None,
    ) -> str:
        """Determine the category label for a file.

        Args:
            record: File to categorize
            strategy: Organizing strategy
            now: Reference instant for date categories, defaults to the
                current time

        Returns:
            Category label
        """
        strategy = Strategy.from_value(strategy)

        if strategy is Strategy.BY_TYPE:
            return type_category(get_extension(record.name))
        if strategy is Strategy.BY_DATE:
            return date_category(record.modified_at, now or datetime.now())
        if strategy is Strategy.BY_SIZE:
            return size_category(record.size)
        return extension_category(get_extension(record.name))

    def categories_for(self, strategy: Strategy) -> Optional[List[str]]:
        """List the fixed vocabulary of a strategy.

        Returns None for BY_EXTENSION, which has one category per extension.
        """
        strategy = Strategy.from_value(strategy)

        if strategy is Strategy.BY_TYPE:
            return [label for label, _ in TYPE_CATEGORIES] + [OTHER_CATEGORY]
        if strategy is Strategy.BY_DATE:
            return [label for _, label in DATE_CATEGORIES] + [OLDEST_DATE_CATEGORY]
        if strategy is Strategy.BY_SIZE:
            return [label for _, label in SIZE_CATEGORIES] + [LARGEST_SIZE_CATEGORY]
        return None


_default_resolver = CategoryResolver()


def category_for(
    record: FileRecord, strategy: Strategy, now: Optional[datetime] = None
) -> str:
    """Module-level shortcut for CategoryResolver.category_for."""
    return _default_resolver.category_for(record, strategy, now)
