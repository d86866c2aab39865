"""
Data models shared by the organizer core and its host layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


def get_extension(name: str) -> str:
    """Return the lowercase extension of a file name, without the dot.

    Dotfiles such as '.bashrc' and names ending in a dot have no extension.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext.lower()


@dataclass(frozen=True)
class FileRecord:
    """Metadata for one selected file."""

    name: str
    path: str
    size: int
    modified_at: Optional[datetime]

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.size}")

    @property
    def extension(self) -> str:
        return get_extension(self.name)


class Strategy(Enum):
    """Organizing criteria."""

    BY_TYPE = "type"
    BY_DATE = "date"
    BY_SIZE = "size"
    BY_EXTENSION = "extension"

    @property
    def label(self) -> str:
        return _STRATEGY_LABELS[self]

    @classmethod
    def from_value(cls, value: Union["Strategy", str, int]) -> "Strategy":
        """Resolve a strategy from a key, enum name, label or radio index.

        Args:
            value: Strategy, short key ('type'), enum name ('BY_TYPE'),
                label ('By File Type') or index 0-3

        Returns:
            Matching Strategy

        Raises:
            ValueError: If the value does not name a strategy
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Unknown strategy index: {value}")

        if isinstance(value, str):
            key = value.strip().lower()
            if key == "ext":
                key = "extension"
            for member in cls:
                if key in (member.value, member.name.lower(), member.label.lower()):
                    return member

        raise ValueError(f"Unknown strategy: {value!r}")


_STRATEGY_LABELS = {
    Strategy.BY_TYPE: "By File Type",
    Strategy.BY_DATE: "By Date Modified",
    Strategy.BY_SIZE: "By File Size",
    Strategy.BY_EXTENSION: "By Extension",
}


@dataclass
class OrganizedResult:
    """Outcome of one organize pass."""

    buckets: Dict[str, List[FileRecord]]
    strategy: Strategy
    reference_time: datetime = field(default_factory=datetime.now)

    @property
    def category_count(self) -> int:
        return len(self.buckets)

    @property
    def file_count(self) -> int:
        return sum(len(files) for files in self.buckets.values())

    @property
    def strategy_label(self) -> str:
        return self.strategy.label

    def sorted_categories(self) -> List[str]:
        """Category labels in ordinal order, as presented in plans."""
        return sorted(self.buckets)

    def summary(self) -> Dict[str, Any]:
        return {
            "category_count": self.category_count,
            "file_count": self.file_count,
            "strategy_label": self.strategy_label,
        }

    def summary_line(self) -> str:
        return (
            f"{self.category_count} categories • {self.file_count} files "
            f"organized ({self.strategy_label})"
        )
