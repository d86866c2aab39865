"""
Unit tests for category resolution.
"""

from datetime import datetime, timedelta, timezone

import pytest

from medama.models import FileRecord, Strategy, get_extension
from medama.organization_logic.categories import (
    CategoryResolver,
    category_for,
    date_category,
    day_difference,
    extension_category,
    size_category,
    type_category,
)


class TestExtensions:
    """Test extension extraction."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("photo.jpg", "jpg"),
            ("photo.JPG", "jpg"),
            ("archive.tar.gz", "gz"),
            ("README", ""),
            (".bashrc", ""),
            ("notes.", ""),
            ("My Report.Final.PDF", "pdf"),
        ],
    )
    def test_get_extension(self, name, expected):
        assert get_extension(name) == expected

    def test_record_extension_property(self, make_record):
        assert make_record("Song.MP3").extension == "mp3"


class TestTypeCategory:
    """Test categorization by file type."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("a.jpg", "Images"),
            ("icon.ico", "Images"),
            ("track.flac", "Audio"),
            ("clip.webm", "Videos"),
            ("main.rs", "Code"),
            ("data.json", "Code"),
            ("backup.7z", "Archives"),
            ("letter.pages", "Documents"),
            ("budget.numbers", "Spreadsheets"),
            ("talk.key", "Presentations"),
            ("setup.exe", "Other"),
            ("README", "Other"),
        ],
    )
    def test_table(self, make_record, name, expected):
        assert category_for(make_record(name), Strategy.BY_TYPE) == expected

    def test_case_insensitive(self, make_record):
        resolver = CategoryResolver()
        upper = resolver.category_for(make_record("photo.JPG"), Strategy.BY_TYPE)
        lower = resolver.category_for(make_record("photo.jpg"), Strategy.BY_TYPE)
        assert upper == lower == "Images"

    def test_accepts_dotted_extension(self):
        assert type_category(".PNG") == "Images"


class TestDateCategory:
    """Test categorization by modification date."""

    @pytest.mark.parametrize(
        "days,expected",
        [
            (0, "Today"),
            (1, "Yesterday"),
            (2, "This Week"),
            (6, "This Week"),
            (7, "This Month"),
            (29, "This Month"),
            (30, "Last 3 Months"),
            (89, "Last 3 Months"),
            (90, "This Year"),
            (364, "This Year"),
            (365, "Older"),
            (4000, "Older"),
        ],
    )
    def test_boundaries(self, now, days, expected):
        assert date_category(now - timedelta(days=days), now) == expected

    def test_whole_day_truncation(self, now):
        # 1 day and 23 hours is still one whole day
        modified = now - timedelta(days=1, hours=23)
        assert day_difference(modified, now) == 1
        assert date_category(modified, now) == "Yesterday"

    def test_less_than_a_day_is_today(self, now):
        assert date_category(now - timedelta(hours=23, minutes=59), now) == "Today"

    def test_future_dates_are_today(self, now):
        assert date_category(now + timedelta(hours=3), now) == "Today"
        assert date_category(now + timedelta(days=40), now) == "Today"
        assert day_difference(now + timedelta(days=40), now) == 0

    def test_missing_timestamp_is_today(self, now):
        assert date_category(None, now) == "Today"

    def test_aware_timestamps(self):
        now = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
        modified = now - timedelta(days=10)
        assert date_category(modified, now) == "This Month"

    def test_mixed_naive_and_aware(self):
        now = datetime.now()
        modified = datetime.now(timezone.utc) - timedelta(days=3)
        assert date_category(modified, now) == "This Week"

    def test_resolver_uses_reference_instant(self, make_record, now):
        record = make_record("old.txt", days_ago=400)
        assert category_for(record, Strategy.BY_DATE, now) == "Older"


class TestSizeCategory:
    """Test categorization by file size."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "Tiny (< 100KB)"),
            (102399, "Tiny (< 100KB)"),
            (102400, "Small (< 1MB)"),
            (1024 ** 2 - 1, "Small (< 1MB)"),
            (1024 ** 2, "Medium (< 10MB)"),
            (10 * 1024 ** 2, "Large (< 100MB)"),
            (100 * 1024 ** 2 - 1, "Large (< 100MB)"),
            (100 * 1024 ** 2, "Very Large (> 100MB)"),
            (5 * 1024 ** 4, "Very Large (> 100MB)"),
        ],
    )
    def test_thresholds(self, size, expected):
        assert size_category(size) == expected


class TestExtensionCategory:
    """Test categorization by extension."""

    def test_extension_label(self, make_record):
        assert category_for(make_record("Report.PDF"), Strategy.BY_EXTENSION) == ".pdf"

    def test_no_extension(self, make_record):
        assert category_for(make_record("README"), Strategy.BY_EXTENSION) == "No Extension"
        assert category_for(make_record("README"), Strategy.BY_TYPE) == "Other"

    def test_dotfile_has_no_extension(self, make_record):
        assert category_for(make_record(".gitignore"), Strategy.BY_EXTENSION) == "No Extension"

    def test_extension_category_helper(self):
        assert extension_category("TXT") == ".txt"
        assert extension_category("") == "No Extension"


class TestCategoryResolver:
    """Test CategoryResolver helpers."""

    def test_accepts_strategy_keys(self, make_record):
        resolver = CategoryResolver()
        record = make_record("song.mp3", size=200)
        assert resolver.category_for(record, "type") == "Audio"
        assert resolver.category_for(record, "size") == "Tiny (< 100KB)"
        assert resolver.category_for(record, 3) == ".mp3"

    def test_labels_never_empty(self, make_record, now):
        resolver = CategoryResolver()
        names = ["a.jpg", "README", ".env", "x.", "weird.UNKNOWN"]
        for strategy in Strategy:
            for name in names:
                record = FileRecord(name=name, path=name, size=0, modified_at=None)
                assert resolver.category_for(record, strategy, now)

    def test_categories_for(self):
        resolver = CategoryResolver()
        assert resolver.categories_for(Strategy.BY_TYPE)[-1] == "Other"
        assert len(resolver.categories_for(Strategy.BY_TYPE)) == 9
        assert resolver.categories_for(Strategy.BY_DATE) == [
            "Today",
            "Yesterday",
            "This Week",
            "This Month",
            "Last 3 Months",
            "This Year",
            "Older",
        ]
        assert len(resolver.categories_for(Strategy.BY_SIZE)) == 5
        assert resolver.categories_for(Strategy.BY_EXTENSION) is None

    def test_vocabularies_are_disjoint(self):
        resolver = CategoryResolver()
        fixed = [
            set(resolver.categories_for(s))
            for s in (Strategy.BY_TYPE, Strategy.BY_DATE, Strategy.BY_SIZE)
        ]
        assert not fixed[0] & fixed[1]
        assert not fixed[0] & fixed[2]
        assert not fixed[1] & fixed[2]
