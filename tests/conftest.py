"""
Shared fixtures for the test suite.
"""

from datetime import datetime, timedelta

import pytest

from medama.models import FileRecord

REFERENCE_NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def now():
    """Fixed reference instant for date categories."""
    return REFERENCE_NOW


@pytest.fixture
def make_record():
    """Factory for FileRecord objects with sensible defaults."""

    def _make(name, size=1024, modified_at=None, days_ago=None, path=None):
        if modified_at is None:
            modified_at = REFERENCE_NOW - timedelta(days=days_ago or 0)
        return FileRecord(
            name=name,
            path=path or f"/home/user/Downloads/{name}",
            size=size,
            modified_at=modified_at,
        )

    return _make


@pytest.fixture
def scenario_records(make_record):
    """The three-file selection used for end-to-end checks."""
    return [
        make_record("a.jpg", size=500),
        make_record("b.txt", size=2_000_000),
        make_record("c.mp3", size=5_000_000),
    ]
