"""
Unit tests for the organizer session.
"""

from datetime import datetime

import pytest

from medama.errors import EmptyInputError, NoResultToExportError
from medama.models import Strategy
from medama.organization_logic.engine import OrganizationEngine
from medama.session import OrganizerSession
from medama.utils.report_generator import PlanExporter


class TestOrganizerSession:
    """Test OrganizerSession state handling."""

    @pytest.fixture
    def session(self, now):
        return OrganizerSession(engine=OrganizationEngine(clock=lambda: now))

    def test_initial_state(self, session):
        assert session.files == []
        assert session.strategy is Strategy.BY_TYPE
        assert not session.has_result
        assert session.summary_line() == ""

    def test_organize_empty_selection(self, session):
        with pytest.raises(EmptyInputError):
            session.organize()
        assert not session.has_result

    def test_organize(self, session, scenario_records):
        session.select_files(scenario_records)
        result = session.organize()

        assert session.has_result
        assert session.result is result
        assert session.summary_line() == "3 categories • 3 files organized (By File Type)"

    def test_strategy_change_does_not_reorganize(self, session, scenario_records):
        session.select_files(scenario_records)
        first = session.organize()

        session.strategy = "size"

        assert session.strategy is Strategy.BY_SIZE
        assert session.result is first
        assert session.result.strategy is Strategy.BY_TYPE

        second = session.organize()
        assert second is not first
        assert second.strategy is Strategy.BY_SIZE
        assert set(second.buckets) == {"Tiny (< 100KB)", "Medium (< 10MB)"}

    def test_invalid_strategy(self, session):
        with pytest.raises(ValueError):
            session.strategy = "by-colour"

    def test_select_files_discards_result(self, session, scenario_records, make_record):
        session.select_files(scenario_records)
        session.organize()

        session.select_files([make_record("new.pdf")])

        assert not session.has_result
        assert [f.name for f in session.files] == ["new.pdf"]

    def test_clear(self, session, scenario_records):
        session.select_files(scenario_records)
        session.organize()

        session.clear()

        assert session.files == []
        assert not session.has_result

    def test_files_returns_copy(self, session, scenario_records):
        session.select_files(scenario_records)
        session.files.clear()
        assert len(session.files) == 3

    def test_selected_rows(self, session, make_record):
        session.select_files(
            [make_record("a.jpg", size=500, modified_at=datetime(2024, 2, 3, 4, 5, 6))]
        )
        assert session.selected_rows() == [("a.jpg", "500 B", "2024-02-03 04:05:06")]

    def test_render_before_organize(self, session, scenario_records):
        session.select_files(scenario_records)
        with pytest.raises(NoResultToExportError):
            session.render_plan()

    def test_export_before_organize(self, session, tmp_path):
        with pytest.raises(NoResultToExportError):
            session.export_plan(tmp_path / "plan.txt")
        assert not (tmp_path / "plan.txt").exists()

    def test_export_plan(self, session, scenario_records, tmp_path):
        session.select_files(scenario_records)
        session.organize()

        written = session.export_plan(tmp_path / "plan.txt")

        assert written.read_text(encoding="utf-8") == session.render_plan()

    def test_uses_configured_exporter(self, scenario_records, now):
        session = OrganizerSession(
            strategy=Strategy.BY_EXTENSION,
            engine=OrganizationEngine(clock=lambda: now),
            exporter=PlanExporter(decorated=True),
        )
        session.select_files(scenario_records)
        session.organize()

        assert "📁 .jpg/ (1 files)" in session.render_plan()
