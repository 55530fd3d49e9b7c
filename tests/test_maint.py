#!/usr/bin/env python3
"""Tests for maint CLI formatting, table helpers and commands."""

from datetime import date

import pytest

from upkeep import (
    PURCHASE_ITEM,
    DueAssessment,
    LogbookStore,
    MileageStatus,
    ServiceEvent,
    TimeStatus,
)
from maint import format_km, format_remaining, make_history_table, make_status_table, main


class TestFormatKm:
    """Tests for format_km."""

    def test_formats_number(self):
        assert format_km(50000) == "50,000"
        assert format_km(0) == "0"

    def test_none_returns_dash(self):
        assert format_km(None) == "-"


class TestFormatRemaining:
    """Tests for format_remaining."""

    def test_none_returns_dash(self):
        assert format_remaining(None, "km") == "-"

    def test_positive(self):
        assert format_remaining(2500, "km") == "2,500 km"

    def test_zero_is_due(self):
        assert format_remaining(0, "d") == "due"

    def test_negative_shows_overrun(self):
        assert format_remaining(-1500, "km") == "due (1,500 km over)"


class TestMakeStatusTable:
    """Tests for make_status_table."""

    def test_empty_list_returns_empty_rows(self):
        assert make_status_table([]) == []

    def test_time_only_row(self):
        a = DueAssessment(
            "机油",
            time_status=TimeStatus(date(2020, 7, 1), -31, date(2020, 1, 1), True),
        )
        rows = make_status_table([a])
        assert rows[0] == [
            "机油",
            "DUE",
            "购车日期 (2020-01-01)",
            "2020-07-01",
            "due (31 d over)",
            "-",
            "-",
            "-",
        ]

    def test_mileage_only_row(self):
        a = DueAssessment("火花塞", mileage_status=MileageStatus(40000, 24000, 10000))
        rows = make_status_table([a])
        assert rows[0][1] == "ok"
        assert rows[0][5:] == ["上次保养 (10000km)", "40,000", "24,000 km"]


class TestMakeHistoryTable:
    """Tests for make_history_table."""

    def test_converts_entries_to_rows(self):
        rows = make_history_table([ServiceEvent("机油", "2025-01-15", 95000, id=4)])
        assert rows == [["4", "2025-01-15", "95,000", "机油"]]


class TestCommands:
    """End-to-end runs of main() against a temporary logbook."""

    @pytest.fixture
    def logbook(self, tmp_path):
        return str(tmp_path / "logbook.yaml")

    def test_status_without_purchase_date(self, logbook, capsys):
        assert main([logbook, "status", "--mileage", "1000"]) == 1
        assert "购车日期" in capsys.readouterr().out

    def test_log_then_status(self, logbook, capsys):
        assert main(
            [logbook, "log", "机油", "--mileage", "0", "--date", "2020-01-01",
             "--purchase-date", "2020-01-01"]
        ) == 0
        assert main([logbook, "status", "--mileage", "31000", "--date", "2020-03-01", "--debug"]) == 0
        out = capsys.readouterr().out
        assert "火花塞: 已到期" in out
        assert "机油: 下次保养日期 2020-07-01" in out

    def test_log_unknown_item_rejected(self, logbook, capsys):
        assert main([logbook, "log", "wiper", "--mileage", "100"]) == 1
        assert "Unknown item" in capsys.readouterr().out

    def test_log_dry_run(self, logbook, tmp_path):
        assert main([logbook, "log", "机油", "--mileage", "100", "--dry-run"]) == 0
        assert not (tmp_path / "logbook.yaml").exists()

    def test_history_and_delete(self, logbook, capsys):
        main([logbook, "log", "机油", "--mileage", "100", "--date", "2021-01-01"])
        assert main([logbook, "history"]) == 0
        assert "机油" in capsys.readouterr().out
        assert main([logbook, "delete", "1"]) == 0
        assert main([logbook, "delete", "1"]) == 1

    def test_reset_needs_confirmation(self, logbook):
        assert main([logbook, "reset"]) == 1
        assert main([logbook, "reset", "--yes"]) == 0

    def test_rules(self, logbook, capsys):
        assert main([logbook, "rules"]) == 0
        out = capsys.readouterr().out
        assert "30,000 km" in out
        assert "6 month" in out

    def test_bad_status_date(self, logbook, capsys):
        main([logbook, "log", "--purchase-date", "2020-01-01"])
        assert main([logbook, "status", "--mileage", "10", "--date", "2020-99-01"]) == 1

    def test_log_purchase_date_only(self, logbook, capsys):
        assert main([logbook, "log", "--purchase-date", "2023-11-20"]) == 0
        assert "Saved 1 entries." in capsys.readouterr().out
        events = LogbookStore(logbook).list_events()
        assert [(e.item_name, e.date, e.mileage) for e in events] == [
            (PURCHASE_ITEM, "2023-11-20", 0)
        ]
        assert main([logbook, "status", "--mileage", "100", "--date", "2023-12-01"]) == 0

    def test_log_needs_items_or_purchase_date(self, logbook, capsys):
        assert main([logbook, "log"]) == 1
        assert "--purchase-date" in capsys.readouterr().out

    def test_log_items_without_mileage(self, logbook):
        assert main([logbook, "log", "机油", "--date", "2021-01-01"]) == 1
        assert LogbookStore(logbook).list_events() == []

    def test_store_failure_logged(self, logbook, tmp_path, capsys, caplog):
        (tmp_path / "logbook.yaml").write_text("history: [unclosed\n")
        assert main([logbook, "history"]) == 2
        assert "Internal error" in capsys.readouterr().out
        errors = [r for r in caplog.records if r.levelname == "ERROR"]
        assert errors and errors[0].exc_info is not None
