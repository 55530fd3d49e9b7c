#!/usr/bin/env python3
"""Tests for MaintenanceRule class."""
import dataclasses

import pytest
from upkeep import MaintenanceRule, MileageInterval, TimeInterval, TimeUnit


class TestMaintenanceRule:
    """Tests for MaintenanceRule class."""

    def test_time_only_rule(self):
        """Time-only rule has no mileage interval."""
        rule = MaintenanceRule("机油", time_interval=TimeInterval(6, TimeUnit.MONTH))
        assert rule.time_interval.amount == 6
        assert rule.time_interval.unit == TimeUnit.MONTH
        assert rule.mileage_interval is None

    def test_mileage_only_rule(self):
        """Mileage-only rule has no time interval."""
        rule = MaintenanceRule("火花塞", mileage_interval=MileageInterval(30000))
        assert rule.mileage_interval.amount == 30000
        assert rule.time_interval is None

    def test_interval_text_both(self):
        """Interval text lists time then mileage."""
        rule = MaintenanceRule(
            "机油",
            time_interval=TimeInterval(6, TimeUnit.MONTH),
            mileage_interval=MileageInterval(7500),
        )
        assert rule.interval_text == "6 month / 7,500 km"

    def test_interval_text_none(self):
        """Interval text is a dash for an incomplete rule."""
        assert MaintenanceRule("broken").interval_text == "-"

    def test_rules_are_immutable(self):
        """Rules cannot be changed after creation."""
        rule = MaintenanceRule("火花塞", mileage_interval=MileageInterval(30000))
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.name = "other"

    def test_unit_values(self):
        """Units parse from their catalog spelling."""
        assert TimeUnit("month") == TimeUnit.MONTH
        assert TimeUnit("year") == TimeUnit.YEAR
