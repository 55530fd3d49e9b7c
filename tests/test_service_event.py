#!/usr/bin/env python3
"""Tests for ServiceEvent class."""

from upkeep import ServiceEvent


class TestServiceEvent:
    """Tests for ServiceEvent class."""

    def test_attributes(self):
        """Attributes are stored correctly."""
        event = ServiceEvent("机油", "2025-01-15", 50000)
        assert event.item_name == "机油"
        assert event.date == "2025-01-15"
        assert event.mileage == 50000
        assert event.id is None

    def test_to_dict_omits_missing_id(self):
        event = ServiceEvent("机油", "2025-01-15", 50000)
        assert event.to_dict() == {"itemName": "机油", "date": "2025-01-15", "mileage": 50000}

    def test_to_dict_with_id(self):
        event = ServiceEvent("机油", "2025-01-15", 50000, id=7)
        assert event.to_dict()["id"] == 7

    def test_from_dict_accepts_date_objects(self):
        """Unquoted YAML dates come back as strings."""
        from datetime import date

        event = ServiceEvent.from_dict(
            {"id": 3, "itemName": "机油", "date": date(2025, 1, 15), "mileage": 100}
        )
        assert event.date == "2025-01-15"
        assert event.id == 3

    def test_to_api_dict_uses_column_names(self):
        event = ServiceEvent("机油", "2025-01-15", 50000, id=7)
        assert event.to_api_dict() == {
            "id": 7,
            "item_name": "机油",
            "maintenance_date": "2025-01-15",
            "mileage": 50000,
        }
