#!/usr/bin/env python3
"""Tests for loading the rule catalog."""

import pytest
import yaml

from upkeep import (
    DEFAULT_CATALOG,
    DataIntegrityError,
    MaintenanceRule,
    MileageInterval,
    TimeInterval,
    TimeUnit,
    load_catalog,
    parse_catalog,
    rule_to_dict,
)


class TestDefaultCatalog:
    """Tests for the packaged catalog."""

    def test_rule_order(self):
        assert [r.name for r in DEFAULT_CATALOG] == [
            "冷却液",
            "机油",
            "制动液",
            "活性炭罐过滤器",
            "四轮对换",
            "空气滤芯",
            "传动皮带",
            "火花塞",
            "节流阀",
        ]

    def test_oil_is_six_months(self):
        oil = next(r for r in DEFAULT_CATALOG if r.name == "机油")
        assert oil.time_interval == TimeInterval(6, TimeUnit.MONTH)
        assert oil.mileage_interval is None

    def test_spark_plugs_are_mileage_based(self):
        plugs = next(r for r in DEFAULT_CATALOG if r.name == "火花塞")
        assert plugs.mileage_interval == MileageInterval(30000)
        assert plugs.time_interval is None

    def test_every_rule_has_an_interval(self):
        for rule in DEFAULT_CATALOG:
            assert rule.time_interval or rule.mileage_interval

    def test_catalog_is_immutable(self):
        assert isinstance(DEFAULT_CATALOG, tuple)


class TestLoadCatalog:
    """Tests for load_catalog and parse_catalog."""

    def test_loads_custom_file(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text(
            """
rules:
  - name: engine oil
    timeInterval: {amount: 6, unit: month}
    mileageInterval: 7500
  - name: tires
    mileageInterval: 10000
""",
            encoding="utf-8",
        )
        rules = load_catalog(path)
        assert rules == (
            MaintenanceRule(
                "engine oil", TimeInterval(6, TimeUnit.MONTH), MileageInterval(7500)
            ),
            MaintenanceRule("tires", mileage_interval=MileageInterval(10000)),
        )

    def test_rule_without_interval_rejected(self):
        with pytest.raises(DataIntegrityError):
            parse_catalog({"rules": [{"name": "broken"}]})

    def test_bad_unit_rejected(self):
        data = {"rules": [{"name": "oil", "timeInterval": {"amount": 6, "unit": "week"}}]}
        with pytest.raises(DataIntegrityError):
            parse_catalog(data)

    def test_duplicate_names_rejected(self):
        data = {"rules": [{"name": "oil", "mileageInterval": 5000}] * 2}
        with pytest.raises(DataIntegrityError, match="Duplicate"):
            parse_catalog(data)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataIntegrityError):
            load_catalog(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(DataIntegrityError):
            load_catalog(path)


class TestRuleToDict:
    """Tests for rule_to_dict."""

    def test_round_trips_through_parse(self):
        data = {"rules": [rule_to_dict(r) for r in DEFAULT_CATALOG]}
        assert parse_catalog(yaml.safe_load(yaml.dump(data, allow_unicode=True))) == DEFAULT_CATALOG

    def test_omits_missing_intervals(self):
        rule = MaintenanceRule("tires", mileage_interval=MileageInterval(10000))
        assert rule_to_dict(rule) == {"name": "tires", "mileageInterval": 10000}
