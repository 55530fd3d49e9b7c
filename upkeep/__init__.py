"""
Single-vehicle maintenance tracking.

This package works out which maintenance items are due:
- MaintenanceRule: Maintenance interval definitions (time and/or mileage)
- ServiceEvent: Service records
- VehicleProfile: Purchase date of the tracked vehicle
- DueAssessment: Calculated due status of one rule
- evaluate: The due-status evaluator
- LogbookStore: YAML-backed purchase date and service history
"""

from .errors import (
    UpkeepError,
    ValidationError,
    EvaluationError,
    DataIntegrityError,
    StoreError,
)
from .rule import TimeUnit, TimeInterval, MileageInterval, MaintenanceRule
from .service_event import ServiceEvent, PURCHASE_ITEM
from .vehicle_profile import VehicleProfile
from .assessment import TimeStatus, MileageStatus, DueAssessment, DebugInfo, Evaluation
from .calculations import parse_date, advance_date, days_until, clamp_remaining
from .catalog import DEFAULT_CATALOG, load_catalog, parse_catalog, rule_to_dict
from .evaluator import evaluate, assess_rule, check_rule
from .store import Logbook, LogbookStore
from .service import (
    SubmitResult,
    submit_maintenance,
    query_due,
    list_log,
    delete_log,
    reset,
)

__all__ = [
    "UpkeepError",
    "ValidationError",
    "EvaluationError",
    "DataIntegrityError",
    "StoreError",
    "TimeUnit",
    "TimeInterval",
    "MileageInterval",
    "MaintenanceRule",
    "ServiceEvent",
    "PURCHASE_ITEM",
    "VehicleProfile",
    "TimeStatus",
    "MileageStatus",
    "DueAssessment",
    "DebugInfo",
    "Evaluation",
    "parse_date",
    "advance_date",
    "days_until",
    "clamp_remaining",
    "DEFAULT_CATALOG",
    "load_catalog",
    "parse_catalog",
    "rule_to_dict",
    "evaluate",
    "assess_rule",
    "check_rule",
    "Logbook",
    "LogbookStore",
    "SubmitResult",
    "submit_maintenance",
    "query_due",
    "list_log",
    "delete_log",
    "reset",
]
