"""
Due-status evaluation.

Maps a rule catalog and a vehicle's service history onto due suggestions.
Everything here is a pure function of its arguments: no I/O, no module
state, so concurrent callers need no locking.
"""

import logging
from datetime import date
from typing import List, Sequence

from .assessment import DebugInfo, DueAssessment, Evaluation, MileageStatus, TimeStatus
from .calculations import advance_date, days_until, parse_date
from .errors import DataIntegrityError
from .rule import MaintenanceRule, TimeUnit
from .service_event import ServiceEvent

logger = logging.getLogger(__name__)


def check_rule(rule: MaintenanceRule) -> None:
    """Raise DataIntegrityError if a rule cannot be evaluated."""
    if rule.time_interval is None and rule.mileage_interval is None:
        raise DataIntegrityError(f"Rule {rule.name!r} has neither a time nor a mileage interval")
    if rule.time_interval is not None:
        if not isinstance(rule.time_interval.unit, TimeUnit):
            raise DataIntegrityError(f"Rule {rule.name!r} has unknown time unit {rule.time_interval.unit!r}")
        if rule.time_interval.amount <= 0:
            raise DataIntegrityError(f"Rule {rule.name!r} has a non-positive time interval")
    if rule.mileage_interval is not None and rule.mileage_interval.amount <= 0:
        raise DataIntegrityError(f"Rule {rule.name!r} has a non-positive mileage interval")


def assess_time(
    rule: MaintenanceRule, purchase_date: date, events: List[ServiceEvent], today: date
) -> TimeStatus:
    """
    Project the next time-based due date for a rule.

    The basis is the latest of the purchase date and every matching service
    date, whatever order the history arrives in.
    """
    basis = max([purchase_date] + [parse_date(e.date) for e in events])
    due = advance_date(basis, rule.time_interval)
    return TimeStatus(
        next_due_date=due,
        days_remaining=days_until(due, today),
        basis_date=basis,
        from_purchase=basis == purchase_date,
    )


def assess_mileage(
    rule: MaintenanceRule, events: List[ServiceEvent], current_mileage: int
) -> MileageStatus:
    """Project the next mileage-based due point (highest matching reading + interval)."""
    basis = max([0] + [e.mileage for e in events])
    due = basis + rule.mileage_interval.amount
    return MileageStatus(
        next_due_mileage=due,
        distance_remaining=due - current_mileage,
        basis_mileage=basis,
    )


def assess_rule(
    rule: MaintenanceRule,
    purchase_date: date,
    history: Sequence[ServiceEvent],
    current_mileage: int,
    today: date,
) -> DueAssessment:
    """Calculate both projections for a single rule."""
    check_rule(rule)
    events = [e for e in history if e.item_name == rule.name]

    time_status = None
    if rule.time_interval is not None:
        time_status = assess_time(rule, purchase_date, events, today)

    mileage_status = None
    if rule.mileage_interval is not None:
        mileage_status = assess_mileage(rule, events, current_mileage)

    return DueAssessment(rule.name, time_status, mileage_status)


def evaluate(
    catalog: Sequence[MaintenanceRule],
    purchase_date: date,
    history: Sequence[ServiceEvent],
    current_mileage: int,
    today: date,
) -> Evaluation:
    """
    Evaluate every rule in catalog order.

    Each rule contributes at most one suggestion. Every time and mileage
    projection is listed in the debug info whether due or not.

    Raises:
        DataIntegrityError: a history date is malformed or a rule is incomplete.
    """
    # Fail on a bad record even if no rule references its item.
    for event in history:
        parse_date(event.date)

    assessments = [
        assess_rule(rule, purchase_date, history, current_mileage, today)
        for rule in catalog
    ]

    suggestions = [a.suggestion for a in assessments if a.suggestion is not None]
    debug = DebugInfo(
        query_date=today,
        time_based=[a.time_debug for a in assessments if a.time_debug is not None],
        mileage_based=[a.mileage_debug for a in assessments if a.mileage_debug is not None],
    )

    logger.debug(
        "Evaluated %d rules at %s km on %s: %d due",
        len(assessments),
        current_mileage,
        today.isoformat(),
        len(suggestions),
    )
    return Evaluation(suggestions=suggestions, debug=debug, assessments=assessments)
