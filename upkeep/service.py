"""
Request-level operations shared by the CLI and the web API.

These validate caller input, talk to the logbook store, and hand a
consistent snapshot to the evaluator.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional, Sequence, Union

from .assessment import Evaluation
from .calculations import parse_date
from .catalog import DEFAULT_CATALOG
from .errors import DataIntegrityError, ValidationError
from .evaluator import evaluate
from .rule import MaintenanceRule
from .service_event import PURCHASE_ITEM, ServiceEvent
from .store import LogbookStore

logger = logging.getLogger(__name__)

NO_PURCHASE_DATE = "请先在“保养日志”页面填入并提交一次购车日期。"
ITEMS_NEED_DATE_AND_MILEAGE = "保存保养项目时，必须提供 maintenance_date 和 mileage。"


@dataclass
class SubmitResult:
    """What a submit_maintenance call changed."""

    purchase_date_set: bool = False
    events: List[ServiceEvent] = field(default_factory=list)


def parse_input_date(value: Union[str, date], field_name: str) -> date:
    """Parse a caller-supplied date, reporting problems as ValidationError."""
    try:
        return parse_date(value)
    except DataIntegrityError as e:
        raise ValidationError(f"{field_name} 日期格式无效: {value!r}") from e


def parse_mileage(value: Any, field_name: str = "current_mileage") -> int:
    """Validate an odometer reading: a non-negative whole number."""
    if value is None or value == "":
        raise ValidationError(f"缺少 {field_name}。")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} 必须是非负整数。")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field_name} 必须是非负整数。")
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f"{field_name} 必须是非负整数。") from None
    if not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field_name} 必须是非负整数。")
    return value


def submit_maintenance(
    store: LogbookStore,
    purchase_date: Optional[Union[str, date]] = None,
    maintenance_date: Optional[Union[str, date]] = None,
    mileage: Any = None,
    items: Optional[Sequence[str]] = None,
) -> SubmitResult:
    """
    Record a purchase date and/or a batch of maintenance items.

    The first time a purchase date is recorded a vehicle-purchase event is
    logged at 0 km. Every item is logged at the same date and mileage.
    Nothing is saved unless all of it is.
    """
    purchase = parse_input_date(purchase_date, "purchase_date") if purchase_date else None

    events = []
    items = [str(i).strip() for i in (items or []) if i is not None and str(i).strip()]
    if items:
        if not maintenance_date or mileage is None or mileage == "":
            raise ValidationError(ITEMS_NEED_DATE_AND_MILEAGE)
        service_date = parse_input_date(maintenance_date, "maintenance_date").isoformat()
        km = parse_mileage(mileage, "mileage")
        events = [ServiceEvent(item, service_date, km) for item in items]

    result = SubmitResult()
    with store.transaction() as logbook:
        if purchase is not None:
            result.purchase_date_set = logbook.set_purchase_date_if_absent(purchase)
            if result.purchase_date_set:
                result.events += logbook.append_events(
                    [ServiceEvent(PURCHASE_ITEM, purchase.isoformat(), 0)]
                )
        if events:
            result.events += logbook.append_events(events)

    logger.info(
        "Submitted maintenance: purchase date %s, %d events",
        "set" if result.purchase_date_set else "unchanged",
        len(result.events),
    )
    return result


def query_due(
    store: LogbookStore,
    current_mileage: Any,
    catalog: Optional[Sequence[MaintenanceRule]] = None,
    today: Optional[date] = None,
) -> Evaluation:
    """
    Work out what is due at the given mileage.

    Raises ValidationError when the mileage is unusable or no purchase date
    has been recorded yet; the evaluator is not run in that case.
    """
    km = parse_mileage(current_mileage)
    with store.transaction() as logbook:
        profile = logbook.profile
        history = logbook.events()
    if profile is None:
        raise ValidationError(NO_PURCHASE_DATE)

    return evaluate(
        catalog if catalog is not None else DEFAULT_CATALOG,
        profile.purchase_date,
        history,
        km,
        today or date.today(),
    )


def list_log(store: LogbookStore) -> List[ServiceEvent]:
    return store.list_events()


def delete_log(store: LogbookStore, event_id: Any) -> bool:
    """Delete one event by id. Returns False if no such event exists."""
    if event_id is None or event_id == "":
        raise ValidationError("Log ID is required")
    try:
        event_id = int(event_id)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid log ID: {event_id!r}") from None
    removed = store.delete_event(event_id)
    if removed:
        logger.info("Deleted log entry %d", event_id)
    return removed


def reset(store: LogbookStore) -> None:
    """Remove the purchase date and every log entry."""
    store.clear()
    logger.info("Cleared logbook %s", store.filename)
