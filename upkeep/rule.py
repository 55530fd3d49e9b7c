"""MaintenanceRule class for maintenance interval definitions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TimeUnit(Enum):
    """Calendar units a time interval can be expressed in."""

    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class TimeInterval:
    amount: int
    unit: TimeUnit

    def __str__(self) -> str:
        return f"{self.amount} {self.unit.value}"


@dataclass(frozen=True)
class MileageInterval:
    """Distance between services, in km."""

    amount: int

    def __str__(self) -> str:
        return f"{self.amount:,} km"


@dataclass(frozen=True)
class MaintenanceRule:
    """
    A maintenance item and how often it recurs.

    A rule may recur by time, by mileage, or both. A rule with neither is
    rejected by the evaluator rather than here, so that a catalog can be
    inspected even when one entry is broken.
    """

    name: str
    time_interval: Optional[TimeInterval] = None
    mileage_interval: Optional[MileageInterval] = None

    @property
    def interval_text(self) -> str:
        """Human-readable interval, e.g. '6 month / 7,500 km'."""
        parts = []
        if self.time_interval:
            parts.append(str(self.time_interval))
        if self.mileage_interval:
            parts.append(str(self.mileage_interval))
        return " / ".join(parts) if parts else "-"
