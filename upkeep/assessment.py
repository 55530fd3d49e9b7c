"""Dataclasses describing the calculated due status of each rule."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from .calculations import clamp_remaining

DUE_MESSAGE = "{name}: 已到期, 请立即保养. (基于: {basis})"


@dataclass(frozen=True)
class TimeStatus:
    """Time-based projection for a rule."""

    next_due_date: date
    days_remaining: int
    basis_date: date
    from_purchase: bool

    @property
    def is_due(self) -> bool:
        return self.days_remaining <= 0

    @property
    def basis_label(self) -> str:
        if self.from_purchase:
            return f"购车日期 ({self.basis_date.isoformat()})"
        return f"上次保养 ({self.basis_date.isoformat()})"

    @property
    def days_left(self) -> int:
        return clamp_remaining(self.days_remaining)


@dataclass(frozen=True)
class MileageStatus:
    """Mileage-based projection for a rule."""

    next_due_mileage: int
    distance_remaining: int
    basis_mileage: int

    @property
    def is_due(self) -> bool:
        return self.distance_remaining <= 0

    @property
    def basis_label(self) -> str:
        if self.basis_mileage == 0:
            return "购车 (0km)"
        return f"上次保养 ({self.basis_mileage}km)"

    @property
    def distance_left(self) -> int:
        return clamp_remaining(self.distance_remaining)


@dataclass(frozen=True)
class DueAssessment:
    """Calculated due information for one rule."""

    item_name: str
    time_status: Optional[TimeStatus] = None
    mileage_status: Optional[MileageStatus] = None

    @property
    def is_due(self) -> bool:
        return any(s is not None and s.is_due for s in (self.mileage_status, self.time_status))

    @property
    def suggestion(self) -> Optional[str]:
        """
        The single due message for this rule, or None if nothing is due.

        When both projections are due the mileage one is reported.
        """
        for status in (self.mileage_status, self.time_status):
            if status is not None and status.is_due:
                return DUE_MESSAGE.format(name=self.item_name, basis=status.basis_label)
        return None

    @property
    def time_debug(self) -> Optional[str]:
        s = self.time_status
        if s is None:
            return None
        return (
            f"{self.item_name}: 下次保养日期 {s.next_due_date.isoformat()}. "
            f"基于 {s.basis_label}. "
            f"还剩 {s.days_left} 天."
        )

    @property
    def mileage_debug(self) -> Optional[str]:
        s = self.mileage_status
        if s is None:
            return None
        return (
            f"{self.item_name}: 下次保养里程 {s.next_due_mileage}km. "
            f"基于 {s.basis_label}. "
            f"还差 {s.distance_left} km."
        )


@dataclass(frozen=True)
class DebugInfo:
    """Every projection, due or not, for troubleshooting."""

    query_date: date
    time_based: List[str] = field(default_factory=list)
    mileage_based: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "queryDate": self.query_date.isoformat(),
            "timeBased": list(self.time_based),
            "mileageBased": list(self.mileage_based),
        }


@dataclass(frozen=True)
class Evaluation:
    """Result of one evaluation run."""

    suggestions: List[str]
    debug: DebugInfo
    assessments: List[DueAssessment]

    def to_dict(self) -> Dict[str, Any]:
        return {"suggestions": list(self.suggestions), "debugInfo": self.debug.to_dict()}
