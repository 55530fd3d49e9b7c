"""ServiceEvent class for maintenance log records."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

# Logged automatically the first time a purchase date is recorded.
PURCHASE_ITEM = "车辆购买"


@dataclass(frozen=True)
class ServiceEvent:
    """A record of one maintenance item performed on a given day."""

    item_name: str
    date: str
    mileage: int
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the logbook dict format (camelCase keys)."""
        d: Dict[str, Any] = {}
        if self.id is not None:
            d["id"] = self.id
        d["itemName"] = self.item_name
        d["date"] = self.date
        d["mileage"] = self.mileage
        return d

    def to_api_dict(self) -> Dict[str, Any]:
        """Serialize with the column names the HTTP clients read."""
        return {
            "id": self.id,
            "item_name": self.item_name,
            "maintenance_date": self.date,
            "mileage": self.mileage,
        }

    @classmethod
    def from_dict(cls, dct: Dict[str, Any]) -> "ServiceEvent":
        return cls(
            item_name=dct["itemName"],
            date=str(dct["date"]),
            mileage=dct["mileage"],
            id=dct.get("id"),
        )
