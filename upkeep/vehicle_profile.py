"""VehicleProfile class for the tracked vehicle."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class VehicleProfile:
    """Purchase information. There is at most one per logbook."""

    purchase_date: date
