"""
YAML-backed persistence for the vehicle logbook.

The logbook file holds the purchase date and the service history:

    purchaseDate: '2020-01-01'
    history:
      - id: 1
        itemName: 机油
        date: '2020-07-01'
        mileage: 5000

All changes made inside one transaction() are written together or not at all.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import jsonschema
import yaml

from .calculations import parse_date
from .catalog import PACKAGE_DIR, load_schema
from .errors import DataIntegrityError, StoreError
from .service_event import ServiceEvent
from .vehicle_profile import VehicleProfile

logger = logging.getLogger(__name__)

LOGBOOK_SCHEMA_FILE = PACKAGE_DIR / "logbook.schema.yaml"


def normalize_dates(data: Dict[str, Any]) -> Dict[str, Any]:
    """Turn unquoted YAML dates back into the strings we store."""
    if isinstance(data.get("purchaseDate"), date):
        data["purchaseDate"] = data["purchaseDate"].isoformat()
    for entry in data.get("history") or []:
        if isinstance(entry, dict) and isinstance(entry.get("date"), date):
            entry["date"] = entry["date"].isoformat()
    return data


class Logbook:
    """In-memory logbook document, as seen inside a transaction."""

    def __init__(self, data: Dict[str, Any]):
        self._data = data
        self.dirty = False

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    @property
    def _history(self) -> List[Dict[str, Any]]:
        if self._data.get("history") is None:
            self._data["history"] = []
        return self._data["history"]

    @property
    def profile(self) -> Optional[VehicleProfile]:
        raw = self._data.get("purchaseDate")
        if not raw:
            return None
        return VehicleProfile(parse_date(raw))

    def set_purchase_date_if_absent(self, purchase_date: date) -> bool:
        """Record the purchase date unless one exists. Returns True if set."""
        if self._data.get("purchaseDate"):
            return False
        self._data["purchaseDate"] = purchase_date.isoformat()
        self.dirty = True
        return True

    def events(self) -> List[ServiceEvent]:
        return [ServiceEvent.from_dict(h) for h in self._history]

    def _next_id(self) -> int:
        ids = [h["id"] for h in self._history if h.get("id") is not None]
        return max(ids, default=0) + 1

    def append_events(self, events: Sequence[ServiceEvent]) -> List[ServiceEvent]:
        """Append events, assigning ids. Returns the stored events."""
        stored = []
        next_id = self._next_id()
        for event in events:
            saved = ServiceEvent(event.item_name, event.date, event.mileage, id=next_id)
            self._history.append(saved.to_dict())
            stored.append(saved)
            next_id += 1
        if stored:
            self.dirty = True
        return stored

    def delete_event(self, event_id: int) -> bool:
        """Remove the event with the given id. Returns True if one was removed."""
        history = self._history
        for index, entry in enumerate(history):
            if entry.get("id") == event_id:
                del history[index]
                self.dirty = True
                return True
        return False

    def clear(self) -> None:
        """Forget the purchase date and the whole history."""
        self._data = {"purchaseDate": None, "history": []}
        self.dirty = True


class LogbookStore:
    """Vehicle profile and service history stored in one YAML file."""

    def __init__(self, filename: Union[str, Path]):
        self.filename = Path(filename)

    def _read(self) -> Dict[str, Any]:
        if not self.filename.exists():
            return {"purchaseDate": None, "history": []}
        try:
            with open(self.filename, "r") as fp:
                data = yaml.load(fp, Loader=yaml.SafeLoader)
        except (OSError, yaml.YAMLError) as e:
            raise StoreError(f"Cannot read logbook {self.filename}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise StoreError(f"Logbook {self.filename} is not a mapping")
        data = normalize_dates(data)
        try:
            jsonschema.validate(instance=data, schema=load_schema(LOGBOOK_SCHEMA_FILE))
        except jsonschema.ValidationError as e:
            # Date patterns are the only pattern constraints in the schema.
            if e.validator == "pattern":
                raise DataIntegrityError(f"Malformed date {e.instance!r} in {self.filename}") from e
            raise StoreError(f"Invalid logbook {self.filename}: {e.message}") from e
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        # Write beside the target and rename over it so readers never see half a file.
        directory = self.filename.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
            try:
                with os.fdopen(fd, "w") as fp:
                    yaml.dump(
                        data,
                        fp,
                        default_flow_style=False,
                        allow_unicode=True,
                        sort_keys=False,
                        width=120,
                    )
                os.replace(tmp_name, self.filename)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StoreError(f"Cannot write logbook {self.filename}: {e}") from e

    @contextmanager
    def transaction(self) -> Iterator[Logbook]:
        """
        Load the logbook, yield it for changes, and save it once on success.

        Nothing is written if the block raises.
        """
        logbook = Logbook(self._read())
        yield logbook
        if logbook.dirty:
            self._write(logbook.data)
            logger.info("Saved logbook %s", self.filename)

    # Single-operation conveniences, each its own transaction.

    def get_profile(self) -> Optional[VehicleProfile]:
        with self.transaction() as logbook:
            return logbook.profile

    def get_purchase_date(self) -> Optional[date]:
        profile = self.get_profile()
        return profile.purchase_date if profile else None

    def set_purchase_date_if_absent(self, purchase_date: date) -> bool:
        with self.transaction() as logbook:
            return logbook.set_purchase_date_if_absent(purchase_date)

    def append_events(self, events: Sequence[ServiceEvent]) -> List[ServiceEvent]:
        with self.transaction() as logbook:
            return logbook.append_events(events)

    def list_events(self) -> List[ServiceEvent]:
        """All events, newest first (by date, then mileage)."""
        with self.transaction() as logbook:
            events = logbook.events()
        return sorted(events, key=lambda e: (e.date, e.mileage), reverse=True)

    def delete_event(self, event_id: int) -> bool:
        with self.transaction() as logbook:
            return logbook.delete_event(event_id)

    def clear(self) -> None:
        with self.transaction() as logbook:
            logbook.clear()
