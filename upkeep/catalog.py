"""Loading the maintenance rule catalog from YAML."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import jsonschema
import yaml

from .errors import DataIntegrityError
from .rule import MaintenanceRule, MileageInterval, TimeInterval, TimeUnit

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
DEFAULT_CATALOG_FILE = PACKAGE_DIR / "catalog.yaml"
CATALOG_SCHEMA_FILE = PACKAGE_DIR / "catalog.schema.yaml"

Catalog = Tuple[MaintenanceRule, ...]


def load_schema(path: Union[str, Path]) -> dict:
    """Load a JSON schema stored as YAML."""
    with open(path) as fp:
        return yaml.safe_load(fp)


def _parse_rule(dct: Dict[str, Any]) -> MaintenanceRule:
    """Parse a catalog entry into a MaintenanceRule."""
    time_interval = None
    if dct.get("timeInterval") is not None:
        ti = dct["timeInterval"]
        time_interval = TimeInterval(ti["amount"], TimeUnit(ti["unit"]))

    mileage_interval = None
    if dct.get("mileageInterval") is not None:
        mileage_interval = MileageInterval(dct["mileageInterval"])

    return MaintenanceRule(dct["name"], time_interval, mileage_interval)


def parse_catalog(data: Any) -> Catalog:
    """
    Build a catalog from already-loaded YAML data.

    Raises DataIntegrityError if the data does not match the catalog schema
    or two rules share a name.
    """
    try:
        jsonschema.validate(instance=data, schema=load_schema(CATALOG_SCHEMA_FILE))
    except jsonschema.ValidationError as e:
        raise DataIntegrityError(f"Invalid rule catalog: {e.message}") from e

    rules = tuple(_parse_rule(r) for r in data["rules"])

    seen = set()
    for rule in rules:
        if rule.name in seen:
            raise DataIntegrityError(f"Duplicate rule name in catalog: {rule.name!r}")
        seen.add(rule.name)
    return rules


def load_catalog(filename: Optional[Union[str, Path]] = None) -> Catalog:
    """Load the rule catalog from a YAML file (the packaged one by default)."""
    path = Path(filename) if filename else DEFAULT_CATALOG_FILE
    try:
        with open(path, "rb") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
    except (OSError, yaml.YAMLError) as e:
        raise DataIntegrityError(f"Cannot read rule catalog {path}: {e}") from e

    rules = parse_catalog(data)
    logger.debug("Loaded %d rules from %s", len(rules), path)
    return rules


def rule_to_dict(rule: MaintenanceRule) -> Dict[str, Any]:
    """Serialize a rule to the catalog dict format (camelCase keys)."""
    d: Dict[str, Any] = {"name": rule.name}
    if rule.time_interval is not None:
        d["timeInterval"] = {
            "amount": rule.time_interval.amount,
            "unit": rule.time_interval.unit.value,
        }
    if rule.mileage_interval is not None:
        d["mileageInterval"] = rule.mileage_interval.amount
    return d


# Loaded once at import; callers needing another table pass their own.
DEFAULT_CATALOG: Catalog = load_catalog()
