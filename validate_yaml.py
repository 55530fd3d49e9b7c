#!/usr/bin/env python3
"""Validate logbook and rule catalog YAML files against their schemas."""
import argparse
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from upkeep.catalog import CATALOG_SCHEMA_FILE, load_schema
from upkeep.store import LOGBOOK_SCHEMA_FILE, normalize_dates

SCHEMAS = {
    "logbook": LOGBOOK_SCHEMA_FILE,
    "catalog": CATALOG_SCHEMA_FILE,
}


def validate_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            data = normalize_dates(data)
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "kind",
        choices=sorted(SCHEMAS),
        help="Which kind of file to validate",
    )
    parser.add_argument("files", type=Path, nargs="+", help="YAML files to check")
    args = parser.parse_args(argv)

    schema = load_schema(SCHEMAS[args.kind])

    all_valid = True
    for filepath in args.files:
        errors = validate_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
