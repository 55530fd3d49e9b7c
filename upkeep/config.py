"""Settings read from the environment."""

import logging
import os
from pathlib import Path
from typing import Optional


class Config:
    """Runtime settings. Environment variables override the defaults."""

    def __init__(
        self,
        data_file: Optional[str] = None,
        catalog_file: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        self.data_file = Path(data_file or os.environ.get("UPKEEP_DATA_FILE", "logbook.yaml"))
        catalog = catalog_file or os.environ.get("UPKEEP_CATALOG_FILE")
        self.catalog_file = Path(catalog) if catalog else None
        self.log_level = (log_level or os.environ.get("UPKEEP_LOG_LEVEL", "INFO")).upper()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
