from __future__ import annotations

import csv
import logging
from pathlib import Path

import pandas as pd

from .assembly import AddressBook

logger = logging.getLogger(__name__)

LINEAGE_COLUMNS = ["address", "raw_address", "source_file", "contract_type", "alias_of"]


def lineage_frame(book: AddressBook) -> pd.DataFrame:
    """One row per address book key, recording where it came from."""
    rows = [entry.to_dict() for entry in book.lineage]
    return pd.DataFrame(rows, columns=LINEAGE_COLUMNS)


def write_lineage(book: AddressBook, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lineage_frame(book).to_csv(str(path), index=False, encoding="utf-8", quoting=csv.QUOTE_ALL)
    logger.info("Saved: %s", path)
    return path
