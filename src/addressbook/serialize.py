from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from .assembly import AddressBook

logger = logging.getLogger(__name__)


def addressbook_to_dict(book: AddressBook) -> Dict[str, Dict[str, Any]]:
    return {address: entry.to_dict() for address, entry in book.items()}


def write_addressbook(book: AddressBook, path: Path) -> int:
    """Write ``book`` as indented JSON, replacing ``path`` in one step. Returns the entry count."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(addressbook_to_dict(book), indent=2, ensure_ascii=False) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Saved: %s", path)
    return len(book)
