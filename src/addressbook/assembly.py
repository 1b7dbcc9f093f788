from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .addresses import alias_address, canonical_address, dedup_key, parse_address
from .common import ensure_source_entry
from .errors import DuplicateAddressError
from .models import AddressBookEntry, LineageEntry, SourceEntry
from .validation import validate_entry

logger = logging.getLogger(__name__)


class AddressBook:
    """
    Ordered mapping of friendly address -> ``AddressBookEntry``.

    Owns the registry of raw addresses already defined and the file that
    defined each, so a fresh instance is a fresh build.
    """

    def __init__(self, scam_file: str = "scam.yaml"):
        self.scam_file = scam_file
        self.entries: "OrderedDict[str, AddressBookEntry]" = OrderedDict()
        self.defined_in: Dict[str, str] = {}
        self.lineage: List[LineageEntry] = []

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, address: object) -> bool:
        return address in self.entries

    def __getitem__(self, address: str) -> AddressBookEntry:
        return self.entries[address]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def items(self) -> Iterable[Tuple[str, AddressBookEntry]]:
        return self.entries.items()

    def _metadata_for(self, entry: SourceEntry) -> AddressBookEntry:
        is_scam = entry.filename == self.scam_file or entry.is_scam is True
        return AddressBookEntry(
            name=entry.name,
            ton_icon=entry.ton_icon,
            is_scam=is_scam,
        )

    def add(self, entry: SourceEntry) -> str:
        """
        Insert a validated entry under its canonical friendly address and return that key.

        Raises ``DuplicateAddressError`` when the raw address was already defined,
        in this file or an earlier one.
        """
        address = parse_address(entry.address, entry.filename)
        raw = dedup_key(address)
        canonical = canonical_address(address, entry.contract_type)

        first_filename = self.defined_in.get(raw)
        if first_filename is not None:
            raise DuplicateAddressError(entry.filename, canonical, first_filename)

        self.defined_in[raw] = entry.filename
        self.entries[canonical] = self._metadata_for(entry)
        self.lineage.append(
            LineageEntry(
                address=canonical,
                raw_address=raw,
                source_file=entry.filename,
                contract_type=entry.contract_type or "",
            )
        )
        return canonical


def alias_wallet(book: AddressBook, entry: SourceEntry, primary: str) -> Optional[str]:
    """
    Register a wallet's metadata under its bounceable spelling as well.

    Older clients look wallets up by the bounceable form, so the same record is
    shared under both spellings. This bypasses the duplicate registry: the
    primary insert has already claimed the raw address.
    """
    if not entry.is_wallet:
        return None
    address = parse_address(entry.address, entry.filename)
    alias = alias_address(address, entry.contract_type)
    book.entries[alias] = book.entries[primary]
    book.lineage.append(
        LineageEntry(
            address=alias,
            raw_address=dedup_key(address),
            source_file=entry.filename,
            contract_type=entry.contract_type or "",
            alias_of=primary,
        )
    )
    logger.debug("Aliased wallet %s as %s", primary, alias)
    return alias


def assemble(
    entries: Iterable[Any], scam_file: str = "scam.yaml", alias_wallets: bool = True
) -> AddressBook:
    """Validate, deduplicate and insert ``entries`` in order into a new ``AddressBook``."""
    book = AddressBook(scam_file=scam_file)
    for item in entries:
        entry = ensure_source_entry(item)
        validate_entry(entry, scam_file=scam_file)
        primary = book.add(entry)
        if alias_wallets:
            alias_wallet(book, entry, primary)
    logger.info(
        "Assembled %d address(es) from %d source file(s)",
        len(book),
        len(set(book.defined_in.values())),
    )
    return book
