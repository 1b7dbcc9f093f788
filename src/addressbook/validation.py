from __future__ import annotations

from .addresses import parse_address
from .errors import EntryValidationError
from .models import CONTRACT_TYPES, SourceEntry

MIN_NAME_LENGTH = 3


def validate_entry(entry: SourceEntry, scam_file: str = "scam.yaml") -> SourceEntry:
    """
    Check one parsed entry and return it unchanged when valid.

    Rules run in order and the first failure raises:

    1. ``address`` parses under the address codec.
    2. Outside ``scam_file``, ``name`` is a string of at least three characters;
       inside it, ``name`` may be omitted but must otherwise be a string.
    3. ``type``, when present, is one of ``CONTRACT_TYPES``.
    4. ``isScam``, when present, is a boolean and ``tonIcon``, when present, a string.
    """
    parse_address(entry.address, entry.filename)

    name = entry.name
    if entry.filename != scam_file:
        if not isinstance(name, str) or len(name) < MIN_NAME_LENGTH:
            raise EntryValidationError(
                entry.filename,
                "name",
                name,
                f"Name for {entry.address} must be at least {MIN_NAME_LENGTH} symbols length, "
                f"given name: {name}",
            )
    elif name is not None and not isinstance(name, str):
        raise EntryValidationError(
            entry.filename, "name", name, f"Name for {entry.address} must be a string, given: {name!r}"
        )

    if entry.contract_type is not None and entry.contract_type not in CONTRACT_TYPES:
        raise EntryValidationError(
            entry.filename,
            "type",
            entry.contract_type,
            f"Contract type for {entry.address} must be either undefined or one of: "
            f"{', '.join(CONTRACT_TYPES)}, given: {entry.contract_type}",
        )

    if entry.is_scam is not None and not isinstance(entry.is_scam, bool):
        raise EntryValidationError(
            entry.filename,
            "isScam",
            entry.is_scam,
            f"isScam for {entry.address} must be true or false, given: {entry.is_scam!r}",
        )

    if entry.ton_icon is not None and not isinstance(entry.ton_icon, str):
        raise EntryValidationError(
            entry.filename,
            "tonIcon",
            entry.ton_icon,
            f"tonIcon for {entry.address} must be a string, given: {entry.ton_icon!r}",
        )

    return entry
