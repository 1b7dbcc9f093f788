from __future__ import annotations

from typing import Any, Optional


class AddressBookError(ValueError):
    """Base class for fatal build errors; always names the offending source file."""

    def __init__(self, filename: str, message: str):
        self.filename = filename
        super().__init__(f"[{filename}] {message}")


class SourceFileError(AddressBookError):
    pass


class EntryValidationError(AddressBookError):
    def __init__(self, filename: str, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(filename, message)


class InvalidAddressError(EntryValidationError):
    def __init__(self, filename: str, value: Any, reason: Optional[str] = None):
        message = f"Invalid address: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(filename, "address", value, message)


class DuplicateAddressError(AddressBookError):
    def __init__(self, filename: str, address: str, first_filename: str):
        self.address = address
        self.first_filename = first_filename
        super().__init__(filename, f"Address {address} is already defined in {first_filename}")
