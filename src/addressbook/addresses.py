from __future__ import annotations

from typing import Any, Optional, Union

from tonsdk.utils import Address

from .errors import InvalidAddressError
from .models import WALLET, AvatarVariantSet

HASH_LENGTH = 32

AddressLike = Union[Address, str]


def parse_address(value: Any, filename: str = "<unknown>") -> Address:
    """
    Parse any accepted spelling (raw ``wc:hex`` or friendly base64) into an ``Address``.

    Raises ``InvalidAddressError`` naming ``filename`` when the codec rejects the value,
    when it carries surrounding whitespace, or when it does not hold a full 32-byte hash.
    """
    if not isinstance(value, str) or not value or value != value.strip():
        raise InvalidAddressError(filename, value)
    try:
        address = Address(value)
        if len(address.hash_part) != HASH_LENGTH:
            raise InvalidAddressError(filename, value, f"hash must be {HASH_LENGTH} bytes")
        # the friendly encoder is stricter than the parser; fail here rather than downstream
        address.to_string(True, True, True, False)
    except InvalidAddressError:
        raise
    except Exception as exc:  # codec raises a mix of its own errors, ValueError and binascii.Error
        raise InvalidAddressError(filename, value, str(exc) or None) from exc
    return address


def _coerce(value: AddressLike, filename: str) -> Address:
    if isinstance(value, Address):
        return value
    return parse_address(value, filename)


def to_raw(address: Address) -> str:
    return address.to_string(False)


def to_friendly(address: Address, bounceable: bool) -> str:
    return address.to_string(True, True, bounceable, False)


def dedup_key(value: AddressLike, filename: str = "<unknown>") -> str:
    return to_raw(_coerce(value, filename))


def canonical_address(
    value: AddressLike, contract_type: Optional[str] = None, filename: str = "<unknown>"
) -> str:
    # wallets are displayed non-bounceable, every other contract bounceable
    return to_friendly(_coerce(value, filename), bounceable=contract_type != WALLET)


def alias_address(
    value: AddressLike, contract_type: Optional[str] = None, filename: str = "<unknown>"
) -> str:
    """Friendly spelling with the bounceable flag opposite to ``canonical_address``."""
    return to_friendly(_coerce(value, filename), bounceable=contract_type == WALLET)


def avatar_variants(value: AddressLike, filename: str = "<unknown>") -> AvatarVariantSet:
    address = _coerce(value, filename)
    return AvatarVariantSet(
        raw=to_raw(address),
        bounceable=to_friendly(address, bounceable=True),
        non_bounceable=to_friendly(address, bounceable=False),
    )
