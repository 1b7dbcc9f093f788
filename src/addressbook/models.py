from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

WALLET = "wallet"
CONTRACT_TYPES: Tuple[str, ...] = (WALLET, "nft_collection", "jetton", "pool")


@dataclass(frozen=True)
class SourceEntry:
    """One raw document from a source file, tagged with the file it came from."""

    filename: str
    address: Any = None
    name: Any = None
    ton_icon: Any = None
    is_scam: Any = None
    contract_type: Any = None

    @staticmethod
    def from_mapping(filename: str, payload: Dict[str, Any]) -> "SourceEntry":
        return SourceEntry(
            filename=filename,
            address=payload.get("address"),
            name=payload.get("name"),
            ton_icon=payload.get("tonIcon"),
            is_scam=payload.get("isScam"),
            contract_type=payload.get("type"),
        )

    @property
    def is_wallet(self) -> bool:
        return self.contract_type == WALLET


@dataclass(frozen=True)
class AddressBookEntry:
    name: Optional[str] = None
    ton_icon: Optional[str] = None
    is_scam: bool = False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.name is not None:
            payload["name"] = self.name
        if self.ton_icon is not None:
            payload["tonIcon"] = self.ton_icon
        payload["isScam"] = self.is_scam
        return payload


@dataclass(frozen=True)
class LineageEntry:
    address: str
    raw_address: str
    source_file: str
    contract_type: str
    alias_of: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "address": self.address,
            "raw_address": self.raw_address,
            "source_file": self.source_file,
            "contract_type": self.contract_type,
            "alias_of": self.alias_of,
        }


@dataclass(frozen=True)
class AvatarVariantSet:
    raw: str
    bounceable: str
    non_bounceable: str

    def items(self) -> Iterator[Tuple[str, str]]:
        yield "raw", self.raw
        yield "bounceable", self.bounceable
        yield "nonBounceable", self.non_bounceable
