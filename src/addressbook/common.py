from __future__ import annotations

from typing import Any

from .addresses import (
    alias_address,
    avatar_variants,
    canonical_address,
    dedup_key,
    parse_address,
    to_friendly,
    to_raw,
)
from .config_loader import PipelineConfig, load_pipeline_config
from .errors import (
    AddressBookError,
    DuplicateAddressError,
    EntryValidationError,
    InvalidAddressError,
    SourceFileError,
)
from .models import (
    CONTRACT_TYPES,
    WALLET,
    AddressBookEntry,
    AvatarVariantSet,
    LineageEntry,
    SourceEntry,
)

__all__ = [
    "AddressBookEntry",
    "AddressBookError",
    "AvatarVariantSet",
    "CONTRACT_TYPES",
    "DuplicateAddressError",
    "EntryValidationError",
    "InvalidAddressError",
    "LineageEntry",
    "PipelineConfig",
    "SourceEntry",
    "SourceFileError",
    "WALLET",
    "alias_address",
    "avatar_variants",
    "canonical_address",
    "dedup_key",
    "ensure_source_entry",
    "load_config",
    "load_pipeline_config",
    "parse_address",
    "to_friendly",
    "to_raw",
]


def load_config(args: Any) -> PipelineConfig:
    return load_pipeline_config(args)


def ensure_source_entry(obj: Any, filename: str = "<memory>") -> SourceEntry:
    if isinstance(obj, SourceEntry):
        return obj
    if isinstance(obj, dict):
        return SourceEntry.from_mapping(filename, obj)
    raise TypeError(f"Unsupported entry payload type: {type(obj)!r}")
