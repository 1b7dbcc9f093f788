from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml  # type: ignore[import-untyped]

DEFAULT_AVATAR_EXTENSIONS = [".png", ".jpg", ".jpeg", ".webp", ".gif"]


@dataclass
class SourcesConfig:
    dir: Path = Path("source")
    suffix: str = ".yaml"
    scam_file: str = "scam.yaml"
    read_workers: int = 8


@dataclass
class OutputsConfig:
    dir: Path = Path("build")
    addressbook_json: str = "addresses.json"
    lineage_csv: str = "addresses_lineage.csv"

    @property
    def addressbook_path(self) -> Path:
        return self.dir / self.addressbook_json

    @property
    def lineage_path(self) -> Path:
        return self.dir / self.lineage_csv


@dataclass
class AvatarsConfig:
    dir: Path = Path("source") / "avatars"
    out_dir: Path = Path("build") / "avatars"
    size: int = 200
    quality: int = 85
    format: str = "webp"
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_AVATAR_EXTENSIONS))
    workers: int = 4


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class PipelineConfig:
    sources: SourcesConfig
    outputs: OutputsConfig
    avatars: AvatarsConfig
    logging: LoggingConfig
    alias_wallets: bool = True


def _load_yaml(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _normalize_extensions(values: Optional[List[str]]) -> List[str]:
    if not values:
        return list(DEFAULT_AVATAR_EXTENSIONS)
    normalized = []
    for value in values:
        ext = str(value).strip().lower()
        if ext and not ext.startswith("."):
            ext = f".{ext}"
        if ext:
            normalized.append(ext)
    return normalized


def load_pipeline_config(args: argparse.Namespace) -> PipelineConfig:
    config_data = _load_yaml(getattr(args, "config", None))
    sources_cfg = config_data.get("sources", {}) or {}
    outputs_cfg = config_data.get("outputs", {}) or {}
    avatars_cfg = config_data.get("avatars", {}) or {}
    logging_cfg = config_data.get("logging", {}) or {}

    sources = SourcesConfig(
        dir=Path(getattr(args, "source_dir", None) or sources_cfg.get("dir") or "source"),
        suffix=sources_cfg.get("suffix", ".yaml"),
        scam_file=sources_cfg.get("scam_file", "scam.yaml"),
        read_workers=int(sources_cfg.get("read_workers", 8)),
    )

    outputs = OutputsConfig(
        dir=Path(getattr(args, "out_dir", None) or outputs_cfg.get("dir") or "build"),
        addressbook_json=outputs_cfg.get("addressbook_json", "addresses.json"),
        lineage_csv=outputs_cfg.get("lineage_csv", "addresses_lineage.csv"),
    )

    avatars = AvatarsConfig(
        dir=Path(
            getattr(args, "avatars_dir", None)
            or avatars_cfg.get("dir")
            or sources.dir / "avatars"
        ),
        out_dir=Path(
            getattr(args, "avatars_out_dir", None)
            or avatars_cfg.get("out_dir")
            or outputs.dir / "avatars"
        ),
        size=int(avatars_cfg.get("size", 200)),
        quality=int(avatars_cfg.get("quality", 85)),
        format=str(avatars_cfg.get("format", "webp")).lower(),
        extensions=_normalize_extensions(avatars_cfg.get("extensions")),
        workers=int(getattr(args, "avatar_workers", None) or avatars_cfg.get("workers", 4)),
    )

    arg_level = getattr(args, "log_level", None)
    effective_level = (arg_level or logging_cfg.get("level") or "WARNING").upper()
    logging_config = LoggingConfig(level=effective_level)

    alias_wallets = config_data.get("alias_wallets", True)

    return PipelineConfig(
        sources=sources,
        outputs=outputs,
        avatars=avatars,
        logging=logging_config,
        alias_wallets=bool(alias_wallets),
    )
