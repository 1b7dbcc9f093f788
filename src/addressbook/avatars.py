from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image, ImageOps

from .addresses import avatar_variants
from .config_loader import AvatarsConfig
from .errors import AddressBookError

logger = logging.getLogger(__name__)

PIL_FORMATS = {"jpg": "JPEG", "jpeg": "JPEG", "png": "PNG", "webp": "WEBP"}


@dataclass
class AvatarReport:
    processed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    superseded: List[str] = field(default_factory=list)
    outputs: List[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.processed) + len(self.failed) + len(self.superseded)


def list_avatar_files(directory: Path, extensions: List[str]) -> List[Path]:
    """Whitelisted image files in ``directory``; empty when the directory is missing."""
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Avatars directory %s does not exist, skipping avatar generation", directory)
        return []
    allowed = {ext.lower() for ext in extensions}
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix.lower() in allowed
    )


def output_name(variant: str, size: int, fmt: str) -> str:
    return f"{variant}_{size}.{fmt}"


def render_avatar(image: Image.Image, size: int, fmt: str) -> Image.Image:
    """Cover-fit ``image`` into a centered ``size`` x ``size`` square ready to encode as ``fmt``."""
    image = ImageOps.exif_transpose(image)
    has_alpha = image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info)
    if PIL_FORMATS.get(fmt) == "JPEG" or not has_alpha:
        image = image.convert("RGB")
    else:
        image = image.convert("RGBA")
    return ImageOps.fit(image, (size, size), Image.Resampling.LANCZOS, centering=(0.5, 0.5))


def process_avatar(path: Path, config: AvatarsConfig) -> List[Path]:
    """Write one resized image per address spelling of ``path``'s stem. Raises on any failure."""
    variants = avatar_variants(path.stem, path.name)
    pil_format = PIL_FORMATS.get(config.format, config.format.upper())
    with Image.open(path) as source:
        source.load()
        squared = render_avatar(source, config.size, config.format)

    written: List[Path] = []
    for _, spelling in variants.items():
        target = config.out_dir / output_name(spelling, config.size, config.format)
        squared.save(target, format=pil_format, quality=config.quality)
        written.append(target)
    return written


def _process_isolated(path: Path, config: AvatarsConfig) -> Optional[List[Path]]:
    try:
        return process_avatar(path, config)
    except Exception as exc:  # Pillow plugins raise SyntaxError, struct.error and others on bad data
        logger.warning("Skipping avatar %s: %s", path.name, exc)
        return None


def _select_by_address(files: List[Path], report: AvatarReport) -> List[Path]:
    """
    Keep one file per address. Stems that spell the same address would write the same
    outputs, so the last one in sorted order wins and the rest are reported as superseded.
    """
    chosen: Dict[str, Path] = {}
    for path in files:
        try:
            raw = avatar_variants(path.stem, path.name).raw
        except AddressBookError as exc:
            logger.warning("Skipping avatar %s: %s", path.name, exc)
            report.failed.append(path.name)
            continue
        previous = chosen.get(raw)
        if previous is not None:
            logger.warning(
                "Avatar %s supersedes %s, both name address %s", path.name, previous.name, raw
            )
            report.superseded.append(previous.name)
        chosen[raw] = path
    return sorted(chosen.values())


def generate_avatars(config: AvatarsConfig) -> AvatarReport:
    """
    Produce square variants for every avatar in ``config.dir``.

    Files are independent, so they are processed on a bounded thread pool.
    A file that fails is logged and skipped; this pass never raises for bad input.
    """
    report = AvatarReport()
    files = _select_by_address(list_avatar_files(config.dir, config.extensions), report)
    if not files:
        report.failed.sort()
        return report

    config.out_dir.mkdir(parents=True, exist_ok=True)

    with ThreadPoolExecutor(max_workers=max(1, min(config.workers, len(files)))) as executor:
        future_to_path = {executor.submit(_process_isolated, path, config): path for path in files}
        for future in as_completed(future_to_path):
            path = future_to_path[future]
            written = future.result()
            if written is None:
                report.failed.append(path.name)
                continue
            report.processed.append(path.name)
            report.outputs.extend(written)

    report.processed.sort()
    report.failed.sort()
    report.superseded.sort()
    logger.info(
        "Generated %d avatar image(s) from %d file(s), %d skipped, %d superseded",
        len(report.outputs),
        len(report.processed),
        len(report.failed),
        len(report.superseded),
    )
    return report
