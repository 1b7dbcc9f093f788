from pathlib import Path
from typing import Dict

import pytest

from addressbook.addresses import parse_address, to_friendly

RAW_A = "0:" + "ab" * 32
RAW_B = "0:" + "cd" * 32
RAW_C = "-1:" + "ef" * 32


def friendly(raw: str, bounceable: bool) -> str:
    return to_friendly(parse_address(raw), bounceable=bounceable)


def write_sources(directory: Path, files: Dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def source_dir(tmp_path):
    return tmp_path / "source"


def corrupt_png(path: Path) -> Path:
    """Flip the IHDR checksum of an existing PNG so Pillow rejects it with a SyntaxError."""
    data = bytearray(path.read_bytes())
    # 8-byte signature, then IHDR: length(4) type(4) data(13) crc(4)
    crc_offset = 8 + 4 + 4 + 13
    data[crc_offset] ^= 0xFF
    path.write_bytes(bytes(data))
    return path
