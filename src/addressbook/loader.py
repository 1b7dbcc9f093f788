from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterator, List, Tuple

import yaml  # type: ignore[import-untyped]

from .errors import EntryValidationError, SourceFileError
from .models import SourceEntry

logger = logging.getLogger(__name__)


def list_source_files(directory: Path, suffix: str = ".yaml") -> List[str]:
    """Names of eligible source files in ``directory``, in sorted listing order."""
    directory = Path(directory)
    if not directory.is_dir():
        raise SourceFileError(str(directory), "Source directory does not exist")
    return sorted(
        entry.name for entry in directory.iterdir() if entry.is_file() and entry.name.endswith(suffix)
    )


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceFileError(path.name, f"Unable to read source file: {exc}") from exc


def read_sources(
    directory: Path, suffix: str = ".yaml", max_workers: int = 8
) -> List[Tuple[str, str]]:
    """
    Read every eligible file and return ``(filename, text)`` pairs.

    All reads are submitted up front; results are collected in listing order,
    so a failure is always attributed to the first failing file in that order
    regardless of which read finishes first.
    """
    directory = Path(directory)
    filenames = list_source_files(directory, suffix)
    if not filenames:
        return []

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(filenames)))) as executor:
        pending: List[Tuple[str, Future]] = [
            (filename, executor.submit(_read_text, directory / filename)) for filename in filenames
        ]
        results = [(filename, future.result()) for filename, future in pending]

    logger.info("Read %d source file(s) from %s", len(results), directory)
    return results


def _flatten_document(filename: str, document: Any) -> Iterator[dict]:
    if document is None:
        return
    if isinstance(document, dict):
        yield document
        return
    if isinstance(document, list):
        for item in document:
            if not isinstance(item, dict):
                raise EntryValidationError(
                    filename, "document", item, f"Expected a mapping entry, got: {item!r}"
                )
            yield item
        return
    raise EntryValidationError(
        filename, "document", document, f"Expected a mapping or a list of mappings, got: {document!r}"
    )


def parse_documents(filename: str, text: str) -> List[SourceEntry]:
    """Parse every YAML document in ``text`` into ``SourceEntry`` objects, in document order."""
    try:
        documents = list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        raise SourceFileError(filename, f"Unable to parse YAML: {exc}") from exc

    entries: List[SourceEntry] = []
    for document in documents:
        for payload in _flatten_document(filename, document):
            entries.append(SourceEntry.from_mapping(filename, payload))
    logger.debug("Parsed %d entr(ies) from %s", len(entries), filename)
    return entries


def iter_source_entries(
    directory: Path, suffix: str = ".yaml", max_workers: int = 8
) -> Iterator[SourceEntry]:
    for filename, text in read_sources(directory, suffix, max_workers=max_workers):
        yield from parse_documents(filename, text)
