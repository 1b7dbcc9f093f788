from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .assembly import AddressBook, assemble
from .avatars import generate_avatars
from .common import load_config
from .config_loader import PipelineConfig
from .errors import AddressBookError
from .lineage import write_lineage
from .loader import iter_source_entries
from .logging_utils import configure_logging
from .serialize import write_addressbook

# use module logger instead of configuring logging at import time
logger = logging.getLogger(__name__)

MODE_BUILD = "build"
MODE_VALIDATE = "validate"


def build(args: argparse.Namespace, config: Optional[PipelineConfig] = None) -> AddressBook:
    """Load, validate and assemble the address book. Writes nothing."""
    config = config or load_config(args)
    entries = iter_source_entries(
        config.sources.dir, config.sources.suffix, max_workers=config.sources.read_workers
    )
    return assemble(entries, scam_file=config.sources.scam_file, alias_wallets=config.alias_wallets)


def save(args: argparse.Namespace, config: Optional[PipelineConfig] = None) -> AddressBook:
    """Build the address book, then write it, its lineage report and the avatar variants."""
    config = config or load_config(args)
    book = build(args, config=config)
    write_addressbook(book, config.outputs.addressbook_path)
    write_lineage(book, config.outputs.lineage_path)
    generate_avatars(config.avatars)
    return book


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate address book sources, or build addresses.json and avatars."
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=[MODE_VALIDATE, MODE_BUILD],
        default=MODE_VALIDATE,
        help="'validate' (default) only checks sources; 'build' also writes outputs.",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config.")
    parser.add_argument("--source-dir", type=str, default=None)
    parser.add_argument("--out-dir", type=str, default=None)
    parser.add_argument("--avatars-dir", type=str, default=None)
    parser.add_argument("--avatars-out-dir", type=str, default=None)
    parser.add_argument("--avatar-workers", type=int, default=None)
    parser.add_argument("--log-level", type=str, default=None, help="Override logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    config = load_config(args)
    configure_logging(config, level_override=args.log_level)

    try:
        if args.mode == MODE_BUILD:
            book = save(args, config=config)
            print(f"Successfully created addressbook with {len(book)} addresses")
        else:
            book = build(args, config=config)
            print(f"Success: all yaml files are valid, checked {len(book)} addresses")
    except AddressBookError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
