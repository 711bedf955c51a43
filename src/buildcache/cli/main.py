import argparse
import logging
import os
import shutil
import sys
from pathlib import Path

from ..config.loader import create_store, load_config
from ..config.schema import AppConfig
from ..hashing.hash_code import HashCode
from ..logging_conf import resolve_log_level, setup_logging
from ..store.errors import HashFileStoreError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="buildcache", description="Content-addressed build cache store")
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    parser.add_argument("--base-dir", default=None, help="Store directory (overrides config)")
    parser.add_argument("--log-level", default=None, help="Log level (default: from config or LOG_LEVEL env)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    put_parser = subparsers.add_parser("put", help="Store a copy of a file under a hash")
    put_parser.add_argument("hash", help="Hex encoded hash key")
    put_parser.add_argument("source", help="File whose content is stored")

    get_parser = subparsers.add_parser("get", help="Print the path of a stored entry")
    get_parser.add_argument("hash", help="Hex encoded hash key")

    path_parser = subparsers.add_parser("path", help="Print where an entry would be stored")
    path_parser.add_argument("hash", help="Hex encoded hash key")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else AppConfig()
        log_level = resolve_log_level(args.log_level or os.environ.get("LOG_LEVEL") or config.log_level)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.base_dir:
        config.store.base_dir = Path(args.base_dir).resolve()

    setup_logging(log_level=log_level, log_file=config.log_file)

    try:
        key = HashCode.from_hex(args.hash)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        store = create_store(config.store)
        if args.command == "put":
            return _cmd_put(store, key, Path(args.source))
        elif args.command == "get":
            return _cmd_get(store, key)
        elif args.command == "path":
            print(store.entry_path(key))
            return 0
    except (HashFileStoreError, OSError) as e:
        logger.error(f"{args.command} {key} failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 1


def _cmd_put(store, key: HashCode, source: Path) -> int:
    if not source.is_file():
        print(f"error: {source} is not a file", file=sys.stderr)
        return 1

    def copy_source(destination: Path):
        shutil.copyfile(source, destination)

    print(store.put(key, copy_source))
    return 0


def _cmd_get(store, key: HashCode) -> int:
    path = store.get(key)
    if path is None:
        logger.info(f"No entry for {key}")
        return 1
    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
