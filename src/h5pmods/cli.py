#!/usr/bin/env python3
"""
CLI: Inspect and alter H5P semantics.json files

Usage:
    python -m h5pmods.cli find semantics.json --path answers/answer/text
    python -m h5pmods.cli find semantics.json --name correct
    python -m h5pmods.cli alter semantics.json --library H5P.Collage --major 0 --minor 3
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .config import ModsConfig
from .hooks import H5PHook, HookRegistry, register_mods
from .semantics import dump_semantics, find_semantics_field, find_semantics_path, load_semantics

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2


def read_semantics(path: Path) -> Any:
    """Load and validate a semantics.json file"""
    with open(path, "r", encoding="utf-8") as f:
        return load_semantics(json.load(f))


def cmd_find(args: argparse.Namespace) -> int:
    tree = read_semantics(Path(args.semantics))

    if args.path is not None:
        node = find_semantics_path(args.path, tree)
        query = f"path '{args.path}'"
    else:
        node = find_semantics_field(args.name, tree)
        query = f"name '{args.name}'"

    if node is None:
        logger.error(f"No field found for {query}")
        return EXIT_NOT_FOUND

    print(json.dumps(dump_semantics(node), ensure_ascii=False, indent=2))
    return EXIT_OK


def cmd_alter(args: argparse.Namespace) -> int:
    tree = read_semantics(Path(args.semantics))

    registry = register_mods(HookRegistry(), ModsConfig.from_env())
    registry.do_action(H5PHook.ALTER_LIBRARY_SEMANTICS, tree, args.library, args.major, args.minor)

    output = json.dumps(dump_semantics(tree), ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info(f"Altered semantics saved: {args.output}")
    else:
        print(output)
    return EXIT_OK


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Inspect and alter H5P library semantics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # find
    find_parser = subparsers.add_parser("find", help="Print a single field")
    find_parser.add_argument("semantics", help="Path to semantics.json")
    query_group = find_parser.add_mutually_exclusive_group(required=True)
    query_group.add_argument("--path", "-p", help="Slash separated field path, e.g. behaviour/enableRetry")
    query_group.add_argument("--name", "-n", help="Field name anywhere in the tree")
    find_parser.set_defaults(func=cmd_find)

    # alter
    alter_parser = subparsers.add_parser("alter", help="Run the semantics mods on a file")
    alter_parser.add_argument("semantics", help="Path to semantics.json")
    alter_parser.add_argument("--library", "-l", required=True, help="Machine name, e.g. H5P.Collage")
    alter_parser.add_argument("--major", type=int, required=True, help="Major version")
    alter_parser.add_argument("--minor", type=int, required=True, help="Minor version")
    alter_parser.add_argument("--output", "-o", help="Write to file instead of stdout")
    alter_parser.set_defaults(func=cmd_alter)

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.func(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        return EXIT_INVALID
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON: {e}")
        return EXIT_INVALID
    except ValidationError as e:
        logger.error(f"Invalid semantics: {e}")
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
