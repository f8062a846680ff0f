#!/usr/bin/env python3
"""
Command-line interface for the Drive image registry.

Usage:
    drive-images add <raw> [--title TITLE]
    drive-images import [FILE]
    drive-images get <key>
    drive-images delete <key>
    drive-images list
    drive-images normalize <raw>
"""

import argparse
import json
import sys
from typing import List, Optional

from config import load_config
from .exceptions import DriveImagesError
from .normalizer import normalize, extract_file_id
from .registry import ImageRegistry, build_registry
from .common.logging_config import setup_logging


def _emit(payload: dict, error: bool = False) -> int:
    print(json.dumps(payload, indent=2, ensure_ascii=False), file=sys.stderr if error else sys.stdout)
    return 1 if error else 0


def _fail(message: str) -> int:
    return _emit({"success": False, "error": message}, error=True)


class DriveImagesCLI:
    """Command-line interface for the image registry."""

    def __init__(self, registry: ImageRegistry):
        self.registry = registry

    def add(self, raw: str, title: Optional[str] = None) -> int:
        """Register a single image."""
        try:
            key = self.registry.add(raw, title=title)
        except DriveImagesError as e:
            return _fail(e.message)

        record = self.registry.get(key)
        return _emit({
            "success": True,
            **record.to_public_dict(),
            "message": f"Image added with key: {key}",
        })

    def import_lines(self, text: str) -> int:
        """Register one image per line."""
        try:
            inserted = self.registry.bulk_import(text)
        except DriveImagesError as e:
            return _fail(e.message)

        return _emit({"success": True, "inserted": inserted})

    def get(self, key: str) -> int:
        """Show a registered image."""
        record = self.registry.get(key)
        if record is None:
            return _fail(f"Image '{key}' not found")
        return _emit({"success": True, **record.to_public_dict()})

    def delete(self, key: str) -> int:
        """Delete a registered image."""
        if not self.registry.delete(key):
            return _fail(f"Image '{key}' not found")
        return _emit({"success": True, "key": key, "deleted": True})

    def list_images(self) -> int:
        """List registered images in insertion order."""
        images = [record.to_public_dict() for record in self.registry.list()]
        return _emit({"success": True, "count": len(images), "images": images})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drive-images",
        description="Google Drive image registry CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Register a share link
  %(prog)s add https://drive.google.com/file/d/FILEID/view --title Sunset

  # Import links or file IDs, one per line
  %(prog)s import links.txt
  cat links.txt | %(prog)s import

  # Preview the direct URL without storing anything
  %(prog)s normalize FILEID1234567
        """
    )

    parser.add_argument(
        "--storage-path",
        help="JSON registry file (default: from GDRIVE_IMAGES_STORAGE_PATH or data/gdrive_images.json)"
    )

    parser.add_argument(
        "--redis-url",
        help="Redis connection URL (default: from GDRIVE_IMAGES_REDIS_URL)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    add_parser = subparsers.add_parser("add", help="Register an image")
    add_parser.add_argument("raw", help="Drive share URL or file ID")
    add_parser.add_argument("--title", help="Friendly title (also used for the key)")

    import_parser = subparsers.add_parser("import", help="Register one image per line")
    import_parser.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="File with one share URL or file ID per line (default: stdin)"
    )

    get_parser = subparsers.add_parser("get", help="Show a registered image")
    get_parser.add_argument("key", help="Image key")

    delete_parser = subparsers.add_parser("delete", help="Delete a registered image")
    delete_parser.add_argument("key", help="Image key")

    subparsers.add_parser("list", help="List registered images")

    normalize_parser = subparsers.add_parser("normalize", help="Show the direct URL for an input")
    normalize_parser.add_argument("raw", help="Drive share URL or file ID")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "normalize":
        return _emit({
            "success": True,
            "raw": args.raw,
            "url": normalize(args.raw),
            "file_id": extract_file_id(args.raw),
        })

    overrides = {}
    if args.storage_path:
        overrides["storage_path"] = args.storage_path
    if args.redis_url:
        overrides["redis_url"] = args.redis_url
    config = load_config(**overrides)

    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")
    registry = build_registry(config, logger=logger)
    cli = DriveImagesCLI(registry)

    try:
        if args.command == "add":
            return cli.add(args.raw, args.title)
        elif args.command == "import":
            return cli.import_lines(args.file.read())
        elif args.command == "get":
            return cli.get(args.key)
        elif args.command == "delete":
            return cli.delete(args.key)
        elif args.command == "list":
            return cli.list_images()
        else:
            parser.print_help()
            return 1
    finally:
        registry.close()


if __name__ == "__main__":
    sys.exit(main())
