"""Main module for the batch uploader CLI."""

import sys
import json
import asyncio
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import settings
from .core import ImageItem, ResultItem, UploadConfig, UploaderError, get_logger
from .core.factories import LoggerAdapter, UploaderFactory
from .core.transport import HttpxTransport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batch-uploader",
        description="Batch Uploader - concurrent image uploads with ordered results",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Upload local files to the default endpoint
  batch-uploader upload shot1.png shot2.jpg

  # Re-host remote images, reading the URL from a custom JSON field
  batch-uploader upload --source-url https://example.com/a.png \\
                        --endpoint-url "https://img.example.com/upload?name=" \\
                        --response-path result.link

  # Show version
  batch-uploader version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    upload_parser = subparsers.add_parser("upload", help="Upload images and print their URLs")
    upload_parser.add_argument("files", nargs="*", type=Path, help="Local image files")
    upload_parser.add_argument(
        "--source-url",
        action="append",
        default=[],
        help="Remote image to download and upload (repeatable)",
    )
    upload_parser.add_argument(
        "--endpoint-url", default=None, help=f"Upload endpoint (default: {settings.endpoint_url})"
    )
    upload_parser.add_argument(
        "--response-path",
        default=None,
        help=f"Dotted JSON path of the URL in the response; '' uses the raw body (default: {settings.response_path})",
    )
    upload_parser.add_argument(
        "--timeout-millis",
        type=int,
        default=None,
        help=f"Per-request timeout in milliseconds (default: {settings.timeout_millis})",
    )
    upload_parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers.add_parser("version", help="Show version information")
    return parser


def collect_items(files: List[Path], source_urls: List[str]) -> List[ImageItem]:
    """Build upload items: local files first, then remote sources, in argument order."""
    items = [ImageItem(binary_data=path.read_bytes(), file_name=path.name, path=str(path)) for path in files]
    for url in source_urls:
        file_name = url.rstrip("/").rsplit("/", 1)[-1].split("?", 1)[0] or "image"
        items.append(ImageItem(source_url=url, file_name=file_name))
    return items


async def run_upload(items: List[ImageItem], config: UploadConfig) -> List[ResultItem]:
    logger = LoggerAdapter(get_logger("cli"))
    async with HttpxTransport(default_timeout_millis=config.timeout_millis) as transport:
        orchestrator = UploaderFactory.create_orchestrator(transport=transport, logger=logger)
        return await orchestrator.run(items, config)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the command-line interface (CLI) of the Batch Uploader.

    ``upload`` prints one JSON object per input item, in input order, and
    exits with status 1 when any item failed or the batch itself failed.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "upload":
        logger = get_logger("cli")
        if args.debug:
            logger.setLevel(logging.DEBUG)
            logging.getLogger("batch-uploader").setLevel(logging.DEBUG)

        if not args.files and not args.source_url:
            parser.error("upload needs at least one file or --source-url")

        try:
            config = settings.upload_config(
                endpoint_url=args.endpoint_url,
                response_path=args.response_path,
                timeout_millis=args.timeout_millis,
            )
            items = collect_items(args.files, args.source_url)
            results = asyncio.run(run_upload(items, config))
        except (UploaderError, OSError) as e:
            logger.error(f"Upload failed: {e}")
            sys.exit(1)

        for result in results:
            print(json.dumps(result.model_dump(), ensure_ascii=False))
        if not all(result.success for result in results):
            sys.exit(1)

    elif args.command == "version":
        print("Batch Uploader CLI")
        print(f"Version {__version__}")
        print("Concurrent image uploads with ordered results")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
