#!/usr/bin/env python3
"""
larkdown - Lark/Feishu docx to Markdown converter

Main entry point for larkdown. Fetches a document's blocks from the Lark Open
API (or a JSON dump, or the built-in sample document), renders them to
Markdown and writes the result to a file.
"""

import logging
import sys
import argparse
from collections import Counter
from pathlib import Path

from pydantic import ValidationError

from larkdown import __version__
from larkdown.cancellation import CancelToken
from larkdown.client import LarkClient
from larkdown.config import config
from larkdown.errors import Diagnostics, LarkdownError
from larkdown.media import LarkMediaResolver
from larkdown.models import RenderOptions
from larkdown.rendering import DocumentAssembler
from larkdown.sources import BaseBlockSource, JsonFileSource, LarkDocumentSource, MockBlockSource


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def build_render_options(args) -> RenderOptions:
    """
    Combine the configured render options with command line overrides.

    Args:
        args: Parsed command line arguments

    Returns:
        The effective RenderOptions
    """
    overrides = {}
    if args.download_media:
        overrides["media_dir"] = args.download_media
        overrides["resolve_media_as_remote_url"] = False
    if args.media_prefix is not None:
        overrides["media_url_prefix"] = args.media_prefix
    if args.admonitions:
        overrides["use_admonition_style"] = True
    if args.html_images:
        overrides["image_html_tag"] = True

    options = config.render_options()
    if overrides:
        options = options.model_copy(update=overrides)
    return options


def create_source(args, client: LarkClient) -> BaseBlockSource:
    """
    Create the block source selected on the command line.

    Args:
        args: Parsed command line arguments
        client: Lark client for the API source

    Returns:
        The block source
    """
    if args.mock:
        return MockBlockSource()
    if args.from_json:
        return JsonFileSource(args.from_json)
    return LarkDocumentSource(client, args.document_id, page_size=config.page_size)


def run_conversion(args) -> Diagnostics:
    """
    Run the whole conversion and write the Markdown file.

    Args:
        args: Parsed command line arguments

    Returns:
        The diagnostics recorded while rendering
    """
    options = build_render_options(args)
    cancel = CancelToken(args.timeout) if args.timeout else None
    output_path = Path(args.output or config.output_filename)

    with LarkClient() as client:
        source = create_source(args, client)
        assembler = DocumentAssembler(
            media_resolver=LarkMediaResolver(client),
            options=options,
        )
        markdown = assembler.render(source, cancel)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(markdown, encoding="utf-8")
    logging.info(f"Wrote Markdown to {output_path}")
    return assembler.diagnostics


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="larkdown - Lark/Feishu docx to Markdown converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py doxcnAbCdEf                         # Convert a document through the Open API
  python main.py doxcnAbCdEf --download-media dist/static --media-prefix static
  python main.py --from-json blocks.json -o out.md   # Convert a saved block listing
  python main.py --mock                              # Convert the built-in sample document
        """
    )

    parser.add_argument(
        "document_id",
        nargs="?",
        help="Token of the docx document to convert"
    )

    parser.add_argument(
        "--from-json",
        metavar="PATH",
        help="Read blocks from a JSON dump of the docx blocks API instead of Lark"
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Convert the built-in sample document"
    )

    parser.add_argument(
        "-o", "--output",
        help="Markdown file to write (default: paths.output_file from the config)"
    )

    parser.add_argument(
        "--config",
        help="Path to the configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--download-media",
        metavar="DIR",
        help="Download images into DIR instead of linking temporary URLs"
    )

    parser.add_argument(
        "--media-prefix",
        help="Path prefix for downloaded images in the Markdown output"
    )

    parser.add_argument(
        "--admonitions",
        action="store_true",
        help="Render coloured callouts as GitHub admonitions"
    )

    parser.add_argument(
        "--html-images",
        action="store_true",
        help="Emit <img> tags with width and height"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="Abort the conversion after this many seconds"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"larkdown {__version__}"
    )

    args = parser.parse_args(argv)
    selected = sum([bool(args.document_id), bool(args.from_json), args.mock])
    if selected != 1:
        parser.error("give exactly one of a document id, --from-json or --mock")
    return args


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    if args.config:
        config.config_path = Path(args.config)
        config.reload()
    setup_logging()

    logging.info("larkdown - Lark/Feishu docx to Markdown converter")

    try:
        diagnostics = run_conversion(args)
    except KeyboardInterrupt:
        logging.info("Conversion interrupted by user")
        sys.exit(1)
    except ValidationError as e:
        logging.error(f"Invalid render options: {e}")
        sys.exit(1)
    except LarkdownError as e:
        logging.error(f"Conversion failed: {e}")
        sys.exit(1)

    if len(diagnostics):
        counts = Counter(type(anomaly).__name__ for anomaly in diagnostics)
        summary = ", ".join(f"{name}: {count}" for name, count in sorted(counts.items()))
        logging.warning(f"Conversion finished with {len(diagnostics)} diagnostics ({summary})")
    else:
        logging.info("Conversion finished without diagnostics")


if __name__ == "__main__":
    main()
