"""Command-line interface for catalog extraction and wheel resolution.

Usage:
    wheel-matrix extract README.md --out tables.json
    wheel-matrix resolve https://example.org/README.md --package flash-attn \\
        --torch 2.8.0 --cuda cu129 --python 3.13
    wheel-matrix resolve index.json --structured --package sageattention \\
        --torch 2.8.0 --cuda 12.8 --python 3.12 --variant 2.2 --abi

Exit codes: 0 resolved, 1 no compatible wheel, 2 bad input or fetch failure.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from wheel_matrix import config
from wheel_matrix.catalog.export import save_tables, tables_to_dict
from wheel_matrix.catalog.extraction import extract_tables
from wheel_matrix.errors import CatalogFormatError, FetchError, InvalidTag
from wheel_matrix.fetch import read_source
from wheel_matrix.pipeline import load_catalog
from wheel_matrix.resolve.matcher import resolve
from wheel_matrix.resolve.schema import MatchFailure, RequestDescriptor

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNRESOLVED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wheel-matrix", description="Resolve prebuilt wheel URLs from compatibility catalogs")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help=f"Logging level (default: {config.LOG_LEVEL})")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Extract pipe tables and write the audit JSON")
    extract.add_argument("source", help="Markdown catalog path or http(s) URL")
    extract.add_argument("--out", type=Path, default=None, help="Output JSON path (default: stdout)")
    extract.add_argument("--h1", default=None, help="Section heading marker (default: from WHEEL_MATRIX_HEADING_MARKERS)")
    extract.add_argument("--h2", default=None, help="Subsection heading marker (default: from WHEEL_MATRIX_HEADING_MARKERS)")

    res = subparsers.add_parser("resolve", help="Resolve a download URL for the requested combination")
    res.add_argument("source", nargs="?", default=None, help="Catalog path or URL (default: from environment)")
    res.add_argument("--package", required=True, help="Package name, e.g. flash-attn")
    res.add_argument("--torch", required=True, help="Framework version, e.g. 2.8.0")
    res.add_argument("--cuda", required=True, help="Accelerator tag, e.g. cu129 or 12.9")
    res.add_argument("--python", required=True, help="Language version, e.g. 3.13")
    res.add_argument("--variant", default=None, help="Release-line filter, e.g. 2.2")
    res.add_argument("--abi", action="store_true", help="Allow version-neutral (abi3) builds to match")
    res.add_argument("--structured", action="store_true", help="Treat the source as a JSON wheel index")
    res.add_argument("--h1", default=None, help="Section heading marker (default: from WHEEL_MATRIX_HEADING_MARKERS)")
    res.add_argument("--h2", default=None, help="Subsection heading marker (default: from WHEEL_MATRIX_HEADING_MARKERS)")
    return parser


def _markers(args: argparse.Namespace) -> tuple[str, str]:
    """Heading markers from the command line, falling back to the environment."""
    if args.h1 is not None and args.h2 is not None:
        return args.h1, args.h2
    h1_default, h2_default = config.heading_markers()
    return (h1_default if args.h1 is None else args.h1, h2_default if args.h2 is None else args.h2)


def run_extract(args: argparse.Namespace) -> int:
    h1, h2 = _markers(args)
    tables = extract_tables(read_source(args.source), h1=h1, h2=h2)
    if args.out is None:
        print(json.dumps(tables_to_dict(tables), indent=2))
    else:
        save_tables(tables, args.out)
    return EXIT_OK


def run_resolve(args: argparse.Namespace) -> int:
    source = args.source or (config.INDEX_URL if args.structured else config.CATALOG_URL)
    if not source:
        logger.error("No catalog source given and WHEEL_MATRIX_%s_URL is not set", "INDEX" if args.structured else "CATALOG")
        return EXIT_ERROR

    request = RequestDescriptor(
        package_name=args.package,
        framework_version=args.torch,
        accelerator_tag=args.cuda,
        language_tag=args.python,
        allow_abi_relaxation=args.abi,
        variant_filter=args.variant,
    )
    h1, h2 = _markers(args)
    catalog = load_catalog(source, structured=args.structured, h1=h1, h2=h2)
    result = resolve(catalog, request)
    if isinstance(result, MatchFailure):
        print(result.describe(), file=sys.stderr)
        return EXIT_UNRESOLVED

    logger.info("Matched via %s", result.tier_label)
    print(result.url)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=config.LOG_FORMAT)

    handlers = {"extract": run_extract, "resolve": run_resolve}
    try:
        return handlers[args.command](args)
    except (FetchError, InvalidTag, CatalogFormatError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
