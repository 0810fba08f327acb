"""Command line interface: ``sbomctl merge`` and ``sbomctl inspect``."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .bom import SBOMError, read_sbom_file
from .inspect import align_columns, format_sbom_info
from .merge import DEFAULT_COMPONENT_NAME, merge_sboms

DEFAULT_OUTPUT = "merged.sbom.json"


class _UsageError(Exception):
    """Raised for invalid command line arguments."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its subcommands."""
    parser = _Parser(
        prog="sbomctl",
        description=(
            "sbomctl is a CLI tool for managing Software Bill of Materials (SBOM). "
            "It provides various commands for working with SBOM files in CycloneDX format."
        ),
    )
    commands = parser.add_subparsers(dest="command", metavar="command")

    merge = commands.add_parser(
        "merge",
        help="Merge multiple SBOM files into one",
        description="Merge multiple CycloneDX SBOM files into a single SBOM file.",
        epilog="Example: sbomctl merge sbom1.sbom.json sbom2.sbom.json -o merged.sbom.json",
    )
    merge.add_argument("files", nargs="+", metavar="sbom-file")
    merge.add_argument(
        "-o", "--output", default=DEFAULT_OUTPUT, help="Output file for the merged SBOM"
    )
    merge.add_argument(
        "--merged-component-name",
        default=DEFAULT_COMPONENT_NAME,
        help="Name for the component in the merged SBOM's metadata",
    )
    merge.add_argument(
        "--merged-component-version",
        default="",
        help="Version for the component in the merged SBOM's metadata",
    )

    inspect = commands.add_parser(
        "inspect",
        help="Inspect a SBOM file and show information about it",
        description=(
            "Inspect a CycloneDX SBOM file and display useful information about it, "
            "such as the number of components, types of components, and other metadata."
        ),
        epilog="Example: sbomctl inspect sbom.json",
    )
    inspect.add_argument("file", metavar="sbom-file")
    return parser


def _run_merge(args: argparse.Namespace) -> None:
    if len(args.files) < 2:
        raise _UsageError(f"requires at least 2 arg(s), only received {len(args.files)}")
    try:
        merge_sboms(
            args.files, args.output, args.merged_component_name, args.merged_component_version
        )
    except SBOMError as exc:
        raise SBOMError(f"failed to merge SBOM files: {exc}") from exc
    print(f"Successfully merged {len(args.files)} SBOM files into {args.output}")


def _run_inspect(args: argparse.Namespace) -> None:
    try:
        bom = read_sbom_file(args.file)
    except SBOMError as exc:
        raise SBOMError(f"failed to read SBOM file: {exc}") from exc
    sys.stdout.write(align_columns(format_sbom_info(bom, args.file), 2))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.command == "merge":
            _run_merge(args)
        elif args.command == "inspect":
            _run_inspect(args)
        else:
            parser.print_help()
    except _UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except SBOMError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())