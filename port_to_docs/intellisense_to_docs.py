"""Port IntelliSense xml documentation comments into Docs xml files.

Reads the IntelliSense xml files produced by a build, finds every API in the Docs
xml repository that is still undocumented, and fills in the missing summaries,
remarks, params, type params, return values, property values and exceptions.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from port_to_docs.errors import EmptyCorpusError, PortAbortedError
from port_to_docs.run_port import run_port

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    ap = argparse.ArgumentParser(
        description=(
            "Port IntelliSense xml documentation comments into undocumented Docs "
            "xml APIs."
        ),
    )
    ap.add_argument(
        "--docs",
        type=Path,
        nargs="+",
        required=True,
        help="Directories containing the Docs xml type files",
    )
    ap.add_argument(
        "--intellisense",
        type=Path,
        nargs="+",
        required=True,
        help="Directories containing the IntelliSense xml files",
    )
    ap.add_argument("--config", help="Path to a YAML configuration file")

    filters = ap.add_argument_group("filters")
    for option, dest, what in (
        ("--include-assemblies", "included_assemblies", "assembly"),
        ("--exclude-assemblies", "excluded_assemblies", "assembly"),
        ("--include-namespaces", "included_namespaces", "namespace"),
        ("--exclude-namespaces", "excluded_namespaces", "namespace"),
        ("--include-types", "included_types", "type full name"),
        ("--exclude-types", "excluded_types", "type full name"),
    ):
        verb = "Port only" if dest.startswith("included") else "Skip"
        filters.add_argument(
            option,
            dest=dest,
            nargs="+",
            metavar="PREFIX",
            help=f"{verb} APIs whose {what} starts with one of these prefixes",
        )

    behavior = ap.add_argument_group("behavior")
    behavior.add_argument(
        "--markdown-remarks",
        action="store_true",
        help="Write remarks as markdown inside a CDATA block",
    )
    behavior.add_argument(
        "--no-preserve-inheritdoc",
        action="store_true",
        help="Copy inherited documentation instead of writing an inheritdoc tag",
    )
    behavior.add_argument(
        "--skip-interface-implementations",
        action="store_true",
        help="Do not port documentation from implemented interface members",
    )
    behavior.add_argument(
        "--port-interface-remarks",
        action="store_true",
        help="Append the interface remarks to explicit implementation remarks",
    )
    behavior.add_argument(
        "--enable-prompts",
        action="store_true",
        help="Ask on the console when a param name cannot be matched",
    )
    behavior.add_argument(
        "--port-exceptions-existing",
        action="store_true",
        help="Append IntelliSense text to exceptions that are already documented",
    )
    behavior.add_argument(
        "--skip-exceptions-new",
        action="store_true",
        help="Do not add exceptions that are missing from Docs",
    )
    behavior.add_argument(
        "--exception-collision-threshold",
        type=int,
        metavar="PERCENT",
        help="Word collision percentage above which an exception is not appended "
        "(default: 70)",
    )

    output = ap.add_argument_group("output")
    output.add_argument(
        "--print-undoc",
        action="store_true",
        help="List the APIs that are still undocumented after porting",
    )
    output.add_argument(
        "--print-summary-details",
        action="store_true",
        help="Log every modified file, type, API and element",
    )
    output.add_argument(
        "--save",
        action="store_true",
        help="Write the modified Docs xml files (default: report only)",
    )
    output.add_argument("--report", help="Write a JSON run report to this path")
    output.add_argument("--verbose", action="store_true", help="Log debug output")
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    """Run the port process."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    try:
        return run_port(args)
    except EmptyCorpusError as e:
        logger.error("%s", e)
        return 1
    except PortAbortedError:
        logger.info("Goodbye!")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
