#!/usr/bin/env python3
"""
Scratch Structure Extractor

Converts Scratch 2 (.sb2) projects into indented .se text files that keep only
the stage, the sprites and their block call trees.

Usage:
    python extract.py <input dir> <output dir> [options]

The input directory holds one subdirectory per owner, named with the owner's
numeric id, each containing .sb2 archives. The output directory receives one
subdirectory per owner with one .se file per archive.
"""

import argparse
import sys
from typing import List, Optional

from scratchtree.errors import ExtractorError
from scratchtree.project_io import run_extraction
from scratchtree.serializer import render_text


verbose_mode = False


def error(msg: str, detail: str = "") -> None:
    """Print error message and exit."""
    print(f"Error: {msg}", file=sys.stderr)
    if detail:
        print(f"  Detail: {detail}", file=sys.stderr)
    sys.exit(1)


def warn(msg: str) -> None:
    """Print warning message."""
    print(f"Warning: {msg}", file=sys.stderr)


def info(msg: str) -> None:
    """Print info message."""
    print(msg)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract the block structure of Scratch 2 projects into .se text files.")
    parser.add_argument("input", help="Directory with one numbered subdirectory of .sb2 files per owner")
    parser.add_argument("output", help="Directory receiving one subdirectory of .se files per owner")
    parser.add_argument("--no-clean", action="store_true", help="Do not remove the output directory before writing")
    parser.add_argument("--keep-temp", action="store_true", help="Keep the directory of unpacked archives")
    parser.add_argument("--print", dest="print_trees", action="store_true", help="Also print every extracted tree")
    parser.add_argument("--verbose", "-V", action="store_true", help="Show tracebacks for unexpected errors")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    global verbose_mode
    args = parse_args(argv)
    verbose_mode = args.verbose

    try:
        collection, diagnostics = run_extraction(
            args.input,
            args.output,
            clean=not args.no_clean,
            keep_staging=args.keep_temp,
        )
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except ExtractorError as e:
        error(e.message, e.detail)
        return
    except Exception as e:
        if verbose_mode:
            import traceback
            traceback.print_exc()
            sys.exit(1)
        error(str(e))
        return

    if args.print_trees:
        for _, trees in collection.items():
            for tree in trees:
                info(render_text(tree, 1))

    if diagnostics.all_diagnostics:
        print()
        diagnostics.print_all()
        print()
        if diagnostics.has_errors():
            warn("Some projects were skipped")
        info(f"Extraction completed with {diagnostics.summary()}")
    info(f"Extracted {collection.project_count} project(s) for {len(collection)} owner(s) into {args.output}")


if __name__ == "__main__":
    main()
