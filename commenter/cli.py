#!/usr/bin/env python3
"""
commenter - remove comments from source files while leaving code and string
literals untouched
"""

import argparse
import logging
import sys

from . import __version__
from .config import resolve_options
from .errors import CommenterError
from .languages import PROFILES
from .report import COLOR_GREEN, Reporter, use_color
from .results import Outcome
from .walker import process_batch

logger = logging.getLogger(__name__)


def _supported_types():
    rows = []
    for profile in PROFILES:
        markers = ', '.join(profile.line_comments + tuple(f"{o} {c}" for o, c in profile.block_comments))
        rows.append(f"  {profile.name}: {', '.join(profile.extensions)} (comments: {markers})")
    return '\n'.join(rows)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='commenter',
        description="Remove comments from source files. Code and string literals are kept byte for byte.",
        epilog="supported file types:\n" + _supported_types(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", nargs='?', default='.', help="File, directory or glob pattern to process (default: .)")
    parser.add_argument(
        "-w", "--write",
        action="store_true",
        default=None,
        help="Write changes to the files instead of only reporting them",
    )
    parser.add_argument(
        "-r", "--recursive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Descend into subdirectories (default: true)",
    )
    parser.add_argument("-nc", "--no-color", action="store_true", default=None, help="Disable coloured output")
    parser.add_argument("-e", "--exclude", help="Comma-separated file name globs to exclude (e.g. '*_test.go,*.min.js')")
    parser.add_argument("-i", "--ignore-pattern", help="Comma-separated texts; comments containing one are kept (e.g. '@ts-ignore')")
    parser.add_argument("-j", "--workers", type=int, help="Number of files processed in parallel (default: CPU count)")
    parser.add_argument("--timeout", type=float, help="Per-file time limit in seconds")
    parser.add_argument("-nwl", "--no-warn-large", action="store_true", default=None, help="Disable warnings for files over 500 lines")
    parser.add_argument("--config", help="Path to a JSON config file (default: commenter.config.json when present)")
    parser.add_argument("-V", "--verbose", action="count", default=0, help="Log progress (-VV for debug output)")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbosity):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        options = resolve_options(
            {
                'write': args.write,
                'recursive': args.recursive,
                'no_color': args.no_color,
                'exclude_patterns': args.exclude,
                'ignore_patterns': args.ignore_pattern,
                'workers': args.workers,
                'timeout': args.timeout,
                'no_warn_large': args.no_warn_large,
            },
            config_path=args.config,
        )
    except CommenterError as e:
        print(Reporter(use_color(stream=sys.stderr)).error(e), file=sys.stderr)
        return 1

    logger.debug("Options: %s", options)
    reporter = Reporter(use_color(options.no_color))
    err_reporter = Reporter(use_color(options.no_color, sys.stderr))

    batch = process_batch(
        args.path,
        recursive=options.recursive,
        write=options.write,
        workers=options.workers,
        timeout=options.timeout,
        exclude_patterns=options.exclude_patterns,
        ignore_patterns=options.ignore_patterns,
        warn_large=not options.no_warn_large,
    )

    if batch.single:
        if not batch.results:
            print(err_reporter.error(f"No supported files found in '{args.path}'"), file=sys.stderr)
            return 1
        result = batch.results[0]
        if result.outcome is Outcome.ERROR:
            print(err_reporter.error(result.message), file=sys.stderr)
            return 1
        print(reporter.file_report(result, warn_large=not options.no_warn_large, elapsed=batch.elapsed))
        if result.outcome is Outcome.SUCCESS:
            if options.write:
                if result.persisted:
                    print("\n" + reporter.paint("File updated successfully!", COLOR_GREEN))
                else:
                    print("\nNo changes needed.")
            else:
                print("\nRun with --write to apply changes to the file.")
        return 0

    if not batch.results:
        print(err_reporter.error(f"No supported files found in '{args.path}'"), file=sys.stderr)
        return 1

    for result in batch.results:
        print(reporter.file_line(result))
    print(reporter.batch_summary(batch, write=options.write))
    if not options.write:
        print("\nRun with --write to apply changes to all files.")
    print()
    print(reporter.elapsed(batch.elapsed))
    return 1 if batch.failed else 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
