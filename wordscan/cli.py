import argparse
import sys
from typing import List, Optional, Tuple

from .core.models import ScanContext
from .core.reporting import MatchReporter
from .core.scanner import TreeWalker, configure_logging
from .core.utils import DEFAULT_DIR, expand_home, resolve_arguments


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="wordscan",
        usage="%(prog)s [-i] [DIRECTORY] WORD\n       %(prog)s [-i] WORD [DIRECTORY]",
        description="Recursively search regular files for lines containing WORD as a whole word.",
        epilog=f"If no directory is given, {DEFAULT_DIR} is searched.",
    )
    p.add_argument("args", nargs="*", metavar="DIRECTORY|WORD", help="Search word and optional directory, in either order.")
    p.add_argument("-i", "--ignore-case", action="store_true", help="Match the word without regard to case.")
    p.add_argument("--progress", action="store_true", help="Show a file counter on stderr while scanning.")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")
    return p


def parse_command_line(parser: argparse.ArgumentParser, argv: List[str]) -> Tuple[argparse.Namespace, List[str]]:
    """Parse options anywhere on the line and return the positionals in order.

    Dash-prefixed tokens that are not options of ours are search words, not
    errors, so they are kept in their original position.
    """
    args, unknown = parser.parse_known_intermixed_args(argv)
    candidates = set(args.args) | set(unknown)
    positionals = [token for token in argv if token in candidates]
    return args, positionals


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    args, positionals = parse_command_line(parser, argv)
    if not positionals:
        parser.error("a search word is required")
    if len(positionals) > 2:
        parser.error("expected a search word and at most one directory")

    logger = configure_logging(verbose=args.verbose)
    word, directory, ignored = resolve_arguments(positionals)
    if not word:
        parser.error("the search word must not be empty")
    if ignored is not None:
        logger.warning("Neither %r nor %r is a directory; ignoring %r and searching %s", word, ignored, ignored, DEFAULT_DIR)

    try:
        root = expand_home(directory)
    except KeyError:
        logger.warning("Cannot determine home directory; searching %s unexpanded", directory)
        root = directory

    ctx = ScanContext(search_word=word, case_insensitive=args.ignore_case)
    reporter = MatchReporter()
    reporter.banner(ctx, root)

    walker = TreeWalker(
        ctx,
        reporter=reporter,
        logger=logger,
        verbose=args.verbose,
        show_progress=args.progress,
    )
    walker.run(root)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
