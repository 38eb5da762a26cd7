import argparse
import logging
import sys
from typing import Iterable, List, Optional

from filter_settings import Settings
from swear_filter import EMPTY_MESSAGE_WORD, FilterOptions, NormalizationError, SwearFilter
from word_store import load_word_file

logger = logging.getLogger(__name__)

EXIT_ALLOWED = 0
EXIT_BLOCKED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swearfilter",
        description="Check messages against a list of filtered words.",
    )
    parser.add_argument("messages", nargs="*", metavar="MESSAGE",
                        help="messages to check (read one per line from stdin when omitted)")
    parser.add_argument("-w", "--word", dest="words", action="append", default=[],
                        help="filtered word, may be repeated")
    parser.add_argument("--words-file", help="file with one filtered word per line")
    parser.add_argument("--flag-empty", action="store_true",
                        help="block messages that normalize to an empty string")

    group = parser.add_argument_group("normalization")
    group.add_argument("--disable-normalize", action="store_true",
                       help="keep accents and other combining marks")
    group.add_argument("--disable-spaced-tab", action="store_true",
                       help="keep tabs instead of turning them into spaces")
    group.add_argument("--disable-multi-whitespace", action="store_true",
                       help="keep leading, trailing and repeated whitespace")
    group.add_argument("--disable-zero-width", action="store_true",
                       help="keep zero-width spaces")
    group.add_argument("--enable-spaced-bypass", action="store_true",
                       help="also match words with the spaces between letters removed")

    parser.add_argument("--show-normalized", action="store_true",
                        help="print the normalized form of each message")
    parser.add_argument("--log-level", help="logging level (default from SWEARFILTER_LOG_LEVEL)")
    return parser


def filter_from_args(args: argparse.Namespace, settings: Settings) -> SwearFilter:
    """Environment settings with command-line switches layered on top."""
    base = settings.filter_options()
    options = FilterOptions(
        disable_normalize=base.disable_normalize or args.disable_normalize,
        disable_spaced_tab=base.disable_spaced_tab or args.disable_spaced_tab,
        disable_multi_whitespace_stripping=base.disable_multi_whitespace_stripping or args.disable_multi_whitespace,
        disable_zero_width_stripping=base.disable_zero_width_stripping or args.disable_zero_width,
        enable_spaced_bypass=base.enable_spaced_bypass or args.enable_spaced_bypass,
    )

    words = settings.initial_words()
    words.extend(args.words)
    if args.words_file:
        words.extend(load_word_file(args.words_file))
    if args.flag_empty:
        words.append(EMPTY_MESSAGE_WORD)

    return SwearFilter(words, options)


def _read_messages(args: argparse.Namespace) -> Iterable[str]:
    if args.messages:
        return args.messages
    return (line.rstrip("\r\n") for line in sys.stdin)


def check_messages(swear_filter: SwearFilter, messages: Iterable[str], show_normalized: bool = False) -> int:
    """Print a verdict per message and return the process exit status."""
    status = EXIT_ALLOWED
    for msg in messages:
        try:
            matches = swear_filter.check(msg)
            normalized = swear_filter.normalize(msg) if show_normalized else None
        except NormalizationError as e:
            print(f"ERROR    {msg!r}: {e}", file=sys.stderr)
            status = EXIT_ERROR
            continue

        if matches:
            tripped = ", ".join(
                f"{m.word!r}@{m.index}" for m in sorted(matches, key=lambda m: (m.index, m.word))
            )
            print(f"BLOCKED  {msg!r} => {tripped}")
            if status == EXIT_ALLOWED:
                status = EXIT_BLOCKED
        else:
            print(f"ALLOWED  {msg!r}")

        if show_normalized:
            print(f"         normalized: {normalized!r}")

    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()

    log_level = (args.log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    swear_filter = filter_from_args(args, settings)
    if not swear_filter.words():
        logger.warning("No filtered words configured, every message will be allowed")

    return check_messages(swear_filter, _read_messages(args), args.show_normalized)


if __name__ == "__main__":
    sys.exit(main())
