"""CLI entry point for jfeed."""
import argparse
import logging
import sys

from jfeed import __version__
from jfeed.display import render_feed, summarize_feed
from jfeed.document import encode_feed
from jfeed.errors import FeedError
from jfeed.sources import load_feed, write_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jfeed",
        description="Read, check and re-encode JSON Feed documents",
    )
    parser.add_argument("source", nargs="?", default=None, metavar="SOURCE",
                        help="File path, http(s) URL, or - for stdin")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-f", "--format", choices=["console", "json", "summary"], default="console",
                        help="Output format (default: console)")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Write output to file instead of stdout")
    parser.add_argument("--indent", type=int, default=2,
                        help="JSON indentation (default: 2)")
    parser.add_argument("--compact", action="store_true",
                        help="Compact JSON output (no whitespace)")
    parser.add_argument("--width", type=int, default=100,
                        help="Console width for the rendered view (default: 100)")
    parser.add_argument("--check", action="store_true",
                        help="Only decode the document and report whether it is usable")
    parser.add_argument("--timeout", type=int, default=15,
                        help="HTTP request timeout in seconds (default: 15)")
    parser.add_argument("--retries", type=int, default=2,
                        help="Max retries for URL sources (default: 2)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status messages on stderr")
    parser.add_argument("--no-config", action="store_true",
                        help="Ignore config files (~/.jfeed.yaml, ./jfeed.yaml)")
    parser.add_argument("--init-config", action="store_true",
                        help="Write a starter ~/.jfeed.yaml and exit")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Apply config file defaults (CLI args always win)
    if not args.no_config:
        from jfeed.config import apply_config_defaults
        args = apply_config_defaults(parser, args)

    if args.init_config:
        from jfeed.config import generate_starter_config
        path = generate_starter_config()
        print(f"Wrote starter config to {path}")
        return 0

    if not args.source:
        parser.error("SOURCE is required")

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")

    try:
        feed = load_feed(args.source, timeout=args.timeout, retries=args.retries)
    except FeedError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.check:
        if not args.quiet:
            print(f"OK: {summarize_feed(feed)}")
        return 0

    if args.format == "json":
        data = encode_feed(feed, indent=None if args.compact else args.indent)
    elif args.format == "summary":
        data = summarize_feed(feed).encode("utf-8")
    else:
        data = render_feed(feed, width=args.width).encode("utf-8")

    if args.output:
        try:
            write_file(args.output, data)
        except OSError as e:
            print(f"Error: could not write {args.output}: {e}", file=sys.stderr)
            return 1
        if not args.quiet:
            print(f"Wrote {len(feed.items)} items to {args.output}", file=sys.stderr)
    else:
        print(data.decode("utf-8"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
