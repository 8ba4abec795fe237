"""Main entry point for the CDN77 cache refresher."""

import argparse
import sys

from .config import RefreshConfig
from .errors import ExitCode, RefreshError
from .logger import configure
from .refresher import CacheRefresher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdn77-refresh",
        description="Purge a CDN77 resource and prefetch every URL of a sitemap.",
    )
    parser.add_argument(
        "--login", required=True, help="Your login (email) to the CDN77 control panel."
    )
    parser.add_argument(
        "--token",
        required=True,
        help="Your API token, generated in the profile section on client.cdn77.com.",
    )
    parser.add_argument(
        "--site", required=True, help="Your website, aka 'CDN Resource' in CDN77."
    )
    parser.add_argument(
        "--sitemap",
        default="",
        help="sitemap.xml file OR URL beginning with http:// or https://",
    )
    parser.add_argument(
        "--purge-all",
        action="store_true",
        help="Remove (purge) existing HTTP content on CDN77 before prefetching.",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose output.")
    return parser


def main(argv=None):
    """Parses command-line arguments and runs the refresh."""
    # argparse exits with status 2 on missing flags, before any request
    args = build_parser().parse_args(argv)

    logger = configure(verbose=args.verbose)

    try:
        config = RefreshConfig.from_args(args)
        CacheRefresher(config, logger).run()
    except RefreshError as e:
        logger.error(e.message)
        sys.exit(e.exit_code)

    sys.exit(ExitCode.SUCCESS)


if __name__ == "__main__":
    main()
