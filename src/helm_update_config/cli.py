"""Command line entry point: ``helm-update-config``."""

import argparse
import logging
import sys

from .client import HttpReleaseClient
from .client import ReleaseClient
from .exceptions import UpdateConfigError
from .models import ValuesPolicy
from .updater import ReleaseConfigUpdater
from .values import parse_set_values

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="helm-update-config",
        description="update config values of an existing release",
    )
    parser.add_argument("release", metavar="RELEASE", help="release name (NAMESPACE.DATE.TIME)")
    parser.add_argument(
        "--set-value",
        dest="set_values",
        action="append",
        default=[],
        metavar="KEY=VAL",
        help="set values on the command line (can specify multiple or separate values with commas: key1=val1,key2=val2)",
    )
    parser.add_argument(
        "--reset-values",
        action="store_true",
        help="when upgrading, reset the values to the ones built into the chart",
    )
    parser.add_argument("--host", help="address of the release service (default: $TILLER_HOST)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None, client: ReleaseClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        values = parse_set_values(args.set_values)
        updater = ReleaseConfigUpdater(
            client=client or HttpReleaseClient(host=args.host),
            release_id=args.release,
            values=values,
            policy=ValuesPolicy.from_flag(args.reset_values),
        )
        updater.run()
    except UpdateConfigError as e:
        logger.debug(f"Update of {args.release} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Info: update successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
