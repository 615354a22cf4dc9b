import argparse
import itertools
import json
import logging
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .catalog import Catalog
from .exceptions import SauceBrowsersError

logger = logging.getLogger(__name__)

HEADERS = ("Family", "Alias", "Browser", "Version", "OS", "Device")

FAMILY_STYLE = "bold red"
COUNT_STYLE = "bright_black"
DEVICE_STYLE = "bright_cyan"


def make_rows(records):
    """
    Group records by family, families sorted, and number them.

    :returns: A list of rows. A family heading is a row with a single
              cell.
    """
    rows = []
    count = 1
    ordered = sorted(records, key=lambda record: record["family"] or "")
    for family, group in itertools.groupby(
            ordered, key=lambda record: record["family"] or ""):
        rows.append((family, ))
        for record in group:
            caps = record["desiredCapabilities"]
            rows.append((
                "{0}.".format(count),
                record["id"],
                str(caps.get("browserName", "")),
                str(caps.get("version", "")),
                str(caps.get("platform", "")),
                caps.get("deviceName") or "Desktop"))
            count += 1

    return rows


def make_table(records):
    """
    Build the listing of ``records`` as a table, with a heading row for
    each family.

    :rtype: :class:`rich.table.Table`
    """
    table = Table(title="Available Sauce Browsers")
    for header in HEADERS:
        table.add_column(header, no_wrap=True)

    for row in make_rows(records):
        if len(row) == 1:
            table.add_row(Text(row[0]), style=FAMILY_STYLE)
            continue

        count, record_id, browser, version, platform, device = row
        table.add_row(
            Text(count, style=COUNT_STYLE), Text(record_id), Text(browser),
            Text(version), Text(platform),
            Text(device, style="" if device == "Desktop" else DEVICE_STYLE))

    return table


def parse_spec(pairs):
    spec = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(
                "expected key=value, got: {0}".format(pair))
        spec[key] = value
    return spec


def list_command(catalog, args):
    args.console.print(make_table(catalog.records))


def get_command(catalog, args):
    results = catalog.get(args.spec, wrapped=args.wrapped)
    print(json.dumps(results, indent=2, sort_keys=True))


def shrinkwrap_command(catalog, args):
    path = catalog.write_shrinkwrap(args.path)
    print("Wrote " + path)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="saucebrowsers",
        description="Resolve browser specifications against the Sauce Labs "
        "platform listing.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log what is going on")
    parser.add_argument("--shrinkwrap", metavar="PATH",
                        help="read the listing from a shrinkwrap snapshot "
                        "instead of the service")
    parser.add_argument("--add", metavar="FILE", action="append",
                        default=[],
                        help="add the normalized browsers stored in FILE; "
                        "may be repeated")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    sp = subparsers.add_parser("list", help="list the available browsers")
    sp.set_defaults(func=list_command, needs_catalog=True)

    sp = subparsers.add_parser(
        "get", help="print the capabilities matching a specification")
    sp.add_argument("--wrapped", action="store_true",
                    help="print whole records rather than capabilities")
    sp.add_argument("spec", nargs="*", metavar="KEY=VALUE",
                    help="a field of the specification, like "
                    "browserName=chrome or id=chrome_latest_Linux_Desktop")
    sp.set_defaults(func=get_command, needs_catalog=True)

    sp = subparsers.add_parser(
        "shrinkwrap", help="save the listing of the service to a file")
    sp.add_argument("path", nargs="?", help="where to save the listing")
    sp.set_defaults(func=shrinkwrap_command, needs_catalog=False)

    return parser


def main(argv=None, catalog=None, console=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.console = console if console is not None else Console()

    if args.command == "get":
        try:
            args.spec = parse_spec(args.spec)
        except argparse.ArgumentTypeError as ex:
            parser.error(str(ex))

    logging.basicConfig(level=logging.DEBUG if args.verbose
                        else logging.WARNING)

    catalog = catalog if catalog is not None else Catalog()
    try:
        if args.needs_catalog:
            if args.shrinkwrap:
                catalog.use_shrinkwrap(args.shrinkwrap)
            else:
                catalog.initialize()

            for path in args.add:
                catalog.add_normalized_browsers_from_file(path)

        return args.func(catalog, args) or 0
    except SauceBrowsersError as ex:
        logger.debug("command failed", exc_info=True)
        print("saucebrowsers: error: {0}".format(ex), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
