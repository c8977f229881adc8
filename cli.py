#!/usr/bin/env python3
"""CLI for the TestLink result seeker."""

import argparse
import json
import logging
import sys

import core
from testlink_results.catalog import CatalogError
from testlink_results.junit_parser import ParserError
from testlink_results.seeker import SeekerError


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s'
    )


def cmd_seek(args):
    """Match reports in a directory against a catalog."""
    try:
        data = core.seek_results(args.directory, args.catalog,
                                 include_pattern=args.include,
                                 key_custom_field=args.key_field,
                                 seeker=args.seeker,
                                 include_content=args.include_content)
    except (SeekerError, CatalogError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.format == 'json':
        print(json.dumps(data, indent=2, default=str))
    else:
        _print_summary(data)

    failing = data["total"] - data["counts"]["PASSED"]
    return 0 if failing == 0 else 1


def _print_summary(data: dict):
    """Print human-readable summary."""
    source = data.get("source", {})
    print(f"\n{'='*60}")
    print(f"Directory: {source.get('directory', 'N/A')}")
    print(f"Include: {source.get('include_pattern', 'N/A')}")
    print(f"Key field: {source.get('key_custom_field', 'N/A')} ({source.get('seeker', 'N/A')})")

    counts = data.get("counts", {})
    print(f"\nMatched test cases: {data.get('total', 0)}")
    print(f"  Passed:  {counts.get('PASSED', 0)}")
    print(f"  Failed:  {counts.get('FAILED', 0)}")
    print(f"  Blocked: {counts.get('BLOCKED', 0)}")

    results = data.get("results", [])
    if results:
        print()
        for r in results:
            print(f"  [{r['status']:<7}] {r['id']}: {r['name']} ({len(r['attachments'])} attachments)")
    print(f"{'='*60}\n")


def cmd_parse(args):
    """Parse one report and print its suites."""
    try:
        data = core.parse_report(args.report)
    except (ParserError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.format == 'json':
        print(json.dumps(data, indent=2))
        return 0

    if not data["suites"]:
        print(f"No test suites in {args.report}")
    for s in data["suites"]:
        print(f"Suite: {s['name'] or 'N/A'} (tests={s['tests'] or 0}, "
              f"failures={s['failures']}, errors={s['errors']})")
        for tc in s["test_cases"]:
            print(f"  - {tc['name']} (failures={tc['failures']}, errors={tc['errors']})")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description='TestLink JUnit result seeker')
    parser.add_argument('-v', '--verbose', action='store_true')

    sub = parser.add_subparsers(dest='command')

    p = sub.add_parser('seek', help='Match reports in a directory against a TestLink catalog')
    p.add_argument('directory', help='Directory to search for reports')
    p.add_argument('--catalog', '-c', required=True, help='YAML/JSON catalog file')
    p.add_argument('--include', '-i', help='Comma-separated include patterns (default: TEST-*.xml)')
    p.add_argument('--key-field', '-k', help='Name of the key custom field')
    p.add_argument('--seeker', '-s', choices=core.SEEKER_KINDS,
                   help='Match test cases, test classes or suites')
    p.add_argument('--include-content', action='store_true',
                   help='Include base64 attachment content in JSON output')
    p.add_argument('--format', '-f', choices=['text', 'json'], default='text')

    p = sub.add_parser('parse', help='Parse a single JUnit report')
    p.add_argument('report', help='Report file')
    p.add_argument('--format', '-f', choices=['text', 'json'], default='text')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    cmds = {
        'seek': cmd_seek,
        'parse': cmd_parse,
    }
    return cmds[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
