#!/usr/bin/env python3
"""
Check @contract decorated functions in Python files.

Usage:
    contracheck check myfile.py
    contracheck check src/ --json report.json
    contracheck check myfile.py --nullability inferred.json --verbose
    contracheck check myfile.py --server http://localhost:8000
    contracheck serve --port 8000
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from contracheck.checks.nullability import NullabilityOracle
from contracheck.core.config import Settings
from contracheck.core.errors import ContractError
from contracheck.utils.files import collect_python_files
from contracheck.verify import check_file

logger = logging.getLogger("contracheck")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contracheck",
        description="Validate @contract declarations against function signatures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Check a file
    contracheck check examples/contracts_demo.py

    # Check a package and write a JSON report per file
    contracheck check src/ --json reports/contracts.json

    # Use not-null facts from an inference tool
    contracheck check mymodule.py --nullability inferred.json
        """
    )
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Check contracts in files or directories")
    check.add_argument("paths", nargs="+", help="Python files or directories")
    check.add_argument("--json", dest="json_output", help="Write a JSON report (one file per input when several)")
    check.add_argument("--nullability", help="JSON file of inferred not-null parameters per function")
    check.add_argument("--max-regions", type=positive_int, help="Region budget of the reachability check")
    check.add_argument("--server", help="Check on a running contracheck server instead of locally")
    check.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")
    serve.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    return parser


def configure_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def json_path_for(json_output: Optional[str], file_path: str, many: bool) -> Optional[str]:
    if not json_output or not many:
        return json_output
    stem, ext = os.path.splitext(json_output)
    name = os.path.splitext(file_path)[0].strip(os.sep).replace(os.sep, "_")
    return f"{stem}.{name}{ext or '.json'}"


def run_check(args: argparse.Namespace, settings: Settings) -> int:
    files = collect_python_files(args.paths)
    logger.debug("Checking %d files", len(files))
    if not files:
        print("⚠️  No Python files found")
        return 0

    if args.server:
        return run_remote_check(args, files)

    oracle = NullabilityOracle.from_file(args.nullability) if args.nullability else None
    max_regions = settings.max_tracked_regions if args.max_regions is None else args.max_regions

    failed = False
    for file_path in files:
        summary = check_file(
            file_path,
            oracle=oracle,
            max_tracked_regions=max_regions,
            json_output=json_path_for(args.json_output, file_path, len(files) > 1)
        )
        summary.print_summary()
        failed = failed or not summary.ok

    return 1 if failed else 0


def run_remote_check(args: argparse.Namespace, files: List[str]) -> int:
    from contracheck.server.remote import RemoteContractClient

    client = RemoteContractClient(args.server)
    failed = False
    for file_path in files:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", file_path, e)
            print(f"❌ Could not load {file_path}: {e}")
            failed = True
            continue
        result = client.check_source(source, file_path)

        print("\n" + "=" * 80)
        print(f"CONTRACT CHECK SUMMARY: {file_path} (server {args.server})")
        print("=" * 80)
        print(f"Functions checked: {result['total']}, with problems: {result['with_errors']}")
        for entry in result["results"]:
            for diagnostic in entry["diagnostics"]:
                print(f"   {entry['name']}:{diagnostic['line']} {diagnostic['kind']}: {diagnostic['message']}")

        output = json_path_for(args.json_output, file_path, len(files) > 1)
        if output:
            with open(output, 'w', encoding='utf-8') as f:
                json.dump(result, f, indent=2)
        failed = failed or result["with_errors"] > 0

    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings, args.verbose)

    if args.command == "serve":
        from contracheck.server.app import run
        run(args.host, args.port)
        return 0

    try:
        return run_check(args, settings)
    except (ContractError, OSError) as e:
        print(f"❌ Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
