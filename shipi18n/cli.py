"""CLI entrypoint."""

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import List, Optional

from shipi18n.client import Shipi18nClient
from shipi18n.config import get_config
from shipi18n.errors import Shipi18nError
from shipi18n.io_json import read_json_document, write_translations
from shipi18n.placeholders import find_placeholder_issues
from shipi18n.report import (
    print_comparison,
    print_json_result,
    print_placeholder_issues,
    print_text_result,
)
from shipi18n.run_logging import RunLogger


def _add_translation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--target",
        dest="targets",
        action="append",
        required=True,
        help="Target language code; repeat for several languages (e.g. --target es --target fr)"
    )
    parser.add_argument(
        "--source",
        default="en",
        help="Source language code (default: en)"
    )
    parser.add_argument(
        "--no-pluralization",
        action="store_true",
        help="Ask the service not to generate plural forms"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shipi18n",
        description="Shipi18n translation API client"
    )
    parser.add_argument(
        "--api-key",
        help="API key (default: SHIPI18N_API_KEY env var)"
    )
    parser.add_argument(
        "--api-url",
        help="API base URL (default: SHIPI18N_API_URL env var or https://shipi18n.com/api)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: wait for the service)"
    )
    parser.add_argument(
        "--runs-dir",
        type=Path,
        help="Directory for run logs; nothing is logged if omitted"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # translate command
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate text to one or more languages"
    )
    translate_parser.add_argument("text", help="Text to translate")
    _add_translation_options(translate_parser)
    translate_parser.add_argument(
        "--preserve-placeholders",
        action="store_true",
        help="Keep placeholders like {name}, {{count}}, %%s, <b> untranslated"
    )
    translate_parser.add_argument(
        "--check-placeholders",
        action="store_true",
        help="Report segments whose placeholders changed"
    )

    # compare-placeholders command
    compare_parser = subparsers.add_parser(
        "compare-placeholders",
        help="Translate with and without placeholder preservation"
    )
    compare_parser.add_argument("text", help="Text containing placeholders")
    _add_translation_options(compare_parser)

    # translate-json command
    json_parser = subparsers.add_parser(
        "translate-json",
        help="Translate JSON values while keeping keys and structure"
    )
    source_group = json_parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--json", dest="json_text", help="JSON text to translate")
    source_group.add_argument("--file", type=Path, help="JSON file to translate")
    _add_translation_options(json_parser)
    json_parser.add_argument(
        "--preserve-placeholders",
        action="store_true",
        help="Keep placeholders in values untranslated"
    )
    json_parser.add_argument(
        "--output-dir",
        type=Path,
        help="Write one <lang>.json file per language into this directory"
    )

    # health command
    subparsers.add_parser("health", help="Check API health")

    return parser


def build_client(args: argparse.Namespace, logger: Optional[RunLogger] = None) -> Shipi18nClient:
    """Create a client from the environment configuration and CLI overrides."""
    overrides = {}
    if args.api_key:
        overrides["api_key"] = args.api_key
    if args.api_url:
        overrides["api_base_url"] = args.api_url
    if args.timeout is not None:
        overrides["timeout"] = args.timeout

    config = dataclasses.replace(get_config(), **overrides)
    return Shipi18nClient(config, run_logger=logger)


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logger = RunLogger(args.runs_dir) if args.runs_dir else None
    client = build_client(args, logger)

    try:
        if args.command == "translate":
            result = client.translate(
                args.text,
                args.targets,
                source_language=args.source,
                preserve_placeholders=args.preserve_placeholders,
                enable_pluralization=not args.no_pluralization
            )
            print_text_result(result)
            if args.check_placeholders:
                print()
                print_placeholder_issues(find_placeholder_issues(result))

        elif args.command == "compare-placeholders":
            options = {
                "source_language": args.source,
                "enable_pluralization": not args.no_pluralization,
            }
            preserved = client.translate(
                args.text, args.targets, preserve_placeholders=True, **options
            )
            unprotected = client.translate(
                args.text, args.targets, preserve_placeholders=False, **options
            )
            print_comparison(preserved, unprotected)
            print()
            print_placeholder_issues(find_placeholder_issues(unprotected))

        elif args.command == "translate-json":
            if args.file:
                document = read_json_document(args.file)
                stem = args.file.stem
            else:
                document = args.json_text
                stem = None

            result = client.translate_json(
                document,
                args.targets,
                source_language=args.source,
                preserve_placeholders=args.preserve_placeholders,
                enable_pluralization=not args.no_pluralization
            )
            print_json_result(result)

            if args.output_dir:
                written = write_translations(result, args.output_dir, stem=stem)
                print(f"\n✓ Wrote {len(written)} file(s) to {args.output_dir}")
                for path in written:
                    print(f"  {path}")

        elif args.command == "health":
            status = client.health_check()
            if not isinstance(status, dict):
                status = {"status": status}
            print(f"✓ API status: {status.get('status', 'unknown')}")
            if status.get("version"):
                print(f"  Version: {status['version']}")

    except (Shipi18nError, OSError, ValueError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    finally:
        if logger:
            logger.finalize()
            print(f"  Logs: {logger.run_dir}")


if __name__ == "__main__":
    main()
