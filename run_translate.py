#!/usr/bin/env python3
"""
CLI script to translate a text or a file.

Examples:
  run_translate.py --text "Hello, World!" --from en --to fr
  run_translate.py --file notes.txt --to de --provider deepl
  run_translate.py --text Haus --from german --to english -p linguee --json

Defaults for provider, languages, proxy and keys come from the environment
or a .env file (see html_translate/config.py).
"""

import argparse
import sys

from dotenv import load_dotenv
load_dotenv()

from html_translate.config import load_settings
from html_translate.exceptions import HTMLTranslateError
from html_translate.logger import setup_logger
from html_translate.main import translate_file, translate_text
from html_translate.translator import TranslatorProvider


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate text with web translation services")
    parser.add_argument("--from", "-f", dest="source", help="Source language (name or code)")
    parser.add_argument("--to", "-t", dest="target", help="Target language (name or code)")
    parser.add_argument(
        "--provider", "-p",
        choices=[p.value for p in TranslatorProvider],
        help="Translation provider"
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--text", help="Text to translate")
    group.add_argument("--file", help="File to translate")
    parser.add_argument("--output-dir", "-o", help="Where to write the translated file")
    parser.add_argument("--json", action="store_true", help="Print a JSON record instead of plain text")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    setup_logger(level="DEBUG" if args.verbose else settings.log_level)

    try:
        if args.file:
            output = translate_file(
                args.file,
                provider=args.provider,
                source=args.source,
                target=args.target,
                output_dir=args.output_dir,
                settings=settings,
            )
            print(f"Translated file named {output.name}")
            return 0

        record = translate_text(
            args.text,
            provider=args.provider,
            source=args.source,
            target=args.target,
            settings=settings,
        )
    except (HTMLTranslateError, OSError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(record.model_dump_json(indent=2))
    else:
        print(record.translated)
    return 0


if __name__ == "__main__":
    sys.exit(main())
