import argparse
import json
import sys

from config import load_settings, configure_logging
from nodes.extractor import extract_fields


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract property address, buyer, seller and date from a sentence.",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Sentence to extract from (read from stdin when omitted)",
    )
    parser.add_argument(
        "--no-spans",
        action="store_true",
        help="Omit the debug character spans from the output",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    configure_logging(settings)

    text = args.text if args.text is not None else sys.stdin.read()
    result = extract_fields(text)

    print(json.dumps(result.to_dict(include_spans=not args.no_spans), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
