"""
Command line entry point.

Usage:
    resume-ingest resume.pdf
    resume-ingest resume.docx --text-only
"""

import argparse
import json
import sys
from typing import List, Optional

from resume_ingest.config.settings import settings
from resume_ingest.core.exceptions import ExtractionError
from resume_ingest.plugins.resume_parser_plugin.extractor import extract_text
from resume_ingest.plugins.resume_parser_plugin.parser import parse_resume_text
from resume_ingest.utils.logging import configure_logging, get_structured_logger

logger = get_structured_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-ingest",
        description="Extract a structured resume draft from a PDF, Word or text file",
    )
    parser.add_argument("path", help="Resume file (.pdf, .docx or .txt)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help=f"Set logging level (default: {settings.log_level})",
    )
    parser.add_argument(
        "--text-only",
        action="store_true",
        help="Print the extracted plain text instead of the parsed draft",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or settings.log_level)

    try:
        text = extract_text(args.path)
    except ExtractionError as e:
        logger.error("Extraction failed", path=args.path, error=str(e))
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if args.text_only:
        print(text)
        return 0

    draft = parse_resume_text(text)
    print(json.dumps(draft.model_dump(by_alias=True), indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
