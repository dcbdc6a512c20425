"""Command line entry point.

Runs the whole analysis in one go, without Dagster:
read the directive file, count every row, write the report and store the
tallies in the analytics database.
"""

import argparse
import logging
import sys
from pathlib import Path

from comment_pipes import db
from comment_pipes.config import CONFIG_PATH, DB_PATH, REPORT_NAME, REPORTS_DIR
from comment_pipes.extract import load_directives, read_comment_rows
from comment_pipes.report import render_report
from comment_pipes.transform import compute_categories

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="comment-pipes",
        description="Count word and author frequencies in categorized comments.",
    )

    p.add_argument(
        "--config",
        default=CONFIG_PATH,
        type=Path,
        help=f"Directive file to read (default: {CONFIG_PATH}).",
    )

    p.add_argument(
        "--report",
        default=REPORTS_DIR / REPORT_NAME,
        type=Path,
        help="Where to write the text report.",
    )

    p.add_argument(
        "--db",
        default=DB_PATH,
        type=Path,
        help="SQLite database to store the tallies in.",
    )

    p.add_argument(
        "--no-db",
        action="store_true",
        help="Only write the text report.",
    )

    return p


def run(config: Path, report: Path, db_path: Path | None) -> None:
    """Run the analysis and write its outputs.

    Raises:
        ValueError: If the directive file or the data is invalid
        OSError: If a file cannot be read or written
    """
    settings = load_directives(config)
    rows = read_comment_rows(settings.source)
    categories = compute_categories(rows, settings.categories)
    summaries = [category.summary() for category in categories]

    report.parent.mkdir(parents=True, exist_ok=True)
    report.write_text(render_report(summaries), encoding="utf-8")
    logger.info(f"Wrote report to {report}")

    if db_path is not None:
        db.replace_category_results(db_path, summaries)
        logger.info(f"Stored category results to {db_path}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        run(args.config, args.report, None if args.no_db else args.db)
    except (ValueError, OSError) as e:
        logger.error(str(e))
        # The report holds the error message in place of the results
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(f"{e}\n", encoding="utf-8")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
