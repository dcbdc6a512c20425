import dagster as dg
from pydantic import Field

from comment_pipes.config import CONFIG_PATH
from comment_pipes.defs.resources import AnalyticsDB
from comment_pipes.extract import load_directives, read_comment_rows
from comment_pipes.models import AnalyzerSettings, CategorySummary
from comment_pipes.report import render_report
from comment_pipes.transform import compute_categories

# ==============================================================================
# Configuration Domain: Directive file
# ==============================================================================


class DirectiveFileConfig(dg.Config):
    """Configuration for locating the directive file.

    Defaults to XDG_DATA_HOME/comment-pipes/config.cfg, or the path in the
    COMMENT_PIPES_CONFIG environment variable.
    """

    path: str = Field(
        default=str(CONFIG_PATH),
        description="Path of the directive file to configure the analysis with",
    )


@dg.asset
def comment_settings(
    context: dg.AssetExecutionContext, config: DirectiveFileConfig
) -> AnalyzerSettings:
    """Read and validate the directive file.

    If the directive file does not exist, a commented template is written in
    its place and the materialization fails so it can be edited first.
    """
    context.log.info(f"Loading directives from {config.path}")
    settings = load_directives(config.path)

    context.log.info(f"Source file: {settings.source}")
    for category in settings.categories:
        context.log.info(
            f"  {category.name}: text column {category.text_column}, "
            f"author column {category.author_column}"
        )

    return settings


# ==============================================================================
# Comments Domain: Rows and per-category tallies
# ==============================================================================


@dg.asset
def comment_rows(
    context: dg.AssetExecutionContext, comment_settings: AnalyzerSettings
) -> list[list[str]]:
    """Read every row of the comment data file."""
    rows = read_comment_rows(comment_settings.source)
    context.log.info(f"Read {len(rows)} rows from {comment_settings.source}")
    return rows


@dg.asset
def comment_tallies(
    context: dg.AssetExecutionContext,
    comment_settings: AnalyzerSettings,
    comment_rows: list[list[str]],
) -> list[CategorySummary]:
    """Count words and authors for every comment category.

    Every row is fed to every category in file order. Tables are sorted by
    count once all rows have been processed.
    """
    categories = compute_categories(comment_rows, comment_settings.categories)

    summaries = [category.summary() for category in categories]
    for summary in summaries:
        context.log.info(
            f"{summary.name}: {summary.comment_count:,} comments, "
            f"{summary.unique_words:,} unique words, {summary.total_words:,} words"
        )
        if summary.words:
            context.log.info(
                f"  Top 5 words: {[(e.word, e.count) for e in summary.words[:5]]}"
            )

    return summaries


@dg.asset_check(asset=comment_tallies)
def categories_have_comments(
    _: dg.AssetCheckExecutionContext, comment_tallies: list[CategorySummary]
) -> dg.AssetCheckResult:
    """Check that every configured category received at least one comment.

    An empty category usually means a wrong column index in a #TYPE directive.
    """
    empty = [s.name for s in comment_tallies if s.comment_count == 0]
    passed = len(empty) == 0

    return dg.AssetCheckResult(
        passed=passed,
        description=f"All {len(comment_tallies)} categories received comments"
        if passed
        else f"{len(empty)} categories received no comments: {empty}",
        metadata={"category_count": len(comment_tallies), "empty_count": len(empty)},
    )


@dg.asset_check(asset=comment_tallies)
def tallies_consistent(
    _: dg.AssetCheckExecutionContext, comment_tallies: list[CategorySummary]
) -> dg.AssetCheckResult:
    """Check that the ranked tables agree with the category totals."""
    issues = []

    for s in comment_tallies:
        if sum(e.count for e in s.words) != s.total_words:
            issues.append(f"{s.name}: word counts do not add up to {s.total_words}")
        if len(s.words) != s.unique_words:
            issues.append(f"{s.name}: {len(s.words)} ranked words, expected {s.unique_words}")
        counts = [e.count for e in s.words]
        if counts != sorted(counts, reverse=True):
            issues.append(f"{s.name}: words are not sorted by count")

    passed = len(issues) == 0

    return dg.AssetCheckResult(
        passed=passed,
        description=f"All {len(comment_tallies)} categories are consistent"
        if passed
        else "; ".join(issues),
        metadata={"issue_count": len(issues)},
    )


# ==============================================================================
# Output Domain: Text report and analytics database
# ==============================================================================


@dg.asset(io_manager_key="report_io")
def comment_report(
    context: dg.AssetExecutionContext, comment_tallies: list[CategorySummary]
) -> str:
    """Render the plain text report of all categories.

    Stored by the report I/O manager, replacing the previous report.
    """
    report = render_report(comment_tallies)
    context.log.info(f"Rendered report of {len(report.splitlines()):,} lines")
    return report


@dg.asset
def comment_analytics(
    context: dg.AssetExecutionContext,
    analytics_db: AnalyticsDB,
    comment_tallies: list[CategorySummary],
) -> None:
    """Store the category tallies in SQLite.

    Tables: category_summary, word_count (category, rank, word, count) and
    author_count (category, rank, author, count). All three are replaced on
    every materialization.
    """
    context.log.info(f"Storing {len(comment_tallies)} categories to database")
    analytics_db.replace_category_results(comment_tallies)
    context.log.info(f"Stored category results to {analytics_db.db_path}")


@dg.asset_check(asset=comment_analytics)
def analytics_stored_correctly(
    _: dg.AssetCheckExecutionContext,
    analytics_db: AnalyticsDB,
) -> dg.AssetCheckResult:
    """Check that stored word counts add up to the stored totals."""
    with analytics_db.get_connection() as conn:
        cursor = conn.execute(
            """
            SELECT s.category, s.total_words, COALESCE(SUM(w.count), 0)
            FROM category_summary s
            LEFT JOIN word_count w ON w.category = s.category
            GROUP BY s.category, s.total_words
            """
        )
        rows = cursor.fetchall()

    mismatched = [
        f"{category} ({stored} stored, {total} expected)"
        for category, total, stored in rows
        if stored != total
    ]
    passed = len(mismatched) == 0

    return dg.AssetCheckResult(
        passed=passed,
        description=f"Stored {len(rows)} categories correctly"
        if passed
        else f"Word counts do not match totals: {mismatched}",
        metadata={"category_count": len(rows), "mismatched_count": len(mismatched)},
    )
