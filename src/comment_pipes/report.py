"""Plain text report of the final category tallies."""

from comment_pipes.models import CategorySummary, RankedEntry


def render_ranked(entries: list[RankedEntry], include_counts: bool = True) -> list[str]:
    """Render ranked entries as "rank: WORD[: count]" lines."""
    return [
        f"{e.rank}: {e.word}: {e.count}" if include_counts else f"{e.rank}: {e.word}"
        for e in entries
    ]


def render_category(summary: CategorySummary) -> list[str]:
    """Render the report block of a single category.

    Averages are truncated to whole numbers.
    """
    lines = [
        f"Comment Type: {summary.name}",
        f"Total number of comments: {summary.comment_count:,}",
        f"Average length: {int(summary.average_length):,}",
        f"Longest comment: {summary.longest_comment:,} characters.",
        f"Average word count: {int(summary.average_word_count):,}",
        f"Highest word count: {summary.highest_word_count:,}",
        "",
    ]

    if summary.authors is not None:
        lines += [
            "-- AUTHORS --",
            "",
            f"Total unique authors: {len(summary.authors):,}",
            "",
            *render_ranked(summary.authors),
            "",
        ]

    lines += [
        "-- WORDS --",
        "",
        f"Total unique words: {summary.unique_words:,}",
        f"Total words: {summary.total_words:,}",
        "",
        *render_ranked(summary.words),
    ]

    return lines


def render_report(summaries: list[CategorySummary]) -> str:
    """Render the full report, one block per category separated by blank lines."""
    blocks = ["\n".join(render_category(summary)) for summary in summaries]
    return "\n\n".join(blocks) + "\n"
