import sqlite3
from pathlib import Path

from comment_pipes.models import CategorySummary

CATEGORY_SUMMARY_TABLE = """
    CREATE TABLE IF NOT EXISTS category_summary (
        category TEXT PRIMARY KEY NOT NULL,
        comment_count INTEGER NOT NULL,
        average_length REAL NOT NULL,
        longest_comment INTEGER NOT NULL,
        average_word_count REAL NOT NULL,
        highest_word_count INTEGER NOT NULL,
        unique_words INTEGER NOT NULL,
        total_words INTEGER NOT NULL,
        unique_authors INTEGER
    )
"""

WORD_COUNT_TABLE = """
    CREATE TABLE IF NOT EXISTS word_count (
        category TEXT NOT NULL,
        rank INTEGER NOT NULL,
        word TEXT NOT NULL,
        count INTEGER NOT NULL,
        PRIMARY KEY (category, word)
    )
"""

AUTHOR_COUNT_TABLE = """
    CREATE TABLE IF NOT EXISTS author_count (
        category TEXT NOT NULL,
        rank INTEGER NOT NULL,
        author TEXT NOT NULL,
        count INTEGER NOT NULL,
        PRIMARY KEY (category, author)
    )
"""


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Get a connection to the database.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(path)


def ensure_tables(db_path: str | Path) -> None:
    """Ensure the category_summary, word_count and author_count tables exist.

    Args:
        db_path: Path to the SQLite database file
    """
    with get_connection(db_path) as conn:
        conn.execute(CATEGORY_SUMMARY_TABLE)
        conn.execute(WORD_COUNT_TABLE)
        conn.execute(AUTHOR_COUNT_TABLE)
        conn.commit()


def replace_category_results(
    db_path: str | Path, summaries: list[CategorySummary]
) -> None:
    """Replace all category results in the database.

    Args:
        db_path: Path to the SQLite database file
        summaries: List of CategorySummary objects

    This atomically replaces the contents of all three tables.
    """
    ensure_tables(db_path)

    with get_connection(db_path) as conn:
        conn.execute("DELETE FROM category_summary")
        conn.execute("DELETE FROM word_count")
        conn.execute("DELETE FROM author_count")

        conn.executemany(
            """
            INSERT INTO category_summary (
                category, comment_count, average_length, longest_comment,
                average_word_count, highest_word_count, unique_words,
                total_words, unique_authors
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    s.name,
                    s.comment_count,
                    s.average_length,
                    s.longest_comment,
                    s.average_word_count,
                    s.highest_word_count,
                    s.unique_words,
                    s.total_words,
                    s.unique_authors,
                )
                for s in summaries
            ],
        )

        conn.executemany(
            "INSERT INTO word_count (category, rank, word, count) VALUES (?, ?, ?, ?)",
            [(s.name, e.rank, e.word, e.count) for s in summaries for e in s.words],
        )

        conn.executemany(
            "INSERT INTO author_count (category, rank, author, count) VALUES (?, ?, ?, ?)",
            [
                (s.name, e.rank, e.word, e.count)
                for s in summaries
                if s.authors is not None
                for e in s.authors
            ],
        )
        conn.commit()
