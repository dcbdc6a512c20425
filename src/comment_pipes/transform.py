import logging
import re
from collections.abc import Iterable, Sequence

from comment_pipes.models import CategorySettings, CategorySummary, MergeRules
from comment_pipes.tables import FrequencyTable

logger = logging.getLogger(__name__)

# Everything except letters, hyphens and apostrophes separates words
NON_WORD_RE = re.compile(r"[^A-Za-z'-]")


class MissingAuthorError(ValueError):
    """A row has comment text for a category but not the required author."""


def tokenize_comment(text: str) -> list[str]:
    """Split comment text into uppercase word tokens.

    Applies transformations:
    1. Replace every character that is not an ASCII letter, hyphen or
       apostrophe with a space
    2. Convert to uppercase
    3. Split on whitespace, dropping empty tokens

    Args:
        text: Raw comment text

    Returns:
        List of uppercase tokens

    Examples:
        >>> tokenize_comment("This guest is clearly crazy, so be careful.")
        ['THIS', 'GUEST', 'IS', 'CLEARLY', 'CRAZY', 'SO', 'BE', 'CAREFUL']
        >>> tokenize_comment("Don't over-book room 12!")
        ["DON'T", 'OVER-BOOK', 'ROOM']
    """
    return NON_WORD_RE.sub(" ", text).upper().split()


class CommentCategory:
    """Word and author tallies for one category of comments.

    Each category owns its tables and rules; nothing is shared between
    categories. Running statistics are kept as incremental means so a
    category never has to hold on to the comments themselves.
    """

    def __init__(
        self,
        name: str,
        text_column: int,
        author_column: int | None = None,
        ignored: Iterable[str] = (),
        rules: MergeRules | None = None,
        merge_plurals: bool = True,
        merge_conjugations: bool = True,
    ):
        self.name = name
        self.text_column = text_column
        self.author_column = author_column
        self.ignored = frozenset(word.strip().upper() for word in ignored)

        self.words = FrequencyTable(
            rules, merge_plurals=merge_plurals, merge_conjugations=merge_conjugations
        )
        self.authors = (
            FrequencyTable(merge_plurals=False, merge_conjugations=False)
            if author_column is not None
            else None
        )

        self.comment_count = 0
        self.longest_comment = 0
        self.average_length = 0.0
        self.highest_word_count = 0
        self.average_word_count = 0.0

    @classmethod
    def from_settings(cls, settings: CategorySettings) -> "CommentCategory":
        return cls(
            name=settings.name,
            text_column=settings.text_column,
            author_column=settings.author_column,
            ignored=settings.ignored,
            rules=settings.merge_rules(),
            merge_plurals=settings.merge_plurals,
            merge_conjugations=settings.merge_conjugations,
        )

    @property
    def tracks_authors(self) -> bool:
        return self.authors is not None

    def process_comment(self, text: str, author: str | None = None) -> None:
        """Count the words of one comment and update the running statistics.

        Ignored words are left out of the word table but still count towards
        the number of words in the comment.

        Args:
            text: The raw comment text
            author: The raw author name, used only if authors are tracked
        """
        self.comment_count += 1

        length = len(text)
        self.longest_comment = max(self.longest_comment, length)
        self.average_length += (length - self.average_length) / self.comment_count

        tokens = tokenize_comment(text)
        for token in tokens:
            if token not in self.ignored:
                self.words.add(token)

        word_count = len(tokens)
        self.highest_word_count = max(self.highest_word_count, word_count)
        self.average_word_count += (
            word_count - self.average_word_count
        ) / self.comment_count

        if self.authors is not None and author:
            self.authors.add(author)

    def sort_by_count(self) -> None:
        """Sort both the word table and the author table by count."""
        self.words.sort_by_count()
        if self.authors is not None:
            self.authors.sort_by_count()

    def summary(self) -> CategorySummary:
        return CategorySummary(
            name=self.name,
            comment_count=self.comment_count,
            average_length=self.average_length,
            longest_comment=self.longest_comment,
            average_word_count=self.average_word_count,
            highest_word_count=self.highest_word_count,
            unique_words=self.words.size(),
            total_words=self.words.sum(),
            words=self.words.ranked(),
            authors=self.authors.ranked() if self.authors is not None else None,
        )


def _cell(row: Sequence[str], index: int) -> str:
    """Return a cell of the row, or an empty string if the row is too short."""
    return row[index] if index < len(row) else ""


def compute_categories(
    rows: Iterable[Sequence[str]],
    categories_settings: list[CategorySettings],
) -> list[CommentCategory]:
    """Feed every row to every configured category and sort the results.

    A row with no text for a category is skipped for that category only.

    Args:
        rows: Rows of raw cells, in file order
        categories_settings: The configured categories

    Returns:
        One CommentCategory per configured category, in configuration order,
        with both tables sorted by count

    Raises:
        MissingAuthorError: If a row has text for an author-tracking category
            but no author
    """
    categories = [CommentCategory.from_settings(s) for s in categories_settings]

    line_number = 0
    for line_number, row in enumerate(rows, start=1):
        for category in categories:
            text = _cell(row, category.text_column)
            if not text:
                continue

            author = None
            if category.author_column is not None:
                author = _cell(row, category.author_column)
                if not author:
                    raise MissingAuthorError(
                        f"Error on line {line_number}: {category.name} comments "
                        "require an author but none was specified."
                    )

            category.process_comment(text, author)

    logger.info(f"Processed {line_number} rows")

    for category in categories:
        category.sort_by_count()
        logger.info(
            f"{category.name}: {category.comment_count} comments, "
            f"{category.words.size()} distinct words"
        )

    return categories
