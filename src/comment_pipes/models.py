"""Data models for the Comment Pipes project.

This module contains dataclasses representing the core domain objects, and
the pydantic models the directive file is validated into.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field


@dataclass
class MergeRules:
    """User-declared merges for a single word table.

    Attributes:
        aliases: Alias groups. Every member counts as the group's first word.
        wildcards: Needles. Any word containing a needle counts as the needle.
    """
    aliases: list[tuple[str, ...]] = field(default_factory=list)
    wildcards: list[str] = field(default_factory=list)

    def add_alias(self, words: list[str]) -> None:
        """Register an alias group. The first word is the canonical one."""
        self.aliases.append(tuple(w.strip().upper() for w in words))

    def add_wildcard(self, needle: str) -> None:
        """Register a wildcard needle."""
        self.wildcards.append(needle.strip().upper())


@dataclass
class RankedEntry:
    """A word or author in a sorted frequency table.

    Attributes:
        rank: 1-indexed position in the table
        word: The canonical (uppercase) word
        count: Number of occurrences counted under this word
    """
    rank: int
    word: str
    count: int


@dataclass
class CategorySummary:
    """Final statistics for one comment category.

    Attributes:
        name: The category name (uppercase)
        comment_count: Number of comments processed
        average_length: Mean raw comment length in characters
        longest_comment: Length of the longest raw comment
        average_word_count: Mean number of words per comment
        highest_word_count: Largest number of words in a single comment
        unique_words: Number of distinct canonical words
        total_words: Total number of counted word occurrences
        words: The ranked word table
        authors: The ranked author table (None if authors are not tracked)
    """
    name: str
    comment_count: int
    average_length: float
    longest_comment: int
    average_word_count: float
    highest_word_count: int
    unique_words: int
    total_words: int
    words: list[RankedEntry]
    authors: list[RankedEntry] | None = None

    @property
    def unique_authors(self) -> int | None:
        return len(self.authors) if self.authors is not None else None


class CategorySettings(BaseModel):
    """Configuration of a single comment category, as read from #TYPE and friends."""

    name: str = Field(description="Category name, uppercased")
    text_column: int = Field(ge=0, description="Zero-based column of the comment text")
    author_column: int | None = Field(
        default=None,
        ge=0,
        description="Zero-based column of the author name, None if not tracked",
    )
    ignored: list[str] = Field(default_factory=list)
    aliases: list[list[str]] = Field(default_factory=list)
    wildcards: list[str] = Field(default_factory=list)
    merge_plurals: bool = True
    merge_conjugations: bool = True

    def merge_rules(self) -> MergeRules:
        rules = MergeRules()
        for group in self.aliases:
            rules.add_alias(group)
        for needle in self.wildcards:
            rules.add_wildcard(needle)
        return rules


class AnalyzerSettings(BaseModel):
    """Everything a directive file configures."""

    source: Path
    categories: list[CategorySettings] = Field(default_factory=list)
