"""Frequency tables of canonical words."""

from collections.abc import Iterator

from comment_pipes.matching import resolve_word
from comment_pipes.models import MergeRules, RankedEntry
from comment_pipes.report import render_ranked


class FrequencyTable:
    """Counts occurrences of words, merging equivalent words under one key.

    Entries keep the order they were first seen in until the table is
    sorted. Adding a word after sorting marks the table unsorted again.
    """

    def __init__(
        self,
        rules: MergeRules | None = None,
        merge_plurals: bool = True,
        merge_conjugations: bool = True,
    ):
        self.rules = rules if rules is not None else MergeRules()
        self.merge_plurals = merge_plurals
        self.merge_conjugations = merge_conjugations
        self._counts: dict[str, int] = {}
        self._sorted = False

    def resolve(self, word: str) -> str:
        """Return the key an occurrence of `word` would be counted under."""
        return resolve_word(
            word.upper(),
            self._counts,
            self.rules,
            merge_plurals=self.merge_plurals,
            merge_conjugations=self.merge_conjugations,
        )

    def add(self, word: str) -> str | None:
        """Count one occurrence of a word.

        Returns:
            The key the occurrence was counted under, or None for an empty word
        """
        if not word:
            return None

        key = self.resolve(word)
        self._counts[key] = self._counts.get(key, 0) + 1
        self._sorted = False
        return key

    def sort_by_count(self) -> None:
        """Sort entries by descending count. Ties keep their current order."""
        self._counts = dict(sorted(self._counts.items(), key=lambda item: -item[1]))
        self._sorted = True

    def sort_alphabetically(self) -> None:
        """Sort entries by ascending code-point order of the words."""
        self._counts = dict(sorted(self._counts.items()))
        self._sorted = True

    @property
    def is_sorted(self) -> bool:
        """True if nothing was added since the last sort."""
        return self._sorted

    def sum(self) -> int:
        """Total occurrences of all words."""
        return sum(self._counts.values())

    def size(self) -> int:
        """Number of distinct words."""
        return len(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, word: object) -> bool:
        return word in self._counts

    def __getitem__(self, word: str) -> int:
        return self._counts[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def items(self):
        return self._counts.items()

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def ranked(self) -> list[RankedEntry]:
        """List the entries in their current order, ranked from 1."""
        return [
            RankedEntry(rank=rank, word=word, count=count)
            for rank, (word, count) in enumerate(self._counts.items(), start=1)
        ]

    def render(self, include_counts: bool = True) -> list[str]:
        """Render the entries as "rank: WORD[: count]" lines."""
        return render_ranked(self.ranked(), include_counts)
