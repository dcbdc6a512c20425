"""Word equivalence matching.

This module decides which already-known word an incoming word should be
counted as. Matching is a pure lookup against a table of known words and a
set of merge rules; nothing here mutates the table.

Resolution order, first hit wins:
1. Configured merges (wildcards, then aliases)
2. Plural and non-plural forms
3. Conjugated and infinitive forms
"""

from collections.abc import Container

from comment_pipes.models import MergeRules

# Short real words that look like plurals of each other
PLURAL_GUARD_WORDS = frozenset({"A", "AS", "ASS", "ASSES", "ASSESS", "I", "IS", "ISS"})


def find_merge_match(word: str, rules: MergeRules) -> str | None:
    """Search the configured merges for a match to this word.

    Wildcards are checked before aliases.

    Args:
        word: The uppercase word to check
        rules: The configured merges

    Returns:
        The canonical word of the first matching merge, or None

    Examples:
        >>> rules = MergeRules(aliases=[("GUEST", "VISITOR")], wildcards=["APOLOG"])
        >>> find_merge_match("VISITOR", rules)
        'GUEST'
        >>> find_merge_match("APOLOGIZED", rules)
        'APOLOG'
    """
    for needle in rules.wildcards:
        if needle in word:
            return needle

    for group in rules.aliases:
        if word in group:
            return group[0]

    return None


def find_plural_match(
    word: str, table: Container[str], rules: MergeRules
) -> str | None:
    """Search the table for a plural or non-plural form of the word.

    Words ending in "IES", "ES" or "S" are first tried without the ending,
    then "Y" is swapped for "IES" and finally "S" and "ES" are appended.
    Every candidate is checked against the table and then against the merges.

    Args:
        word: The uppercase word to check
        table: The words already known
        rules: The configured merges

    Returns:
        The word to count this occurrence as, or None if there is no match.
        A word already in the table is not a match: it needs no rewrite.

    Examples:
        >>> find_plural_match("KITTENS", {"KITTEN"}, MergeRules())
        'KITTEN'
        >>> find_plural_match("PARTY", {"PARTIES"}, MergeRules())
        'PARTIES'
    """
    if word in PLURAL_GUARD_WORDS or word in table:
        return None

    candidates: list[str] = []

    # De-pluralize
    if word.endswith("IES"):
        candidates.append(word[:-3] + "Y")
    if word.endswith("ES"):
        candidates.append(word[:-2])
    if word.endswith("S"):
        candidates.append(word[:-1])

    # Pluralize
    if word.endswith("Y"):
        candidates.append(word[:-1] + "IES")
    candidates.append(word + "S")
    candidates.append(word + "ES")

    for test in candidates:
        if test in table:
            return test
        if merged := find_merge_match(test, rules):
            return merged

    return None


def find_conjugation_match(
    word: str, table: Container[str], rules: MergeRules
) -> str | None:
    """Search the table for a conjugated or infinitive form of the word.

    Known endings are stripped depth first until a stem hits the table or a
    merge. A stem whose own stems all miss has its conjugated forms looked
    up before the next sibling stem is tried, and the word's own conjugated
    forms are looked up last. The search keeps an explicit stack, so long
    words cannot exhaust the interpreter's recursion limit.
    Doubled consonants are understood in both directions, so "RUNNING",
    "RUNNER" and "VETTED" strip to "RUN" and "VET", and "RUN" finds
    "RUNNING".

    Args:
        word: The uppercase word to check
        table: The words already known
        rules: The configured merges

    Returns:
        The word to count this occurrence as, or None if there is no match.
        Unlike find_plural_match, a word already in the table matches itself.

    Examples:
        >>> find_conjugation_match("RUNNING", {"RUN"}, MergeRules())
        'RUN'
        >>> find_conjugation_match("WALK", {"WALKED"}, MergeRules())
        'WALKED'
    """
    if not word:
        return None

    if match := _direct_match(word, table, rules):
        return match

    # Each entry is a word and the stems of it not tried yet
    stack = [(word, iter(_conjugation_stems(word)))]

    while stack:
        current, stems = stack[-1]

        stem = next(stems, None)
        if stem is not None:
            if not stem:
                continue
            if match := _direct_match(stem, table, rules):
                return match
            stack.append((stem, iter(_conjugation_stems(stem))))
            continue

        # All stems of this word missed
        stack.pop()
        for test in _conjugated_forms(current):
            if test in table:
                return test

    return None


def _direct_match(word: str, table: Container[str], rules: MergeRules) -> str | None:
    """Match a word against the table, then against the merges."""
    if word in table:
        return word

    # Checked for stems too, so that stripped stems can hit a merge
    return find_merge_match(word, rules)


def _conjugation_stems(word: str) -> list[str]:
    """List the stems to try for a word, in order."""
    stems: list[str] = []

    # Doubled consonant before ED/ER: VETTED -> VET
    if (
        word.endswith(("ED", "ER"))
        and len(word) >= 5
        and word[-3] == word[-4]
    ):
        stems.append(word[:-3])

    # Doubled consonant before ING: RUNNING -> RUN
    if word.endswith("ING") and len(word) >= 6 and word[-4] == word[-5]:
        stems.append(word[:-4])

    if word.endswith(("IES", "IED")):
        stems.append(word[:-3] + "Y")
    if word.endswith("ING"):
        stems.append(word[:-3])
    if word.endswith(("ED", "ER")):
        stems.append(word[:-2])
    if word.endswith("S"):
        stems.append(word[:-1])

    return stems


def _conjugated_forms(word: str) -> list[str]:
    """List the conjugated forms of a word to look up, in order."""
    forms: list[str] = []

    if word.endswith("Y"):
        forms.append(word[:-1] + "IED")
        forms.append(word[:-1] + "IES")

    forms.extend([word + "S", word + "ED", word + "ING", word + "ER"])

    doubled = word + word[-1]
    forms.extend([doubled + "ED", doubled + "ING", doubled + "ER"])

    return forms


def resolve_word(
    word: str,
    table: Container[str],
    rules: MergeRules,
    merge_plurals: bool = True,
    merge_conjugations: bool = True,
) -> str:
    """Find the canonical word an occurrence of `word` must be counted as.

    Args:
        word: The uppercase word to resolve
        table: The words already known
        rules: The configured merges
        merge_plurals: Whether to try plural matching
        merge_conjugations: Whether to try conjugation matching

    Returns:
        The canonical word. A word that matches nothing is its own canonical
        word.
    """
    if merged := find_merge_match(word, rules):
        return merged

    if merge_plurals and (plural := find_plural_match(word, table, rules)):
        return plural

    if merge_conjugations and (
        conjugation := find_conjugation_match(word, table, rules)
    ):
        return conjugation

    return word
