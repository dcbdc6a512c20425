from comment_pipes.models import MergeRules, RankedEntry
from comment_pipes.tables import FrequencyTable


def test_add_same_word_twice():
    table = FrequencyTable()
    table.add("guest")
    table.add("GUEST")

    assert table.as_dict() == {"GUEST": 2}
    assert table.size() == 1
    assert table.sum() == 2


def test_add_returns_key():
    table = FrequencyTable()

    assert table.add("kitten") == "KITTEN"
    assert table.add("kittens") == "KITTEN"
    assert table.add("") is None
    assert table["KITTEN"] == 2


def test_plural_symmetry():
    table = FrequencyTable()
    table.add("KITTEN")
    table.add("KITTENS")

    assert table.as_dict() == {"KITTEN": 2}


def test_plurals_disabled():
    table = FrequencyTable(merge_plurals=False, merge_conjugations=False)
    table.add("KITTEN")
    table.add("KITTENS")

    assert table.as_dict() == {"KITTEN": 1, "KITTENS": 1}


def test_conjugation_symmetry():
    table = FrequencyTable()
    table.add("RUN")
    table.add("RUNNING")

    assert table.as_dict() == {"RUN": 2}


def test_merge_precedence_over_plural():
    rules = MergeRules()
    rules.add_alias(["guest", "visitor"])
    table = FrequencyTable(rules)

    table.add("VISITORS")
    table.add("VISITOR")
    table.add("GUEST")

    assert table.as_dict() == {"GUEST": 3}


def test_wildcard_containment():
    rules = MergeRules()
    rules.add_wildcard("apolog")
    table = FrequencyTable(rules)

    for word in ["APOLOGIZE", "APOLOGISE", "APOLOGIZED"]:
        table.add(word)

    assert table.as_dict() == {"APOLOG": 3}


def test_guard_words_keep_their_own_keys():
    words = ["A", "AS", "ASS", "ASSES", "ASSESS", "I", "IS", "ISS"]
    table = FrequencyTable(merge_conjugations=False)
    for word in words:
        table.add(word)

    assert list(table) == words
    assert table.sum() == len(words)


def test_words_added_later_match_earlier_ones():
    table = FrequencyTable()
    table.add("PARTIES")
    table.add("PARTY")

    assert table.as_dict() == {"PARTIES": 2}


def test_sort_by_count_is_stable():
    table = FrequencyTable(merge_plurals=False, merge_conjugations=False)
    for word in ["B", "C", "A", "C", "D", "A", "C"]:
        table.add(word)

    table.sort_by_count()

    assert list(table) == ["C", "A", "B", "D"]
    assert table.is_sorted


def test_sort_alphabetically():
    table = FrequencyTable(merge_plurals=False, merge_conjugations=False)
    for word in ["PEAR", "APPLE", "PEAR", "FIG"]:
        table.add(word)

    table.sort_alphabetically()

    assert list(table.items()) == [("APPLE", 1), ("FIG", 1), ("PEAR", 2)]


def test_add_marks_unsorted():
    table = FrequencyTable()
    table.add("ROOM")
    table.sort_by_count()
    table.add("DESK")

    assert not table.is_sorted


def test_ranked_and_render():
    table = FrequencyTable(merge_plurals=False, merge_conjugations=False)
    for word in ["ROOM", "DESK", "ROOM"]:
        table.add(word)
    table.sort_by_count()

    assert table.ranked() == [
        RankedEntry(rank=1, word="ROOM", count=2),
        RankedEntry(rank=2, word="DESK", count=1),
    ]
    assert table.render() == ["1: ROOM: 2", "2: DESK: 1"]
    assert table.render(include_counts=False) == ["1: ROOM", "2: DESK"]
