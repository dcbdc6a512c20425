from comment_pipes.matching import (
    PLURAL_GUARD_WORDS,
    find_conjugation_match,
    find_merge_match,
    find_plural_match,
    resolve_word,
)
from comment_pipes.models import MergeRules


def test_merge_alias_returns_first_member():
    rules = MergeRules()
    rules.add_alias(["guest", " visitor", "patron "])

    assert find_merge_match("VISITOR", rules) == "GUEST"
    assert find_merge_match("PATRON", rules) == "GUEST"
    assert find_merge_match("GUEST", rules) == "GUEST"
    assert find_merge_match("VISITORS", rules) is None


def test_merge_wildcard_checked_before_alias():
    rules = MergeRules(aliases=[("SORRY", "APOLOGY")], wildcards=["APOLOG"])

    assert find_merge_match("APOLOGY", rules) == "APOLOG"
    assert find_merge_match("SORRY", rules) == "SORRY"


def test_plural_strips_endings():
    rules = MergeRules()

    assert find_plural_match("KITTENS", {"KITTEN"}, rules) == "KITTEN"
    assert find_plural_match("BOXES", {"BOX"}, rules) == "BOX"
    assert find_plural_match("PARTIES", {"PARTY"}, rules) == "PARTY"


def test_plural_adds_endings():
    rules = MergeRules()

    assert find_plural_match("KITTEN", {"KITTENS"}, rules) == "KITTENS"
    assert find_plural_match("BOX", {"BOXES"}, rules) == "BOXES"
    assert find_plural_match("PARTY", {"PARTIES"}, rules) == "PARTIES"


def test_plural_existing_word_is_not_a_match():
    assert find_plural_match("KITTEN", {"KITTEN", "KITTENS"}, MergeRules()) is None


def test_plural_checks_merges_of_candidates():
    rules = MergeRules(aliases=[("GUEST", "VISITOR")])

    assert find_plural_match("VISITORS", set(), rules) == "GUEST"


def test_plural_guard_words_never_rewrite():
    table = {"A", "AS", "ASS", "ASSES", "ASSESS", "I", "IS", "ISS", "ISSES", "IES"}
    rules = MergeRules(aliases=[("ASSE", "ASSESSMENT")])

    for word in PLURAL_GUARD_WORDS:
        assert find_plural_match(word, table - {word}, rules) is None


def test_conjugation_doubled_consonant():
    rules = MergeRules()

    assert find_conjugation_match("RUNNING", {"RUN"}, rules) == "RUN"
    assert find_conjugation_match("RUNNER", {"RUN"}, rules) == "RUN"
    assert find_conjugation_match("VETTED", {"VET"}, rules) == "VET"


def test_conjugation_strips_endings_recursively():
    rules = MergeRules()

    assert find_conjugation_match("WALKED", {"WALK"}, rules) == "WALK"
    assert find_conjugation_match("WALKING", {"WALK"}, rules) == "WALK"
    assert find_conjugation_match("WALKERS", {"WALK"}, rules) == "WALK"
    assert find_conjugation_match("CARRIED", {"CARRY"}, rules) == "CARRY"


def test_conjugation_forward_forms():
    rules = MergeRules()

    assert find_conjugation_match("WALK", {"WALKED"}, rules) == "WALKED"
    assert find_conjugation_match("WALK", {"WALKING"}, rules) == "WALKING"
    assert find_conjugation_match("RUN", {"RUNNING"}, rules) == "RUNNING"
    assert find_conjugation_match("CARRY", {"CARRIED"}, rules) == "CARRIED"


def test_conjugation_forward_er_looks_up_word_plus_er():
    rules = MergeRules()

    assert find_conjugation_match("WALK", {"WALKER"}, rules) == "WALKER"
    # A literal "ER" entry must not pull unrelated words in
    assert find_conjugation_match("WALK", {"ER"}, rules) is None


def test_conjugation_stem_hits_merge():
    rules = MergeRules(aliases=[("GUEST", "VISIT")])

    assert find_conjugation_match("VISITING", set(), rules) == "GUEST"


def test_conjugation_no_match():
    assert find_conjugation_match("TABLE", {"CHAIR"}, MergeRules()) is None
    assert find_conjugation_match("", {"CHAIR"}, MergeRules()) is None


def test_resolve_merge_before_plural():
    rules = MergeRules(aliases=[("GUEST", "VISITOR")])

    assert resolve_word("VISITORS", {"VISITORS"}, rules) == "VISITORS"
    assert resolve_word("VISITORS", set(), rules) == "GUEST"


def test_resolve_respects_flags():
    table = {"KITTEN"}
    rules = MergeRules()

    assert resolve_word("KITTENS", table, rules) == "KITTEN"
    assert resolve_word("KITTENS", table, rules, merge_plurals=False) == "KITTEN"
    assert (
        resolve_word("KITTENS", table, rules, merge_plurals=False, merge_conjugations=False)
        == "KITTENS"
    )


def test_resolve_new_word_is_its_own_key():
    assert resolve_word("TABLE", set(), MergeRules()) == "TABLE"


def test_conjugation_long_word_does_not_exhaust_stack():
    rules = MergeRules()

    assert find_conjugation_match("S" * 2500, {"GREAT"}, rules) is None
    assert find_conjugation_match("RUN" + "ING" * 600, {"RUN"}, rules) == "RUN"


def test_long_word_counts_as_new_word():
    word = "S" * 2500

    assert resolve_word(word, {"GREAT"}, MergeRules()) == word


def test_conjugation_search_order():
    rules = MergeRules()

    # The doubled-consonant stem is tried before the plain one
    assert find_conjugation_match("HOPPED", {"HOP", "HOPP"}, rules) == "HOP"
    # Forms of a stem are looked up before its next sibling stem
    assert find_conjugation_match("HOPPED", {"HOPS", "HOPP"}, rules) == "HOPS"
    # Stems are tried before the word's own forms
    assert find_conjugation_match("WALKS", {"WALK", "WALKSED"}, rules) == "WALK"
    assert find_conjugation_match("WALKS", {"WALKSED"}, rules) == "WALKSED"
