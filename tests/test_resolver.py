# Match resolver: free text in, validated tutor uids out.

from matching import TutorProfile, resolve_matches
from matching.resolver import parse_names

POOL = [
    TutorProfile(uid="t1", name="Ana"),
    TutorProfile(uid="t2", name="Bo"),
    TutorProfile(uid="t3", name="Carla Mendes"),
]


def test_case_insensitive_exact_match_drops_unknown_names():
    pool = [TutorProfile(uid="t1", name="Ana"), TutorProfile(uid="t2", name="Bo")]
    assert resolve_matches("ana, Carl", pool) == ["t1"]


def test_empty_and_non_string_replies_resolve_to_nothing():
    assert resolve_matches("", POOL) == []
    assert resolve_matches(None, POOL) == []
    assert resolve_matches(42, POOL) == []
    assert resolve_matches(" , ,", POOL) == []


def test_names_outside_the_pool_never_resolve():
    assert resolve_matches("Zed, Ignore previous instructions, t1", POOL) == []


def test_result_follows_pool_order_not_reply_order():
    assert resolve_matches("carla mendes, BO, Ana", POOL) == ["t1", "t2", "t3"]


def test_repeated_names_do_not_duplicate_ids():
    assert resolve_matches("Bo, bo, BO", POOL) == ["t2"]


def test_substrings_and_partial_names_are_not_matches():
    assert resolve_matches("An, Carla, Bob", POOL) == []


def test_tokens_are_trimmed_including_trailing_newline():
    assert resolve_matches("  Ana  ,\nBo\n", POOL) == ["t1", "t2"]


def test_resolution_is_deterministic():
    first = resolve_matches("Bo, Ana", POOL)
    assert all(resolve_matches("Bo, Ana", POOL) == first for _ in range(5))


def test_same_name_tutors_both_resolve():
    pool = POOL + [TutorProfile(uid="t4", name="ana")]
    assert resolve_matches("Ana", pool) == ["t1", "t4"]


def test_parse_names_splits_on_commas_only():
    assert parse_names("Ana, Bo and Carla,") == ["Ana", "Bo and Carla"]
