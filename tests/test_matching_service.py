# Matching pipeline end to end against the in-memory store.

from contextlib import contextmanager

import pytest

from conftest import StubLLM, add_user
from errors import NotFound, ValidationFailed
from identity import AuthenticatedUser, public_profile
from matching import service as matching_service
from matching.repository import load_candidate_pool
from matching.service import handle_match_doubt, run_match_in_background


def _post_doubt(store, doubt_id="d1", subject="Calculus", description="Limits at infinity", **extra):
    data = {
        "uid": "s1",
        "subject": subject,
        "description": description,
        "recommendedTutors": [],
        "acceptedTutors": [],
    }
    data.update(extra)
    store.insert("doubts", data, doc_id=doubt_id)
    return doubt_id


def test_resolved_ids_are_persisted(store, tutors):
    _post_doubt(store)
    llm = StubLLM("Ana")

    matched = handle_match_doubt(store, "d1", subject="Calculus", description="Limits", llm_client=llm)

    assert matched == ["t1"]
    assert store.get("doubts", "d1")["recommendedTutors"] == ["t1"]
    assert "Subject: Calculus" in llm.prompts[0]
    assert "Description: Limits" in llm.prompts[0]


def test_only_pool_members_are_recommended(store, tutors):
    add_user(store, "s9", "Carl", "Student", ["Calculus"])
    _post_doubt(store)

    matched = handle_match_doubt(store, "d1", llm_client=StubLLM("Carl, bo, Zed"))

    assert matched == ["t2"]


def test_rerun_replaces_previous_recommendations(store, tutors):
    _post_doubt(store, recommendedTutors=["t1", "t2"])

    handle_match_doubt(store, "d1", llm_client=StubLLM("Bo"))
    assert store.get("doubts", "d1")["recommendedTutors"] == ["t2"]

    handle_match_doubt(store, "d1", llm_client=StubLLM(""))
    assert store.get("doubts", "d1")["recommendedTutors"] == []


def test_same_reply_gives_same_result(store, tutors):
    _post_doubt(store)
    first = handle_match_doubt(store, "d1", llm_client=StubLLM("Bo, Ana"))
    second = handle_match_doubt(store, "d1", llm_client=StubLLM("Bo, Ana"))

    assert first == second == ["t1", "t2"]


def test_other_doubt_fields_are_untouched(store, tutors):
    _post_doubt(store, title="Help", acceptedTutors=["t2"])

    handle_match_doubt(store, "d1", llm_client=StubLLM("Ana"))

    doubt = store.get("doubts", "d1")
    assert doubt["title"] == "Help"
    assert doubt["acceptedTutors"] == ["t2"]
    assert doubt["subject"] == "Calculus"


def test_empty_pool_skips_the_matcher(store):
    _post_doubt(store, recommendedTutors=["stale"])
    llm = StubLLM("Ana")

    assert handle_match_doubt(store, "d1", llm_client=llm) == []
    assert llm.prompts == []
    assert store.get("doubts", "d1")["recommendedTutors"] == []


def test_missing_backend_yields_no_matches(store, tutors, monkeypatch):
    monkeypatch.setattr(matching_service, "create_matching_llm_client", lambda: None)
    _post_doubt(store)

    assert handle_match_doubt(store, "d1") == []
    assert store.get("doubts", "d1")["recommendedTutors"] == []


def test_stored_fields_fill_in_missing_arguments(store, tutors):
    _post_doubt(store, subject="Physics", description="Projectile motion")
    llm = StubLLM("Bo")

    handle_match_doubt(store, "d1", llm_client=llm)

    assert "Subject: Physics" in llm.prompts[0]
    assert "Description: Projectile motion" in llm.prompts[0]


def test_unknown_doubt_is_not_found_before_calling_the_matcher(store, tutors):
    llm = StubLLM("Ana")

    with pytest.raises(NotFound) as excinfo:
        handle_match_doubt(store, "missing", subject="Calculus", description="x", llm_client=llm)

    assert excinfo.value.reason == "doubt_not_found"
    assert llm.prompts == []


def test_blank_doubt_id_is_rejected(store):
    with pytest.raises(ValidationFailed) as excinfo:
        handle_match_doubt(store, "  ")
    assert excinfo.value.reason == "missing_doubt_id"


def test_candidate_pool_contains_only_tutors(store, tutors, learner):
    pool = load_candidate_pool(store)

    assert [tutor.uid for tutor in pool] == ["t1", "t2"]
    assert pool[0].subjects == ("Calculus", "Algebra")


def test_document_id_wins_over_stale_uid_field(store):
    store.insert("users", {"uid": "stale", "name": "Cy", "role": "Tutor"}, doc_id="t9")

    assert [tutor.uid for tutor in load_candidate_pool(store)] == ["t9"]
    assert AuthenticatedUser.from_document(store.get("users", "t9")).uid == "t9"
    assert public_profile(store.get("users", "t9"))["uid"] == "t9"


def test_background_run_commits_through_opener(store, tutors):
    _post_doubt(store)
    opened = []

    @contextmanager
    def _open():
        opened.append(True)
        yield store

    assert run_match_in_background(_open, "d1", llm_client=StubLLM("Ana")) == ["t1"]
    assert opened == [True]
    assert store.get("doubts", "d1")["recommendedTutors"] == ["t1"]


def test_background_run_swallows_failures(store, tutors):
    class ExplodingLLM(StubLLM):
        def complete(self, prompt):
            raise RuntimeError("boom")

    _post_doubt(store)

    @contextmanager
    def _open():
        yield store

    assert run_match_in_background(_open, "d1", llm_client=ExplodingLLM()) == []
    assert run_match_in_background(_open, "missing", llm_client=StubLLM("Ana")) == []
    assert store.get("doubts", "d1")["recommendedTutors"] == []
