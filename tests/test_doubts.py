# Doubt creation, listing and the tutor acceptance tracker.

import pytest

from conftest import add_user
from doubts import accept_doubt, create_doubt, get_doubt, list_doubts, list_learner_doubts
from errors import Forbidden, NotFound, ValidationFailed


def _create(store, learner, subject="Calculus", title="Limits", description="What is lim 1/x?"):
    return create_doubt(store, learner, title=title, description=description, subject=subject)


def test_create_doubt_stores_empty_tracking_lists(store, learner):
    doubt = _create(store, learner)

    stored = store.get("doubts", doubt["id"])
    assert stored["uid"] == "s1"
    assert stored["name"] == "Dee"
    assert stored["recommendedTutors"] == []
    assert stored["acceptedTutors"] == []
    assert stored["createdAt"]


def test_create_doubt_requires_all_fields(store, learner):
    with pytest.raises(ValidationFailed) as excinfo:
        _create(store, learner, title="   ")
    assert excinfo.value.reason == "missing_fields"


def test_tutors_cannot_post_doubts(store, tutors):
    with pytest.raises(Forbidden) as excinfo:
        _create(store, tutors["ana"])
    assert excinfo.value.reason == "not_learner"


def test_subject_must_be_one_of_the_learners(store, learner):
    with pytest.raises(ValidationFailed) as excinfo:
        _create(store, learner, subject="History")
    assert excinfo.value.reason == "unknown_subject"


def test_learner_without_subjects_may_pick_any(store):
    newcomer = add_user(store, "s2", "Eli", "Learner")
    assert _create(store, newcomer, subject="History")["subject"] == "History"


def test_accept_adds_tutor_once(store, tutors, learner):
    doubt_id = _create(store, learner)["id"]

    first = accept_doubt(store, tutors["ana"], doubt_id)
    second = accept_doubt(store, tutors["ana"], doubt_id)

    assert first["accepted"] is True
    assert second["accepted"] is False
    assert second["doubt"]["acceptedTutors"] == ["t1"]


def test_accept_requires_matching_subject(store, tutors, learner):
    doubt_id = _create(store, learner, subject="Calculus")["id"]

    with pytest.raises(Forbidden) as excinfo:
        accept_doubt(store, tutors["bo"], doubt_id)
    assert excinfo.value.reason == "not_qualified"
    assert store.get("doubts", doubt_id)["acceptedTutors"] == []


def test_learners_cannot_accept(store, learner):
    other = add_user(store, "s2", "Eli", "Student", ["Calculus"])
    doubt_id = _create(store, learner)["id"]

    with pytest.raises(Forbidden):
        accept_doubt(store, other, doubt_id)


def test_accept_is_independent_of_recommendations(store, tutors, learner):
    doubt_id = _create(store, learner, subject="Physics")["id"]
    store.update("doubts", doubt_id, {"recommendedTutors": ["t1"]})

    result = accept_doubt(store, tutors["bo"], doubt_id)

    assert result["doubt"]["acceptedTutors"] == ["t2"]
    assert result["doubt"]["recommendedTutors"] == ["t1"]


def test_accept_unknown_doubt(store, tutors):
    with pytest.raises(NotFound):
        accept_doubt(store, tutors["ana"], "nope")


def test_get_doubt_fills_missing_lists(store):
    store.insert("doubts", {"uid": "s1", "subject": "Calculus"}, doc_id="legacy")

    doubt = get_doubt(store, "legacy")

    assert doubt["recommendedTutors"] == []
    assert doubt["acceptedTutors"] == []


def test_list_doubts_labels_tutors_and_flags_acceptance(store, tutors, learner):
    calculus = _create(store, learner, subject="Calculus")["id"]
    _create(store, learner, subject="Physics")
    store.update("doubts", calculus, {"recommendedTutors": ["t1", "gone"]})

    items = list_doubts(store, tutors["ana"], subject="Calculus")

    assert [item["id"] for item in items] == [calculus]
    assert items[0]["recommendedTutorNames"] == ["Ana", "Tutor ID: gone"]
    assert items[0]["canAccept"] is True

    accept_doubt(store, tutors["ana"], calculus)
    items = list_doubts(store, tutors["ana"], subject="Calculus")
    assert items[0]["canAccept"] is False
    assert items[0]["acceptedTutorNames"] == ["Ana"]


def test_list_doubts_without_filter_returns_everything(store, tutors, learner):
    _create(store, learner, subject="Calculus")
    _create(store, learner, subject="Physics")

    items = list_doubts(store, tutors["bo"])

    assert sorted(item["subject"] for item in items) == ["Calculus", "Physics"]
    assert [item["canAccept"] for item in items if item["subject"] == "Physics"] == [True]
    assert [item["canAccept"] for item in items if item["subject"] == "Calculus"] == [False]


def test_list_learner_doubts_only_returns_own(store, learner):
    other = add_user(store, "s2", "Eli", "Student", ["Calculus"])
    mine = _create(store, learner)["id"]
    _create(store, other)

    assert [item["id"] for item in list_learner_doubts(store, learner)] == [mine]


def test_accept_on_legacy_doubt_with_null_list(store, tutors):
    store.insert("doubts", {"uid": "s1", "subject": "Calculus", "acceptedTutors": None}, doc_id="legacy")

    result = accept_doubt(store, tutors["ana"], "legacy")

    assert result["accepted"] is True
    assert store.get("doubts", "legacy")["acceptedTutors"] == ["t1"]
