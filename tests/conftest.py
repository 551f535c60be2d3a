# Pytest fixtures. Run: pytest tests/ -v
# Core components run against an in-memory document store and a stub
# matcher; no Postgres or network access is needed.

import copy
import uuid
from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from identity import AuthenticatedUser
from matching import MatchingLLMClient
from peertutor import app
from peertutor.dependencies import get_llm_client, get_store_opener


class InMemoryDocumentStore:
    """Dict-backed stand-in for ``docstore.DocumentStore``."""

    def __init__(self):
        self.collections = {}

    def _collection(self, name):
        return self.collections.setdefault(name, {})

    @staticmethod
    def _doc(doc_id, data):
        doc = copy.deepcopy(data)
        doc["id"] = doc_id
        return doc

    def get(self, collection, doc_id):
        data = self._collection(collection).get(doc_id)
        return self._doc(doc_id, data) if data is not None else None

    def query(self, collection, field=None, value=None, *, order_by=None, descending=False):
        docs = [
            self._doc(doc_id, data)
            for doc_id, data in self._collection(collection).items()
            if field is None or (field in data and data[field] == value)
        ]
        if order_by:
            docs = sorted(docs, key=lambda d: str(d.get(order_by) or ""), reverse=descending)
        return docs

    def insert(self, collection, data, *, doc_id=None):
        items = self._collection(collection)
        new_id = doc_id or uuid.uuid4().hex
        if new_id in items:
            return None
        items[new_id] = {k: copy.deepcopy(v) for k, v in data.items() if k != "id"}
        return new_id

    def update(self, collection, doc_id, fields):
        items = self._collection(collection)
        if doc_id not in items:
            return False
        items[doc_id].update({k: copy.deepcopy(v) for k, v in fields.items() if k != "id"})
        return True

    def delete(self, collection, doc_id):
        data = self._collection(collection).pop(doc_id, None)
        return self._doc(doc_id, data) if data is not None else None

    def add_to_set(self, collection, doc_id, field, value):
        items = self._collection(collection)
        if doc_id not in items:
            return None
        current = items[doc_id].get(field)
        if not isinstance(current, list):
            current = items[doc_id][field] = []
        if value in current:
            return False
        current.append(value)
        return True


class TransactionalOpener:
    """Store opener with snapshot sessions over a committed store.

    Each session works on a private copy; the documents it changed are
    published to ``committed`` only when the session exits cleanly.
    """

    def __init__(self, committed):
        self.committed = committed
        self.events = []

    @contextmanager
    def __call__(self):
        self.events.append("open")
        snapshot = copy.deepcopy(self.committed.collections)
        session = InMemoryDocumentStore()
        session.collections = copy.deepcopy(snapshot)
        yield session
        for name in set(snapshot) | set(session.collections):
            before = snapshot.get(name, {})
            after = session.collections.get(name, {})
            target = self.committed._collection(name)
            for doc_id in set(before) | set(after):
                if before.get(doc_id) == after.get(doc_id):
                    continue
                if doc_id in after:
                    target[doc_id] = copy.deepcopy(after[doc_id])
                else:
                    target.pop(doc_id, None)
        self.events.append("commit")


class StubLLM(MatchingLLMClient):
    """Completion client returning a canned reply and recording prompts."""

    def __init__(self, reply=""):
        self.reply = reply
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        return self.reply


def add_user(store, uid, name, role="Student", subjects=(), bio=""):
    store.insert(
        "users",
        {"uid": uid, "name": name, "role": role, "subjects": list(subjects), "bio": bio},
        doc_id=uid,
    )
    return AuthenticatedUser.from_document(store.get("users", uid))


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def llm():
    return StubLLM()


@pytest.fixture
def tutors(store):
    return {
        "ana": add_user(store, "t1", "Ana", "Tutor", ["Calculus", "Algebra"], "Loves proofs"),
        "bo": add_user(store, "t2", "Bo", "Tutor", ["Physics"], "Mechanics TA"),
    }


@pytest.fixture
def learner(store):
    return add_user(store, "s1", "Dee", "Student", ["Calculus", "Physics"])


@pytest.fixture
def client(store, llm):
    @contextmanager
    def _open():
        yield store

    app.dependency_overrides[get_store_opener] = lambda: _open
    app.dependency_overrides[get_llm_client] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(uid):
    return {"X-User-Id": uid}
