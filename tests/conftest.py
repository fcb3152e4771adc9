import copy
import re
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from classcart_api.app.core.config import Settings
from classcart_api.app.core.db import LESSONS, ORDERS, DataStore
from classcart_api.app.main import create_app


def _match_value(value, condition):
    if isinstance(condition, dict):
        if "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            return isinstance(value, str) and re.search(condition["$regex"], value, flags) is not None
        if "$gte" in condition:
            return value is not None and value >= condition["$gte"]
    return value == condition


def _matches(doc, query):
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in condition):
                return False
        elif not _match_value(doc.get(key), condition):
            return False
    return True


def _apply(doc, update):
    for field, value in update.get("$set", {}).items():
        doc[field] = value
    for field, value in update.get("$inc", {}).items():
        doc[field] = doc.get(field, 0) + value


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key, direction):
        self.docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return copy.deepcopy(self.docs)


class FakeCollection:
    """In-memory stand-in for the handful of motor calls the services make."""

    def __init__(self):
        self.docs = []
        self.failing = False

    def _check(self):
        if self.failing:
            raise ServerSelectionTimeoutError("connection refused")

    def find(self, query):
        self._check()
        return FakeCursor([doc for doc in self.docs if _matches(doc, query)])

    async def find_one(self, query):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document):
        self._check()
        doc = copy.deepcopy(document)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                _apply(doc, update)
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def update_one(self, query, update):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                _apply(doc, update)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def count_documents(self, query, limit=0):
        self._check()
        count = sum(1 for doc in self.docs if _matches(doc, query))
        return min(count, limit) if limit else count


class FakeStore(DataStore):
    def __init__(self):
        super().__init__(Settings(mongodb_uri="mongodb://fake", db_name="test"))
        self.collections = {LESSONS: FakeCollection(), ORDERS: FakeCollection()}
        self.connect_calls = 0

    @property
    def connected(self):
        return self.connect_calls > 0

    async def connect(self):
        self.connect_calls += 1

    async def close(self):
        pass

    def collection(self, name):
        return self.collections[name]


PYTHON_ID = ObjectId("665f1c2e8b3e4a1d2c3b4a51")
CLOUD_ID = ObjectId("665f1c2e8b3e4a1d2c3b4a52")
SECURITY_ID = ObjectId("665f1c2e8b3e4a1d2c3b4a53")
MISSING_ID = "665f1c2e8b3e4a1d2c3b4a99"


@pytest.fixture
def store():
    fake = FakeStore()
    fake.collections[LESSONS].docs = [
        {
            "_id": PYTHON_ID,
            "subject": "Python Programming",
            "location": "Liverpool",
            "price": 150,
            "availableSpaces": 12,
            "image": "logo-python.svg",
            "description": "Learn Python programming from basics to advanced",
        },
        {
            "_id": CLOUD_ID,
            "subject": "Cloud Computing with AWS or Azure Lab Course",
            "location": "Newcastle",
            "price": 99.99,
            "availableSpaces": 5,
            "image": "logo-cloud.svg",
            "description": "Learn cloud infrastructure and services",
        },
        {
            "_id": SECURITY_ID,
            "subject": "Cybersecurity Basics",
            "location": "Bristol",
            "price": 250,
            "availableSpaces": 1,
            "image": "logo-cybersecurity.svg",
            "description": "Essential cybersecurity principles and practices",
        },
    ]
    now = datetime.now(timezone.utc)
    fake.collections[ORDERS].docs = [
        {
            "_id": ObjectId(),
            "name": "Older Order",
            "phone": "0121 496 0000",
            "lessonIDs": [CLOUD_ID],
            "numberOfSpaces": 1,
            "createdAt": now - timedelta(days=2),
            "status": "confirmed",
        },
        {
            "_id": ObjectId(),
            "name": "Newer Order",
            "phone": "0121 496 0001",
            "lessonIDs": [PYTHON_ID],
            "numberOfSpaces": 3,
            "createdAt": now - timedelta(hours=1),
            "status": "confirmed",
        },
    ]
    return fake


@pytest.fixture
def client(store):
    app = create_app(Settings(images_dir="does-not-exist"), store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def order_payload():
    return {
        "name": "Jo Smith",
        "phone": "07123456789",
        "lessonIDs": [str(PYTHON_ID)],
        "numberOfSpaces": 2,
    }
