"""Shared fixtures: an in-memory stand-in for the review collection."""

from __future__ import annotations

import copy

import bson
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from main import app
from rate_that_airline.database.db import get_review_collection


class InsertOneResult:
    def __init__(self, inserted_id: ObjectId) -> None:
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, documents: list[dict]) -> None:
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict]:
        documents = [copy.deepcopy(doc) for doc in self._documents]
        return documents if length is None else documents[:length]


class FakeReviewCollection:
    """Keeps inserted documents in insertion order, like a fresh collection."""

    def __init__(self) -> None:
        self.documents: list[dict] = []

    async def insert_one(self, document: dict) -> InsertOneResult:
        document.setdefault("_id", ObjectId())
        # Raises like the driver on values BSON cannot hold.
        bson.encode(document)
        self.documents.append(copy.deepcopy(document))
        return InsertOneResult(document["_id"])

    def find(self, query: dict | None = None) -> FakeCursor:
        assert not query, "handlers only issue unfiltered reads"
        return FakeCursor(self.documents)


class BrokenCursor:
    async def to_list(self, length: int | None = None) -> list[dict]:
        raise ServerSelectionTimeoutError("mongo.internal:27017: timed out")


class BrokenReviewCollection:
    async def insert_one(self, document: dict) -> InsertOneResult:
        raise ServerSelectionTimeoutError("mongo.internal:27017: timed out")

    def find(self, query: dict | None = None) -> BrokenCursor:
        return BrokenCursor()


@pytest.fixture
def collection() -> FakeReviewCollection:
    return FakeReviewCollection()


@pytest.fixture
def client(collection: FakeReviewCollection):
    app.dependency_overrides[get_review_collection] = lambda: collection
    # No context manager: the lifespan (real MongoDB connection) is skipped.
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_review_collection] = lambda: BrokenReviewCollection()
    yield TestClient(app)
    app.dependency_overrides.clear()
