import pytest
from google.cloud import firestore

from services.posts import PostStore
from tests.fakes import FakeClient, fake_async_transactional


@pytest.fixture
def client(monkeypatch) -> FakeClient:
    monkeypatch.setattr(firestore, "async_transactional", fake_async_transactional)
    return FakeClient()


@pytest.fixture
def collection(client):
    return client.collection("posts")


@pytest.fixture
def store(client, collection) -> PostStore:
    return PostStore(collection, client, page_size=20)
