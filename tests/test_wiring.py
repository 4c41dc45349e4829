import pytest
from fastapi import FastAPI

import main
from config import Settings
from services import firestore as firestore_service
from services.firestore import FirestoreDB
from tests.fakes import FakeClient

SETTINGS = Settings(posts_collection="staging_posts", posts_page_size=7)


@pytest.fixture
def fake_client(monkeypatch) -> FakeClient:
    client = FakeClient()
    monkeypatch.setattr(firestore_service.firestore_async, "client", lambda app: client)
    return client


def test_posts_uses_configured_collection_and_page_size(fake_client):
    store = FirestoreDB(object(), SETTINGS).posts()

    assert store.collection is fake_client.collection("staging_posts")
    assert store.client is fake_client
    assert store.page_size == 7


@pytest.mark.asyncio
async def test_lifespan_puts_post_store_on_app_state(monkeypatch, fake_client):
    firebase_app = object()
    monkeypatch.setattr(main, "settings", SETTINGS)
    monkeypatch.setattr(main, "init_firebase", lambda settings: firebase_app)
    app = FastAPI()

    async with main.lifespan(app):
        store = app.state.post_store
        assert store.collection.name == "staging_posts"
        assert store.page_size == 7
        assert store.client is fake_client
