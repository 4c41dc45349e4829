from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dependencies import get_post_store, PostStoreDep


@pytest.mark.asyncio
async def test_get_post_store_reads_app_state(store):
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(post_store=store)))
    assert await get_post_store(request) is store


def test_post_store_dependency_in_a_route(store, collection):
    collection.insert("p1", title="Hello", text="x", authorId="u",
                      createdAt="2024-01-01T00:00:00+00:00")
    app = FastAPI()
    app.state.post_store = store

    @app.get("/posts/{post_id}")
    async def read_post(post_id: str, posts: PostStoreDep):
        return await posts.get_by_id(post_id)

    response = TestClient(app).get("/posts/p1")

    assert response.status_code == 200
    assert response.json()["title"] == "Hello"
    assert response.json()["id"] == "p1"
