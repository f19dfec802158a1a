from fastapi import FastAPI
from fastapi.testclient import TestClient

from blogmart import dependencies as deps
from blogmart.errors import PostReadFailure, StorageUnavailable
from blogmart.routers import posts
from blogmart.schemas.blog import Category, Post, PostResponse, Tag
from blogmart.services.posts_service import PostLoadResult, PostLoadStatus
from tests.conftest import FakePostsService


def make_client(fake_service: FakePostsService) -> TestClient:
    app = FastAPI()
    app.dependency_overrides[deps.get_posts_service] = lambda: fake_service
    app.include_router(posts.router)
    return TestClient(app)


def test_list_posts_returns_page_and_total():
    response = PostResponse(
        posts=[Post(id="b", title="B"), Post(id="a", title="A")], totalCount=7
    )
    service = FakePostsService(posts_response=response)

    res = make_client(service).get("/api/post")

    assert res.status_code == 200
    body = res.json()
    assert [p["id"] for p in body["posts"]] == ["b", "a"]
    assert body["totalCount"] == 7
    assert service.calls == [("get_posts", 1, None, None, None)]


def test_list_posts_passes_filters_through():
    service = FakePostsService(posts_response=PostResponse())

    res = make_client(service).get(
        "/api/post", params={"page": 3, "category": "web", "tag": "css", "q": "hi there"}
    )

    assert res.status_code == 200
    assert service.calls == [("get_posts", 3, "web", "css", "hi there")]


def test_list_posts_rejects_page_below_one():
    res = make_client(FakePostsService(posts_response=PostResponse())).get(
        "/api/post", params={"page": 0}
    )
    assert res.status_code == 422


def test_list_posts_returns_503_when_storage_unavailable():
    service = FakePostsService(error=StorageUnavailable("/posts"))

    res = make_client(service).get("/api/post")

    assert res.status_code == 503
    assert res.json()["detail"] == "Posts storage unavailable"


def test_list_posts_returns_500_on_unexpected_error():
    service = FakePostsService(error=RuntimeError("boom"))

    res = make_client(service).get("/api/post")

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve posts"


def test_list_ids_categories_and_tags():
    service = FakePostsService(
        ids=["a", "b"],
        categories=[Category(name="web", count=2)],
        tags=[Tag(name="css", count=1)],
    )
    client = make_client(service)

    assert client.get("/api/post/ids").json() == ["a", "b"]
    assert client.get("/api/post/categories").json() == [{"name": "web", "count": 2}]
    assert client.get("/api/post/tags").json() == [{"name": "css", "count": 1}]


def test_list_endpoints_return_503_when_storage_unavailable():
    client = make_client(FakePostsService(error=StorageUnavailable("/posts")))

    for path in ("/api/post/ids", "/api/post/categories", "/api/post/tags"):
        assert client.get(path).status_code == 503


def test_get_post_success():
    post = Post(id="hello", title="Hello", article="<p>hi</p>")
    service = FakePostsService(
        load_result=PostLoadResult("hello", PostLoadStatus.FOUND, post=post)
    )

    res = make_client(service).get("/api/post/hello")

    assert res.status_code == 200
    assert res.json()["title"] == "Hello"
    assert res.json()["tags"] == []


def test_get_post_returns_404_when_missing():
    service = FakePostsService(
        load_result=PostLoadResult("missing", PostLoadStatus.NOT_FOUND)
    )

    res = make_client(service).get("/api/post/missing")

    assert res.status_code == 404
    assert res.json()["detail"] == "Post not found"


def test_get_post_returns_500_when_read_failed():
    service = FakePostsService(
        load_result=PostLoadResult(
            "broken",
            PostLoadStatus.READ_FAILED,
            error=PostReadFailure("broken", OSError("denied")),
        )
    )

    res = make_client(service).get("/api/post/broken")

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve post"


def test_get_related_posts():
    post = Post(id="hello", categories=["web"])
    service = FakePostsService(
        load_result=PostLoadResult("hello", PostLoadStatus.FOUND, post=post),
        related=[Post(id="other", categories=["web"])],
    )

    res = make_client(service).get("/api/post/hello/related")

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == ["other"]
    assert ("get_related_posts", "hello") in service.calls


def test_get_related_posts_returns_404_for_unknown_post():
    service = FakePostsService(
        load_result=PostLoadResult("nope", PostLoadStatus.NOT_FOUND)
    )

    res = make_client(service).get("/api/post/nope/related")

    assert res.status_code == 404
    assert not any(call[0] == "get_related_posts" for call in service.calls)
