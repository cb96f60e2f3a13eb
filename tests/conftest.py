"""Shared fakes for pipeline tests."""

import pytest

from post_image_processor.errors import (
    DescriptionError,
    EmbeddingError,
    PersistError,
    VectorIndexError,
)
from post_image_processor.models.post_models import Post
from post_image_processor.pipelines.orchestrator import EnrichmentPipeline


def make_record(key: str, bucket: str = "spotter-uploads") -> dict:
    return {
        "eventName": "ObjectCreated:Put",
        "s3": {"bucket": {"name": bucket}, "object": {"key": key, "size": 1024}},
    }


def make_event(*keys: str) -> dict:
    return {"Records": [make_record(k) for k in keys]}


class FakeRecordStore:
    """In-memory record store recording every call"""

    def __init__(self, posts=None, fail_update: bool = False):
        self.posts = {p.id: p for p in (posts or [])}
        self.fail_update = fail_update
        self.lookups: list[str] = []
        self.updates: list[tuple] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def find_post_by_id(self, post_id):
        self.lookups.append(post_id)
        return self.posts.get(post_id)

    def update_post_partial(self, post_id, fields):
        if self.fail_update:
            raise PersistError(f"update failed for {post_id}")
        self.updates.append((post_id, dict(fields)))
        post = self.posts[post_id]
        self.posts[post_id] = post.model_copy(update={
            "status": fields.get("status", post.status),
            "description": fields.get("description", post.description),
            "embedding_id": fields.get("embeddingId", post.embedding_id),
        })

    def close(self):
        self.closed = True


class FakeImageFetcher:
    def __init__(self, content: bytes = b"\xff\xd8jpeg-bytes"):
        self.content = content
        self.calls: list[tuple] = []

    def fetch(self, bucket, key):
        self.calls.append((bucket, key))
        return self.content


class FakeDescriber:
    def __init__(self, description: str = "Image contains: sky, cloud.", fail: bool = False):
        self.description = description
        self.fail = fail
        self.calls = 0

    def describe(self, image_bytes):
        self.calls += 1
        if self.fail:
            raise DescriptionError("label detection failed")
        return self.description


class FakeEmbedder:
    def __init__(self, vector=None, fail: bool = False):
        self.vector = vector or [0.1, 0.2, 0.3, 0.4]
        self.fail = fail
        self.texts: list[str] = []

    def embed(self, text):
        self.texts.append(text)
        if self.fail:
            raise EmbeddingError("embedding backend unavailable")
        return list(self.vector)


class FakeVectorIndex:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.points: list[tuple] = []

    def upsert_point(self, collection_name, point):
        if self.fail:
            raise VectorIndexError(f"upsert failed for {point.id}")
        self.points.append((collection_name, point))


@pytest.fixture
def post():
    return Post(id="p1", userId="u1", caption="sunset", status="pending")


@pytest.fixture
def record_store(post):
    return FakeRecordStore(posts=[post])


@pytest.fixture
def image_fetcher():
    return FakeImageFetcher()


@pytest.fixture
def describer():
    return FakeDescriber()


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def vector_index():
    return FakeVectorIndex()


@pytest.fixture
def make_pipeline(image_fetcher, describer, embedder, vector_index):
    def _make(record_store, **kwargs):
        return EnrichmentPipeline(
            record_store=record_store,
            image_fetcher=kwargs.pop("image_fetcher", image_fetcher),
            describer=kwargs.pop("describer", describer),
            embedding_generator=kwargs.pop("embedding_generator", embedder),
            vector_index=kwargs.pop("vector_index", vector_index),
            **kwargs,
        )
    return _make
