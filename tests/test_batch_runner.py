"""Tests for the batch runner and its handler responses."""

from post_image_processor.models.post_models import Post
from post_image_processor.pipelines.batch_runner import BatchRunner
from tests.conftest import FakeDescriber, FakeRecordStore, make_event, make_record


def make_runner(store, make_pipeline, **pipeline_kwargs):
    return BatchRunner(
        record_store_factory=lambda: store,
        pipeline_factory=lambda record_store: make_pipeline(record_store, **pipeline_kwargs),
    )


def two_posts_store(**kwargs):
    return FakeRecordStore(
        posts=[Post(id="p1", userId="u1", caption="sunset"), Post(id="p2", userId="u2")],
        **kwargs,
    )


def test_full_success_returns_200(make_pipeline, vector_index):
    store = two_posts_store()
    response = make_runner(store, make_pipeline).run(make_event("posts/u1/p1.jpg", "posts/u2/p2.jpg"))

    assert response == {"statusCode": 200, "body": {"success": True}}
    assert [p.payload["postId"] for _, p in vector_index.points] == ["p1", "p2"]
    assert store.posts["p1"].status == "processed"
    assert store.posts["p2"].status == "processed"
    assert store.closed


def test_missing_post_does_not_fail_the_batch(make_pipeline, vector_index):
    store = two_posts_store()
    response = make_runner(store, make_pipeline).run(
        make_event("posts/u1/ghost.jpg", "posts/u2/p2.jpg")
    )

    assert response["statusCode"] == 200
    assert [p.payload["postId"] for _, p in vector_index.points] == ["p2"]
    assert [post_id for post_id, _ in store.updates] == ["p2"]


def test_first_failure_aborts_remaining_records(make_pipeline, vector_index):
    store = two_posts_store()
    describer = FakeDescriber(fail=True)
    response = make_runner(store, make_pipeline, describer=describer).run(
        make_event("posts/u1/p1.jpg", "posts/u2/p2.jpg")
    )

    assert response == {"statusCode": 500, "body": {"error": "label detection failed"}}
    assert describer.calls == 1
    assert store.lookups == ["p1"]
    assert vector_index.points == []
    assert store.closed


def test_failure_after_successful_record_keeps_earlier_effects(make_pipeline, vector_index):
    store = two_posts_store()
    response = make_runner(store, make_pipeline).run(
        make_event("posts/u1/p1.jpg", "bad-key.jpg", "posts/u2/p2.jpg")
    )

    assert response["statusCode"] == 500
    assert "does not match" in response["body"]["error"]
    assert [p.payload["postId"] for _, p in vector_index.points] == ["p1"]
    assert store.lookups == ["p1"]


def test_persist_failure_returns_500_and_closes_store(make_pipeline):
    store = two_posts_store(fail_update=True)
    response = make_runner(store, make_pipeline).run(make_event("posts/u1/p1.jpg"))

    assert response["statusCode"] == 500
    assert "update failed for p1" in response["body"]["error"]
    assert store.closed


def test_empty_batch_succeeds(make_pipeline):
    store = two_posts_store()
    response = make_runner(store, make_pipeline).run({"Records": []})

    assert response["statusCode"] == 200
    assert store.closed


def test_malformed_record_fails_after_earlier_records_commit(make_pipeline, vector_index):
    store = two_posts_store()
    event = make_event("posts/u1/p1.jpg")
    event["Records"] += [{"s3": {"bucket": {}}}, make_record("posts/u2/p2.jpg")]

    response = make_runner(store, make_pipeline).run(event)

    assert response["statusCode"] == 500
    assert "Malformed event record" in response["body"]["error"]
    assert store.lookups == ["p1"]
    assert [p.payload["postId"] for _, p in vector_index.points] == ["p1"]
    assert store.posts["p1"].status == "processed"
    assert store.posts["p2"].status is None
    assert store.closed


def test_non_object_record_is_decode_failure(make_pipeline, vector_index):
    store = two_posts_store()
    response = make_runner(store, make_pipeline).run({"Records": ["posts/u1/p1.jpg"]})

    assert response["statusCode"] == 500
    assert "Malformed event record" in response["body"]["error"]
    assert vector_index.points == []


def test_event_without_records_list_returns_500_without_opening_store(make_pipeline):
    opened = []

    def factory():
        opened.append(True)
        return two_posts_store()

    runner = BatchRunner(record_store_factory=factory, pipeline_factory=make_pipeline)
    response = runner.run({"Records": {"s3": {}}})

    assert response["statusCode"] == 500
    assert "Malformed S3 event" in response["body"]["error"]
    assert opened == []


def test_lowercase_records_key_is_rejected_not_silently_ignored(make_pipeline, vector_index):
    opened = []

    def factory():
        opened.append(True)
        return two_posts_store()

    runner = BatchRunner(record_store_factory=factory, pipeline_factory=make_pipeline)
    response = runner.run({"records": [make_record("posts/u1/p1.jpg")]})

    assert response["statusCode"] == 500
    assert "Malformed S3 event" in response["body"]["error"]
    assert opened == []
    assert vector_index.points == []


def test_store_connection_failure_returns_500(make_pipeline):
    def factory():
        raise ConnectionError("mongo unreachable")

    runner = BatchRunner(record_store_factory=factory, pipeline_factory=make_pipeline)
    response = runner.run(make_event("posts/u1/p1.jpg"))

    assert response == {"statusCode": 500, "body": {"error": "mongo unreachable"}}


def test_pipeline_construction_failure_still_closes_store():
    store = two_posts_store()

    def pipeline_factory(record_store):
        raise RuntimeError("no qdrant")

    runner = BatchRunner(record_store_factory=lambda: store, pipeline_factory=pipeline_factory)
    response = runner.run(make_event("posts/u1/p1.jpg"))

    assert response["statusCode"] == 500
    assert store.closed
