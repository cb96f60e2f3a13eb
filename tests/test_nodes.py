import logging

from post_image_processor.models.post_models import ImageReference, Post
from post_image_processor.pipelines.combine_text_node import combine_text_node
from post_image_processor.pipelines.fetch_image_node import fetch_image_node
from tests.conftest import FakeImageFetcher


def test_fetch_image_node_stores_bytes_and_logs(caplog):
    fetcher = FakeImageFetcher(content=b"jpeg")
    state = {"image_reference": ImageReference(bucket="uploads", key="posts/u1/p1.jpg", user_id="u1", post_id="p1")}

    with caplog.at_level(logging.INFO, logger="post_image_processor.pipelines.fetch_image_node"):
        state = fetch_image_node(state, image_fetcher=fetcher)

    assert state["image_bytes"] == b"jpeg"
    assert state["pipeline_step"] == "image_fetched"
    assert fetcher.calls == [("uploads", "posts/u1/p1.jpg")]
    assert "Image fetched for post p1: 4 bytes" in caplog.text


def test_combine_text_node_stores_text_and_logs(caplog):
    state = {"post": Post(id="p1", userId="u1", caption="sunset"), "description": "Image contains: sky."}

    with caplog.at_level(logging.INFO, logger="post_image_processor.pipelines.combine_text_node"):
        state = combine_text_node(state)

    assert state["combined_text"] == "sunset Image contains: sky."
    assert state["pipeline_step"] == "text_combined"
    assert "Combined text for post p1" in caplog.text


def test_nodes_are_traced():
    # langsmith's traceable keeps the wrapped function reachable
    assert hasattr(fetch_image_node, "__wrapped__")
    assert hasattr(combine_text_node, "__wrapped__")
