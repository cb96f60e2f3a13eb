import logging

from langsmith import traceable

from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.services.image_fetcher import S3ImageFetcher

logger = logging.getLogger(__name__)


@traceable(name="fetch_image")
def fetch_image_node(state: EnrichmentState, image_fetcher: S3ImageFetcher) -> EnrichmentState:
    image_reference = state["image_reference"]
    state["image_bytes"] = image_fetcher.fetch(image_reference.bucket, image_reference.key)
    state["pipeline_step"] = "image_fetched"

    logger.info(f"Image fetched for post {image_reference.post_id}: {len(state['image_bytes'])} bytes")
    return state
