import logging

from langsmith import traceable

from post_image_processor.database.mongodb_client import PostRecordStore
from post_image_processor.models.pipeline_models import EnrichmentState

logger = logging.getLogger(__name__)


@traceable(name="fetch_post")
def fetch_post_node(state: EnrichmentState, record_store: PostRecordStore) -> EnrichmentState:
    """
    Look up the post owning the uploaded image
    A missing post is not an error: the record is marked skipped and the graph ends
    """
    post_id = state["image_reference"].post_id
    post = record_store.find_post_by_id(post_id)

    if post is None:
        logger.warning(f"Post {post_id} not found, skipping record")
        state["post"] = None
        state["skipped"] = True
        state["pipeline_step"] = "post_not_found"
        return state

    state["post"] = post
    state["pipeline_step"] = "post_fetched"
    return state
