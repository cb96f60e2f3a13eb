import logging

from langsmith import traceable

from post_image_processor.database.qdrant_client import QdrantVectorClient
from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.models.post_models import VectorPoint

logger = logging.getLogger(__name__)


@traceable(name="index_vector")
def index_vector_node(
    state: EnrichmentState,
    vector_index: QdrantVectorClient,
    collection_name: str = "posts",
) -> EnrichmentState:
    """
    Upsert the post embedding with its search payload
    """
    post = state["post"]
    point = VectorPoint(
        id=state["point_id"],
        vector=state["embedding"],
        payload={
            "postId": post.id,
            "userId": post.user_id,
            "caption": post.caption or "",
            "description": state["description"],
        },
    )

    vector_index.upsert_point(collection_name, point)

    state["pipeline_step"] = "completed"
    logger.info(f"Post {post.id} indexed as point {point.id}")
    return state
