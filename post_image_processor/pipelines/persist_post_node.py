import logging
import uuid

from langsmith import traceable

from post_image_processor.database.mongodb_client import PostRecordStore
from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.models.post_models import Post, PostStatus

logger = logging.getLogger(__name__)


def choose_point_id(post: Post, reuse_embedding_id: bool = False) -> str:
    """
    Pick the vector point id for this run

    A fresh UUID every run unless reuse is enabled and the post already carries
    the id of a previously indexed point, in which case that point is overwritten.
    """
    if reuse_embedding_id and post.embedding_id:
        return post.embedding_id
    return str(uuid.uuid4())


@traceable(name="persist_post")
def persist_post_node(
    state: EnrichmentState,
    record_store: PostRecordStore,
    persist_description: bool = True,
    persist_embedding_id: bool = False,
    reuse_embedding_id: bool = False,
) -> EnrichmentState:
    """
    Mark the post processed and store the enrichment fields

    Functionality:
    - Choose the point id shared by the record and the vector index
    - $set status plus description and/or embeddingId, nothing else
    """
    post = state["post"]
    point_id = choose_point_id(post, reuse_embedding_id)

    fields = {"status": PostStatus.PROCESSED.value}
    if persist_description:
        fields["description"] = state["description"]
    if persist_embedding_id:
        fields["embeddingId"] = point_id

    record_store.update_post_partial(post.id, fields)

    state["point_id"] = point_id
    state["pipeline_step"] = "post_persisted"

    logger.info(f"Post {post.id} marked {PostStatus.PROCESSED.value}")
    return state
