import logging

from langsmith import traceable

from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.services.embedders import EmbeddingGenerator

logger = logging.getLogger(__name__)


@traceable(name="generate_embedding")
def generate_embedding_node(state: EnrichmentState, embedding_generator: EmbeddingGenerator) -> EnrichmentState:
    """
    Embed the combined caption + description text
    """
    embedding = embedding_generator.embed(state["combined_text"])

    state["embedding"] = embedding
    state["pipeline_step"] = "embedding_generated"

    logger.info(f"Embedding generated for post {state['post'].id}: embedding_dim={len(embedding)}")
    return state
