import logging

from langsmith import traceable

from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.services.text_combiner import combine_text

logger = logging.getLogger(__name__)


@traceable(name="combine_text")
def combine_text_node(state: EnrichmentState) -> EnrichmentState:
    state["combined_text"] = combine_text(state["post"].caption, state["description"])
    state["pipeline_step"] = "text_combined"

    logger.info(f"Combined text for post {state['post'].id}: {len(state['combined_text'])} chars")
    return state
