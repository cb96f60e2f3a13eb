import logging

from langsmith import traceable

from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.services.describers import ImageDescriber

logger = logging.getLogger(__name__)


@traceable(name="describe_image")
def describe_image_node(state: EnrichmentState, describer: ImageDescriber) -> EnrichmentState:
    """
    Generate a text description of the image with the configured describer
    """
    state["description"] = describer.describe(state["image_bytes"])
    state["pipeline_step"] = "image_described"

    logger.info(f"Described image for post {state['post'].id} using {type(describer).__name__}")
    return state
