from typing import Any, Dict, List, Optional
from typing_extensions import TypedDict

from post_image_processor.models.post_models import ImageReference, Post


class EnrichmentState(TypedDict, total=False):
    """
    State object for the post enrichment pipeline
    Compatible with LangGraph's state handling
    """
    # Input
    event_record: Dict[str, Any]

    # Pipeline data
    image_reference: Optional[ImageReference]
    post: Optional[Post]
    image_bytes: Optional[bytes]
    description: Optional[str]
    combined_text: Optional[str]
    embedding: Optional[List[float]]
    point_id: Optional[str]

    # Pipeline metadata
    pipeline_step: str
    skipped: bool
    execution_time: Optional[float]
