from typing import Any, Dict
from urllib.parse import unquote_plus
import logging

from pydantic import ValidationError

from post_image_processor.errors import DecodeError
from post_image_processor.models.event_models import S3EventRecord
from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.models.post_models import ImageReference

logger = logging.getLogger(__name__)


def resolve_image_reference(event_record: Dict[str, Any]) -> ImageReference:
    """
    Extract bucket, decoded key and ids from one S3 notification record

    Keys follow posts/<userId>/<postId>.<ext>; the post id is the third path
    segment up to its first dot.
    """
    try:
        record = S3EventRecord.model_validate(event_record)
    except ValidationError as e:
        raise DecodeError(f"Malformed event record: {e}", cause=e) from e

    bucket = record.s3.bucket.name
    key = unquote_plus(record.s3.object.key)

    segments = key.split("/")
    if len(segments) < 3:
        raise DecodeError(f"Object key '{key}' does not match <prefix>/<userId>/<postId>.<ext>")

    post_id = segments[2].split(".")[0]
    if not post_id:
        raise DecodeError(f"Object key '{key}' has an empty post id")

    return ImageReference(bucket=bucket, key=key, user_id=segments[1], post_id=post_id)


def resolve_image_reference_node(state: EnrichmentState) -> EnrichmentState:
    """
    Resolve the image location and post id from the event record
    """
    image_reference = resolve_image_reference(state["event_record"])

    state["image_reference"] = image_reference
    state["pipeline_step"] = "image_reference_resolved"

    logger.info(f"Resolved s3://{image_reference.bucket}/{image_reference.key} -> post {image_reference.post_id}")
    return state
