# Post and vector models
from .post_models import Post, ImageReference, VectorPoint, PostStatus

# Inbound S3 notification models
from .event_models import S3EventNotification, S3EventRecord

# Pipeline state
from .pipeline_models import EnrichmentState

# Per-record results and handler responses
from .response_models import RecordResult, RecordStatus, BatchReport

__all__ = [
    "Post",
    "ImageReference",
    "VectorPoint",
    "PostStatus",
    "S3EventNotification",
    "S3EventRecord",
    "EnrichmentState",
    "RecordResult",
    "RecordStatus",
    "BatchReport",
]
