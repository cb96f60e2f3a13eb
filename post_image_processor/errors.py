# Error taxonomy for the enrichment pipeline
from typing import Optional


class ConfigurationError(ValueError):
    """Raised when settings name an unknown backend or persist mode"""


class PipelineError(Exception):
    """
    Unrecoverable failure in one stage of the enrichment pipeline.

    Every subclass pins the stage it belongs to, so the batch runner can report
    where a record failed without inspecting the message.
    """

    stage = "pipeline"

    def __init__(self, message: str, cause: Optional[BaseException] = None, stage: Optional[str] = None):
        super().__init__(message)
        self.cause = cause
        if stage:
            self.stage = stage


class DecodeError(PipelineError):
    stage = "resolve_image_reference"


class RecordLookupError(PipelineError):
    stage = "fetch_post"


class ImageFetchError(PipelineError):
    stage = "fetch_image"


class DescriptionError(PipelineError):
    stage = "describe_image"


class EmbeddingError(PipelineError):
    stage = "generate_embedding"


class PersistError(PipelineError):
    stage = "persist_post"


class VectorIndexError(PipelineError):
    stage = "index_vector"
