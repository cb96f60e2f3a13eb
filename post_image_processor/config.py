"""
Runtime configuration for the post image processor.

Values come from environment variables (a local .env file is loaded by the
entry points). Backend choice and persist mode are validated here so a bad
deployment fails before any record is touched.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from post_image_processor.errors import ConfigurationError

logger = logging.getLogger(__name__)

DESCRIBER_BACKENDS = ("rekognition", "openai")
EMBEDDING_BACKENDS = ("bedrock", "openai")
PERSIST_MODES = ("description", "embedding_id", "both")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """All recognized options; defaults mirror the production deployment"""
    mongo_uri: Optional[str] = None
    mongo_database: str = "spotter"
    mongo_collection: str = "posts"

    qdrant_url: str = "http://localhost:6333"
    qdrant_api_key: Optional[str] = None
    qdrant_collection: str = "posts"

    aws_region: str = "us-east-1"
    s3_endpoint_url: Optional[str] = None
    bedrock_region: str = "us-east-1"

    openai_api_key: Optional[str] = None
    openai_vision_model: str = "gpt-4o-mini"
    openai_embedding_model: str = "text-embedding-3-small"
    bedrock_embedding_model: str = "amazon.titan-embed-text-v2:0"

    describer_backend: str = "rekognition"
    embedding_backend: str = "bedrock"
    rekognition_max_labels: int = 10
    rekognition_min_confidence: float = 75.0

    persist_fields: str = "description"
    reuse_embedding_id: bool = False

    log_level: str = "INFO"

    def __post_init__(self):
        self.describer_backend = self.describer_backend.strip().lower()
        self.embedding_backend = self.embedding_backend.strip().lower()
        self.persist_fields = self.persist_fields.strip().lower()

        if self.describer_backend not in DESCRIBER_BACKENDS:
            raise ConfigurationError(
                f"Unknown describer backend '{self.describer_backend}'. Expected one of {DESCRIBER_BACKENDS}"
            )
        if self.embedding_backend not in EMBEDDING_BACKENDS:
            raise ConfigurationError(
                f"Unknown embedding backend '{self.embedding_backend}'. Expected one of {EMBEDDING_BACKENDS}"
            )
        if self.persist_fields not in PERSIST_MODES:
            raise ConfigurationError(
                f"Unknown persist mode '{self.persist_fields}'. Expected one of {PERSIST_MODES}"
            )

    @property
    def persist_description(self) -> bool:
        return self.persist_fields in ("description", "both")

    @property
    def persist_embedding_id(self) -> bool:
        return self.persist_fields in ("embedding_id", "both")


def load_settings() -> Settings:
    """
    Build settings from environment variables

    Environment variables:
        MONGO_URI / MONGODB_CONNECTION_STRING: record store connection string
        QDRANT_URL, QDRANT_API_KEY: vector index endpoint and key
        AWS_REGION, S3_ENDPOINT_URL, BEDROCK_REGION: AWS clients
        OPENAI_API_KEY / OPENAI_KEY: OpenAI backends
        DESCRIBER_BACKEND: rekognition | openai
        EMBEDDING_BACKEND: bedrock | openai
        PERSIST_FIELDS: description | embedding_id | both
        REUSE_EMBEDDING_ID: reuse a post's stored embeddingId as the point id
    """
    settings = Settings(
        mongo_uri=os.getenv("MONGO_URI") or os.getenv("MONGODB_CONNECTION_STRING"),
        mongo_database=os.getenv("MONGO_DATABASE", "spotter"),
        mongo_collection=os.getenv("MONGO_COLLECTION", "posts"),
        qdrant_url=os.getenv("QDRANT_URL", "http://localhost:6333"),
        qdrant_api_key=os.getenv("QDRANT_API_KEY"),
        qdrant_collection=os.getenv("QDRANT_COLLECTION", "posts"),
        aws_region=os.getenv("AWS_REGION", "us-east-1"),
        s3_endpoint_url=os.getenv("S3_ENDPOINT_URL"),
        bedrock_region=os.getenv("BEDROCK_REGION", "us-east-1"),
        openai_api_key=os.getenv("OPENAI_API_KEY") or os.getenv("OPENAI_KEY"),
        openai_vision_model=os.getenv("OPENAI_VISION_MODEL", "gpt-4o-mini"),
        openai_embedding_model=os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small"),
        bedrock_embedding_model=os.getenv("BEDROCK_EMBEDDING_MODEL", "amazon.titan-embed-text-v2:0"),
        describer_backend=os.getenv("DESCRIBER_BACKEND", "rekognition"),
        embedding_backend=os.getenv("EMBEDDING_BACKEND", "bedrock"),
        rekognition_max_labels=int(os.getenv("REKOGNITION_MAX_LABELS", "10")),
        rekognition_min_confidence=float(os.getenv("REKOGNITION_MIN_CONFIDENCE", "75")),
        persist_fields=os.getenv("PERSIST_FIELDS", "description"),
        reuse_embedding_id=_env_bool("REUSE_EMBEDDING_ID"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )

    if not settings.mongo_uri:
        logger.warning("No MongoDB connection string provided in environment variables")

    return settings
