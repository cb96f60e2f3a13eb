"""
Builds the concrete collaborators for one invocation from ``Settings``.

This is the only place that looks at ``describer_backend`` and
``embedding_backend``; the pipeline itself only sees the abstract interfaces.
"""

import logging

import boto3
from openai import OpenAI

from post_image_processor.config import Settings
from post_image_processor.database.mongodb_client import PostRecordStore
from post_image_processor.database.qdrant_client import QdrantVectorClient
from post_image_processor.errors import ConfigurationError
from post_image_processor.pipelines.batch_runner import BatchRunner
from post_image_processor.pipelines.orchestrator import EnrichmentPipeline
from post_image_processor.services.describers import (
    ImageDescriber,
    OpenAIVisionDescriber,
    RekognitionLabelDescriber,
)
from post_image_processor.services.embedders import (
    BedrockTitanEmbeddingGenerator,
    EmbeddingGenerator,
    OpenAIEmbeddingGenerator,
)
from post_image_processor.services.image_fetcher import S3ImageFetcher

logger = logging.getLogger(__name__)


def _openai_client(settings: Settings) -> OpenAI:
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY must be set to use the OpenAI backends")
    return OpenAI(api_key=settings.openai_api_key)


def build_describer(settings: Settings) -> ImageDescriber:
    if settings.describer_backend == "openai":
        return OpenAIVisionDescriber(_openai_client(settings), model=settings.openai_vision_model)

    return RekognitionLabelDescriber(
        boto3.client("rekognition", region_name=settings.aws_region),
        max_labels=settings.rekognition_max_labels,
        min_confidence=settings.rekognition_min_confidence,
    )


def build_embedding_generator(settings: Settings) -> EmbeddingGenerator:
    if settings.embedding_backend == "openai":
        return OpenAIEmbeddingGenerator(_openai_client(settings), model=settings.openai_embedding_model)

    return BedrockTitanEmbeddingGenerator(
        boto3.client("bedrock-runtime", region_name=settings.bedrock_region),
        model_id=settings.bedrock_embedding_model,
    )


def build_image_fetcher(settings: Settings) -> S3ImageFetcher:
    return S3ImageFetcher(
        boto3.client("s3", region_name=settings.aws_region, endpoint_url=settings.s3_endpoint_url)
    )


def build_record_store(settings: Settings) -> PostRecordStore:
    if not settings.mongo_uri:
        raise ConfigurationError("MONGO_URI must be set")
    return PostRecordStore(
        settings.mongo_uri,
        database=settings.mongo_database,
        collection=settings.mongo_collection,
    )


def build_vector_index(settings: Settings) -> QdrantVectorClient:
    return QdrantVectorClient(settings.qdrant_url, api_key=settings.qdrant_api_key)


def build_batch_runner(settings: Settings) -> BatchRunner:
    """Wire a BatchRunner whose collaborators are created fresh for this invocation"""
    image_fetcher = build_image_fetcher(settings)
    describer = build_describer(settings)
    embedding_generator = build_embedding_generator(settings)
    vector_index = build_vector_index(settings)

    logger.info(
        f"Using describer={settings.describer_backend}, embedding={settings.embedding_backend}, "
        f"persist_fields={settings.persist_fields}"
    )

    def pipeline_factory(record_store: PostRecordStore) -> EnrichmentPipeline:
        return EnrichmentPipeline(
            record_store=record_store,
            image_fetcher=image_fetcher,
            describer=describer,
            embedding_generator=embedding_generator,
            vector_index=vector_index,
            collection_name=settings.qdrant_collection,
            persist_description=settings.persist_description,
            persist_embedding_id=settings.persist_embedding_id,
            reuse_embedding_id=settings.reuse_embedding_id,
        )

    return BatchRunner(
        record_store_factory=lambda: build_record_store(settings),
        pipeline_factory=pipeline_factory,
    )
