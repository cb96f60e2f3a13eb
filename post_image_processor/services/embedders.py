"""
Text embedding backends.

``EmbeddingGenerator.embed`` turns the combined caption/description text into a
fixed-length vector. The full text is sent as-is: no normalization, truncation
or chunking happens here, so provider length limits surface as ``EmbeddingError``.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import List

import openai
from botocore.exceptions import BotoCoreError, ClientError
from langsmith import traceable

from post_image_processor.errors import EmbeddingError

logger = logging.getLogger(__name__)


def _validate_vector(vector, provider: str) -> List[float]:
    if not isinstance(vector, list) or not vector:
        raise EmbeddingError(f"{provider} returned no embedding vector")
    try:
        return [float(x) for x in vector]
    except (ValueError, TypeError) as e:
        raise EmbeddingError(f"{provider} returned a non-numeric embedding: {e}", cause=e) from e


class EmbeddingGenerator(ABC):
    """Abstract base class for embedding providers"""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        ...

    @staticmethod
    def _require_text(text: str) -> None:
        if not text or not text.strip():
            raise EmbeddingError("Cannot embed empty text")


class BedrockTitanEmbeddingGenerator(EmbeddingGenerator):
    """Amazon Titan Text Embeddings V2 through bedrock-runtime (1024 dimensions)"""

    def __init__(self, bedrock_client, model_id: str = "amazon.titan-embed-text-v2:0"):
        self.client = bedrock_client
        self.model_id = model_id

    @traceable(name="bedrock_embed")
    def embed(self, text: str) -> List[float]:
        self._require_text(text)

        try:
            response = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps({"inputText": text}),
            )
            body = json.loads(response["body"].read())
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Bedrock invoke_model failed for {self.model_id}: {str(e)}")
            raise EmbeddingError(f"Embedding request failed: {e}", cause=e) from e
        except (KeyError, ValueError) as e:
            raise EmbeddingError(f"Malformed Bedrock response: {e}", cause=e) from e

        vector = _validate_vector(body.get("embedding"), "Bedrock")
        logger.info(f"Generated embedding with {len(vector)} dimensions using {self.model_id}")
        return vector


class OpenAIEmbeddingGenerator(EmbeddingGenerator):
    """OpenAI embeddings endpoint (text-embedding-3-small: 1536 dimensions)"""

    def __init__(self, openai_client, model: str = "text-embedding-3-small"):
        self.client = openai_client
        self.model = model

    @traceable(name="openai_embed")
    def embed(self, text: str) -> List[float]:
        self._require_text(text)

        try:
            response = self.client.embeddings.create(model=self.model, input=text)
        except openai.OpenAIError as e:
            logger.error(f"OpenAI embeddings request failed for {self.model}: {str(e)}")
            raise EmbeddingError(f"Embedding request failed: {e}", cause=e) from e

        try:
            vector = response.data[0].embedding
        except (AttributeError, IndexError) as e:
            raise EmbeddingError(f"Malformed OpenAI embeddings response: {e}", cause=e) from e

        vector = _validate_vector(vector, "OpenAI")
        logger.info(f"Generated embedding with {len(vector)} dimensions using {self.model}")
        return vector
