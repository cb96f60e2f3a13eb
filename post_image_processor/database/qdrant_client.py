import logging
from typing import Optional

from qdrant_client import QdrantClient
from qdrant_client.http import models
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

from post_image_processor.errors import VectorIndexError
from post_image_processor.models.post_models import VectorPoint

logger = logging.getLogger(__name__)


class QdrantVectorClient:
    """
    Client for writing post embeddings into Qdrant
    Points are upserted by id; the payload carries the post metadata used by search
    """

    def __init__(self, url: str, api_key: Optional[str] = None, client: Optional[QdrantClient] = None):
        if client is not None:
            self.client = client
        else:
            # Full URLs go through url=, bare hosts through host=
            if url.startswith(("http://", "https://")):
                self.client = QdrantClient(url=url, api_key=api_key)
            else:
                self.client = QdrantClient(host=url, api_key=api_key)
        logger.info(f"Qdrant client configured for {url}")

    def upsert_point(self, collection_name: str, point: VectorPoint) -> None:
        """Upsert a single point; reusing an id overwrites the previous point"""
        if not point.vector:
            raise VectorIndexError(f"Refusing to index empty vector for point {point.id}")

        try:
            self.client.upsert(
                collection_name=collection_name,
                points=[
                    models.PointStruct(
                        id=point.id,
                        vector=[float(x) for x in point.vector],
                        payload=point.payload,
                    )
                ],
                wait=True,
            )
        except (UnexpectedResponse, ResponseHandlingException, ValueError) as e:
            logger.error(f"Error upserting point {point.id} into Qdrant collection {collection_name}: {str(e)}")
            raise VectorIndexError(f"Failed to upsert point {point.id}: {e}", cause=e) from e

        logger.info(f"Upserted point {point.id} into Qdrant collection {collection_name}")
