import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from post_image_processor.errors import PersistError, RecordLookupError
from post_image_processor.models.post_models import Post

logger = logging.getLogger(__name__)

# Only the enrichment fields may be written by this service
ENRICHMENT_FIELDS = {"status", "description", "embeddingId"}


def _document_id(post_id: str):
    """Posts created by the upload flow use ObjectId keys; fall back to the raw id"""
    if ObjectId.is_valid(post_id):
        return ObjectId(post_id)
    return post_id


class PostRecordStore:
    """
    MongoDB gateway for the posts collection

    Opened once per invocation and closed when the invocation ends, either
    explicitly or by using the store as a context manager.
    """

    def __init__(self, connection_string: str, database: str = "spotter", collection: str = "posts",
                 client: Optional[MongoClient] = None):
        self.client = client if client is not None else MongoClient(connection_string)
        self.db = self.client[database]
        self.collection = self.db[collection]
        logger.info(f"MongoDB connection established ({database}.{collection})")

    def __enter__(self) -> "PostRecordStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def find_post_by_id(self, post_id: str) -> Optional[Post]:
        """
        Fetch a post by id

        Returns:
            The post, or None when no document has this id
        """
        try:
            document = self.collection.find_one({"_id": _document_id(post_id)})
        except PyMongoError as e:
            logger.error(f"MongoDB error fetching post {post_id}: {str(e)}")
            raise RecordLookupError(f"Failed to fetch post {post_id}: {e}", cause=e) from e

        if document is None:
            return None
        return Post.from_document(document)

    def update_post_partial(self, post_id: str, fields: Dict[str, Any]) -> None:
        """Atomically $set the given enrichment fields; other fields stay untouched"""
        unknown = set(fields) - ENRICHMENT_FIELDS
        if unknown:
            raise PersistError(f"Refusing to update non-enrichment fields: {sorted(unknown)}")
        if not fields:
            raise PersistError(f"No fields to update for post {post_id}")

        try:
            result = self.collection.update_one({"_id": _document_id(post_id)}, {"$set": fields})
        except PyMongoError as e:
            logger.error(f"MongoDB error updating post {post_id}: {str(e)}")
            raise PersistError(f"Failed to update post {post_id}: {e}", cause=e) from e

        if result.matched_count == 0:
            raise PersistError(f"Post {post_id} disappeared before it could be updated")

        logger.info(f"Updated post {post_id} fields: {sorted(fields)}")

    def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")
