# Models for post records, image references and vector points
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"


class Post(BaseModel):
    """Post document as stored in MongoDB (camelCase field names)"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: Optional[str] = Field(None, alias="userId")
    caption: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    embedding_id: Optional[str] = Field(None, alias="embeddingId")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Post":
        """Build a Post from a raw Mongo document, stringifying ObjectIds"""
        user_id = document.get("userId")
        return cls(
            id=str(document["_id"]),
            user_id=str(user_id) if user_id is not None else None,
            caption=document.get("caption"),
            status=document.get("status"),
            description=document.get("description"),
            embedding_id=document.get("embeddingId"),
        )


class ImageReference(BaseModel):
    """Where an uploaded image lives, plus the ids encoded in its key"""
    bucket: str
    key: str  # URL-decoded object key
    user_id: str
    post_id: str


class VectorPoint(BaseModel):
    """One point for the similarity index"""
    id: str
    vector: List[float]
    payload: Dict[str, Any] = {}
