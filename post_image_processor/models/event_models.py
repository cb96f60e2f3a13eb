# Pydantic models for S3 "object created" notifications
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class S3Bucket(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class S3Object(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str  # still URL-encoded as delivered by S3


class S3Entity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    bucket: S3Bucket
    object: S3Object


class S3EventRecord(BaseModel):
    """A single notification entry describing one uploaded object"""
    model_config = ConfigDict(extra="ignore")

    s3: S3Entity


class S3EventNotification(BaseModel):
    """
    Top-level notification shape only

    Each entry stays raw; the pipeline validates it as an S3EventRecord when
    its turn comes, so a bad entry fails only itself and the records after it.
    """
    model_config = ConfigDict(extra="ignore")

    records: List[Any] = Field(alias="Records")
