import logging

from botocore.exceptions import BotoCoreError, ClientError

from post_image_processor.errors import ImageFetchError

logger = logging.getLogger(__name__)


class S3ImageFetcher:
    """Downloads uploaded images from S3"""

    def __init__(self, s3_client):
        self.s3_client = s3_client

    def fetch(self, bucket: str, key: str) -> bytes:
        try:
            response = self.s3_client.get_object(Bucket=bucket, Key=key)
            image_bytes = response["Body"].read()
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error downloading s3://{bucket}/{key}: {str(e)}")
            raise ImageFetchError(f"Failed to download s3://{bucket}/{key}: {e}", cause=e) from e

        logger.info(f"Downloaded s3://{bucket}/{key} ({len(image_bytes)} bytes)")
        return image_bytes
