# AWS Lambda entry point, triggered by S3 "object created" notifications on post images
# Load environment variables from .env file first, before any other imports
from dotenv import load_dotenv
load_dotenv()

import json
import logging

from post_image_processor.config import load_settings
from post_image_processor.dependencies import build_batch_runner

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def handler(event, context=None):
    logger.info(f"event {json.dumps(event, indent=2, default=str)}")

    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())
        batch_runner = build_batch_runner(settings)
    except Exception as e:
        logger.error(f"Error configuring image processor: {str(e)}")
        return {"statusCode": 500, "body": json.dumps({"error": str(e)})}

    response = batch_runner.run(event)
    return {"statusCode": response["statusCode"], "body": json.dumps(response["body"])}
