# Manual trigger: replay an S3 notification through the enrichment pipeline
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from typing import Any, Dict
import logging

from post_image_processor.config import load_settings
from post_image_processor.dependencies import build_batch_runner
from post_image_processor.pipelines.batch_runner import BatchRunner

logger = logging.getLogger(__name__)
router = APIRouter()


def get_batch_runner() -> BatchRunner:
    try:
        return build_batch_runner(load_settings())
    except Exception as e:
        logger.error(f"Error configuring image processor: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Image processor misconfigured: {str(e)}")


@router.post("/process")
def process_event(
    event: Dict[str, Any] = Body(..., description="S3 notification payload with a Records list"),
    batch_runner: BatchRunner = Depends(get_batch_runner),
):
    """
    Re-process uploaded post images

    Accepts the same payload S3 delivers to the Lambda handler and answers
    with the handler's status code and body.
    """
    logger.info(f"Processing event with {len(event.get('Records', []))} records via API")
    response = batch_runner.run(event)
    return JSONResponse(status_code=response["statusCode"], content=response["body"])
