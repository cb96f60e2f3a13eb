from typing import Any, Callable, Dict
import logging

from pydantic import ValidationError

from post_image_processor.database.mongodb_client import PostRecordStore
from post_image_processor.errors import PipelineError
from post_image_processor.models.event_models import S3EventNotification
from post_image_processor.models.response_models import BatchReport, RecordResult, RecordStatus
from post_image_processor.pipelines.orchestrator import EnrichmentPipeline

logger = logging.getLogger(__name__)


class BatchRunner:
    """
    Runs the enrichment pipeline over every record of one S3 notification

    Records are processed in order. The first failure stops the batch; records
    after it are not touched. The record store is opened once per run and is
    closed on every exit path.
    """

    def __init__(
        self,
        record_store_factory: Callable[[], PostRecordStore],
        pipeline_factory: Callable[[PostRecordStore], EnrichmentPipeline],
    ):
        self.record_store_factory = record_store_factory
        self.pipeline_factory = pipeline_factory

    def run(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Returns:
            {"statusCode": 200, "body": {"success": True}} when every record succeeded
            or was skipped, {"statusCode": 500, "body": {"error": message}} otherwise
        """
        report = BatchReport()

        try:
            notification = S3EventNotification.model_validate(event)
        except ValidationError as e:
            logger.error(f"Malformed S3 event: {str(e)}")
            report.fail(f"Malformed S3 event: {e}")
            return report.to_response()

        records = notification.records
        logger.info(f"Processing batch of {len(records)} records")

        try:
            with self.record_store_factory() as record_store:
                pipeline = self.pipeline_factory(record_store)
                self._process_records(pipeline, records, report)
        except Exception as e:
            # Connection or pipeline construction failure, outside any single record
            logger.error(f"Error processing image batch: {str(e)}")
            report.fail(str(e))

        logger.info(
            f"Batch finished: processed={report.count(RecordStatus.PROCESSED)}, "
            f"skipped={report.count(RecordStatus.SKIPPED)}, failed={report.count(RecordStatus.FAILED)}"
        )
        return report.to_response()

    def _process_records(self, pipeline: EnrichmentPipeline, records, report: BatchReport) -> None:
        for index, record in enumerate(records):
            try:
                result = pipeline.process(record)
            except PipelineError as e:
                logger.error(f"Record {index} failed at {e.stage}: {str(e)}")
                report.add(RecordResult(status=RecordStatus.FAILED, stage=e.stage, error=str(e)))
                return

            report.add(result)
