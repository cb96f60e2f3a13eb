from typing import Any, Dict, List, Tuple, Callable
from datetime import datetime, timezone
from functools import partial
import logging
from langgraph.graph import StateGraph, END

# LangSmith tracing
from langsmith import traceable

from post_image_processor.database.mongodb_client import PostRecordStore
from post_image_processor.database.qdrant_client import QdrantVectorClient
from post_image_processor.errors import PipelineError
from post_image_processor.models.pipeline_models import EnrichmentState
from post_image_processor.models.response_models import RecordResult, RecordStatus
from post_image_processor.pipelines.resolve_image_node import resolve_image_reference_node
from post_image_processor.pipelines.fetch_post_node import fetch_post_node
from post_image_processor.pipelines.fetch_image_node import fetch_image_node
from post_image_processor.pipelines.describe_image_node import describe_image_node
from post_image_processor.pipelines.combine_text_node import combine_text_node
from post_image_processor.pipelines.generate_embedding_node import generate_embedding_node
from post_image_processor.pipelines.persist_post_node import persist_post_node
from post_image_processor.pipelines.index_vector_node import index_vector_node
from post_image_processor.services.describers import ImageDescriber
from post_image_processor.services.embedders import EmbeddingGenerator
from post_image_processor.services.image_fetcher import S3ImageFetcher

logger = logging.getLogger(__name__)


def _route_after_lookup(state: EnrichmentState) -> str:
    return "skip" if state.get("skipped") else "continue"


class EnrichmentPipeline:
    """
    Orchestrator for the post image enrichment pipeline:
    1. Resolve image reference and post id from the S3 record
    2. Fetch the post (missing post -> skip the record)
    3. Download the image
    4. Describe the image (Rekognition labels or a vision model)
    5. Combine caption + description
    6. Embed the combined text
    7. Persist status/description on the post
    8. Upsert the vector into Qdrant

    Every collaborator is passed in; the pipeline owns no connections.
    """

    def __init__(
        self,
        record_store: PostRecordStore,
        image_fetcher: S3ImageFetcher,
        describer: ImageDescriber,
        embedding_generator: EmbeddingGenerator,
        vector_index: QdrantVectorClient,
        collection_name: str = "posts",
        persist_description: bool = True,
        persist_embedding_id: bool = False,
        reuse_embedding_id: bool = False,
    ):
        self.nodes: List[Tuple[str, Callable[[EnrichmentState], EnrichmentState]]] = [
            ("resolve_image_reference", resolve_image_reference_node),
            ("fetch_post", partial(fetch_post_node, record_store=record_store)),
            ("fetch_image", partial(fetch_image_node, image_fetcher=image_fetcher)),
            ("describe_image", partial(describe_image_node, describer=describer)),
            ("combine_text", combine_text_node),
            ("generate_embedding", partial(generate_embedding_node, embedding_generator=embedding_generator)),
            ("persist_post", partial(
                persist_post_node,
                record_store=record_store,
                persist_description=persist_description,
                persist_embedding_id=persist_embedding_id,
                reuse_embedding_id=reuse_embedding_id,
            )),
            ("index_vector", partial(
                index_vector_node,
                vector_index=vector_index,
                collection_name=collection_name,
            )),
        ]
        self.graph = None
        self._build_graph()

    def _build_graph(self):
        """Build the enrichment LangGraph workflow"""
        try:
            workflow = StateGraph(EnrichmentState)

            for name, node in self.nodes:
                workflow.add_node(name, node)

            workflow.set_entry_point("resolve_image_reference")
            workflow.add_edge("resolve_image_reference", "fetch_post")
            workflow.add_conditional_edges(
                "fetch_post",
                _route_after_lookup,
                {"skip": END, "continue": "fetch_image"},
            )
            workflow.add_edge("fetch_image", "describe_image")
            workflow.add_edge("describe_image", "combine_text")
            workflow.add_edge("combine_text", "generate_embedding")
            workflow.add_edge("generate_embedding", "persist_post")
            workflow.add_edge("persist_post", "index_vector")
            workflow.add_edge("index_vector", END)

            self.graph = workflow.compile()
            logger.info("Enrichment LangGraph workflow compiled successfully")

        except Exception as e:
            logger.error(f"Error building enrichment LangGraph workflow: {str(e)}")
            self.graph = None

    def _run_sequential(self, state: EnrichmentState) -> EnrichmentState:
        """Same steps as the graph, used when the workflow could not be compiled"""
        for name, node in self.nodes:
            state = node(state)
            if name == "fetch_post" and _route_after_lookup(state) == "skip":
                break
        return state

    @traceable(name="post_enrichment_pipeline")
    def process(self, event_record: Dict[str, Any]) -> RecordResult:
        """
        Run every step for one event record

        Returns:
            RecordResult with status processed or skipped

        Raises:
            PipelineError: the first unrecoverable step failure, with its stage
        """
        start_time = datetime.now(timezone.utc)

        initial_state: EnrichmentState = {
            "event_record": event_record,
            "image_reference": None,
            "post": None,
            "image_bytes": None,
            "description": None,
            "combined_text": None,
            "embedding": None,
            "point_id": None,
            "pipeline_step": "initialized",
            "skipped": False,
            "execution_time": None,
        }

        try:
            if self.graph:
                result = self.graph.invoke(initial_state)
            else:
                logger.warning("LangGraph not available, using sequential execution")
                result = self._run_sequential(initial_state)
        except PipelineError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in enrichment pipeline: {str(e)}")
            raise PipelineError(str(e), cause=e) from e

        execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        image_reference = result.get("image_reference")
        post_id = image_reference.post_id if image_reference else None

        if result.get("skipped"):
            return RecordResult(
                status=RecordStatus.SKIPPED,
                post_id=post_id,
                stage=result.get("pipeline_step"),
                execution_time=execution_time,
            )

        logger.info(f"Post {post_id} processed successfully in {execution_time:.2f}s")
        return RecordResult(
            status=RecordStatus.PROCESSED,
            post_id=post_id,
            point_id=result.get("point_id"),
            execution_time=execution_time,
        )
