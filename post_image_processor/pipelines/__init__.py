# Post enrichment pipeline
# One LangGraph node per step: resolve -> lookup -> fetch -> describe -> combine -> embed -> persist -> index

from .resolve_image_node import resolve_image_reference, resolve_image_reference_node
from .fetch_post_node import fetch_post_node
from .fetch_image_node import fetch_image_node
from .describe_image_node import describe_image_node
from .combine_text_node import combine_text_node
from .generate_embedding_node import generate_embedding_node
from .persist_post_node import persist_post_node
from .index_vector_node import index_vector_node

__all__ = [
    "resolve_image_reference",
    "resolve_image_reference_node",
    "fetch_post_node",
    "fetch_image_node",
    "describe_image_node",
    "combine_text_node",
    "generate_embedding_node",
    "persist_post_node",
    "index_vector_node",
]
