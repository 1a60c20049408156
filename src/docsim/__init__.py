"""docsim - which groups in a corpus write alike, by term-count cosine similarity and clustering."""

from .clustering import DistanceMatrix, build_distance_matrix, hierarchical_cluster, kmeans_cluster, merge_cluster_labels
from .config import PipelineConfig
from .errors import ConfigurationError, DataIntegrityError, DocsimError, MissingKeyError
from .pipeline import CorpusPipeline
from .schemas import (
    ClusterAssignment,
    Dendrogram,
    DendrogramMerge,
    Document,
    LabeledDocument,
    PipelineResult,
    SimilarityPair,
    TermCount,
)
from .similarity import cosine_similarity, filter_pairs, pairwise_similarity
from .term_counts import count_terms, group_vectors, top_terms
from .tokenizer import STOPWORDS, tokenize, tokenize_documents

__all__ = [
    # Pipeline
    "CorpusPipeline",
    "PipelineConfig",
    # Stages
    "tokenize",
    "tokenize_documents",
    "count_terms",
    "group_vectors",
    "top_terms",
    "cosine_similarity",
    "pairwise_similarity",
    "filter_pairs",
    "build_distance_matrix",
    "hierarchical_cluster",
    "kmeans_cluster",
    "merge_cluster_labels",
    # Schemas
    "Document",
    "TermCount",
    "SimilarityPair",
    "DistanceMatrix",
    "Dendrogram",
    "DendrogramMerge",
    "ClusterAssignment",
    "LabeledDocument",
    "PipelineResult",
    # Constants/Errors
    "STOPWORDS",
    "DocsimError",
    "ConfigurationError",
    "DataIntegrityError",
    "MissingKeyError",
]
