"""End-to-end corpus similarity and clustering pipeline."""

import json
import logging
from pathlib import Path

from .clustering import build_distance_matrix, hierarchical_cluster, kmeans_cluster, merge_cluster_labels
from .config import PipelineConfig
from .errors import MissingKeyError
from .schemas import Document, PipelineResult
from .similarity import pairwise_similarity
from .term_counts import count_terms
from .tokenizer import tokenize_documents

logger = logging.getLogger(__name__)


class CorpusPipeline:
    """
    Group documents whose owners write alike.

    Pipeline:
    1. Tokenize documents, dropping stop words
    2. Count terms per group
    3. Cosine similarity between every pair of groups
    4. Distance matrix of 1 - similarity
    5. Cluster groups (hierarchical with a dendrogram, or seeded k-means)
    6. Join cluster ids back onto the documents
    """

    def __init__(self, config: PipelineConfig | None = None):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline settings (defaults to PipelineConfig())
        """
        self.config = config or PipelineConfig()

        # State
        self._result: PipelineResult | None = None

    @property
    def result(self) -> PipelineResult | None:
        """Result of the last run, if any."""
        return self._result

    def run(self, documents: list[Document | dict]) -> PipelineResult:
        """
        Run all stages over an in-memory corpus.

        Args:
            documents: Documents, or dicts with 'id', 'group', 'text', optional 'date'

        Returns:
            PipelineResult with ranked pairs, dendrogram, assignment and labeled documents

        Raises:
            ConfigurationError: Invalid cluster count or linkage method
            DataIntegrityError: Incomplete or contradictory similarity data
            MissingKeyError: Duplicate document ids or unmatched groups
        """
        cfg = self.config
        docs = [d if isinstance(d, Document) else Document(**d) for d in documents]

        document_groups: dict[str, str] = {}
        duplicates = []
        for doc in docs:
            if doc.id in document_groups:
                duplicates.append(doc.id)
            document_groups[doc.id] = doc.group
        if duplicates:
            raise MissingKeyError(f"Duplicate document ids: {duplicates[:5]}", missing=duplicates)

        groups = sorted(set(document_groups.values()))
        logger.info(f"Running pipeline over {len(docs)} documents from {len(groups)} groups")

        # Step 1-2: Tokenize and count
        tokens = tokenize_documents(docs, cfg.stopwords, cfg.min_token_length)
        counts = count_terms(tokens, document_groups)

        # Step 3: Pairwise similarity
        pairs = pairwise_similarity(counts, groups=groups, show_progress=cfg.show_progress)

        # Step 4: Distance matrix
        matrix = build_distance_matrix(pairs, groups=groups)

        # Step 5: Cluster
        dendrogram = None
        if cfg.method == "kmeans":
            assignment = kmeans_cluster(counts, cfg.n_clusters, groups=groups, seed=cfg.seed)
        else:
            dendrogram, assignment = hierarchical_cluster(matrix, cfg.n_clusters, cfg.linkage)

        missing = sorted(set(matrix.groups) ^ set(assignment.labels))
        if missing:
            raise MissingKeyError(f"Assignment and distance matrix disagree on groups: {missing[:5]}", missing=missing)

        # Step 6: Join
        labeled = merge_cluster_labels(assignment, docs)

        self._result = PipelineResult(
            term_counts=counts,
            pairs=pairs,
            groups=matrix.groups,
            distances=matrix.to_list(),
            dendrogram=dendrogram,
            assignment=assignment,
            documents=labeled,
        )
        logger.info(f"Pipeline complete: {assignment.k} clusters from {len(groups)} groups")
        return self._result

    def save_results(self, path: str) -> None:
        """
        Save the last run's results to a JSON file.

        Args:
            path: Path to output JSON file
        """
        if self._result is None:
            raise ValueError("No results to save. Call run() first.")

        Path(path).write_text(json.dumps(self._result.model_dump(mode="json"), indent=2))
        logger.info(f"Saved pipeline results to {path}")

    def load_results(self, path: str) -> PipelineResult:
        """
        Load pipeline results from a JSON file.

        Args:
            path: Path to input JSON file

        Returns:
            The loaded PipelineResult
        """
        data = json.loads(Path(path).read_text())
        self._result = PipelineResult.model_validate(data)

        logger.info(f"Loaded results for {len(self._result.documents)} documents from {path}")
        return self._result

    @classmethod
    def from_config(cls, config: dict) -> "CorpusPipeline":
        """
        Create a CorpusPipeline from a configuration dict.

        Args:
            config: Configuration dictionary (see PipelineConfig)

        Returns:
            Configured CorpusPipeline instance
        """
        return cls(PipelineConfig.from_config(config))
