"""Join cluster assignments back onto document metadata."""

import logging
from collections.abc import Iterable

from ..errors import MissingKeyError
from ..schemas import ClusterAssignment, Document, LabeledDocument

logger = logging.getLogger(__name__)


def merge_cluster_labels(
    assignment: ClusterAssignment,
    documents: Iterable[Document],
) -> list[LabeledDocument]:
    """
    Left-join cluster ids onto documents by group key.

    Args:
        assignment: Cluster id per group
        documents: Documents to label, order preserved

    Returns:
        One LabeledDocument per input document

    Raises:
        MissingKeyError: If a document's group has no cluster, or a
            clustered group has no documents
    """
    documents = list(documents)
    doc_groups = {d.group for d in documents}

    missing = sorted(doc_groups - set(assignment.labels))
    if missing:
        raise MissingKeyError(f"No cluster assignment for groups: {missing[:5]}", missing=missing)

    orphaned = sorted(set(assignment.labels) - doc_groups)
    if orphaned:
        raise MissingKeyError(f"Clustered groups have no documents: {orphaned[:5]}", missing=orphaned)

    labeled = [
        LabeledDocument(**doc.model_dump(), cluster=assignment.labels[doc.group])
        for doc in documents
    ]
    logger.info(f"[MERGE] Labeled {len(labeled)} documents across {assignment.k} clusters")
    return labeled
