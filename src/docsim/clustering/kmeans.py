"""Seeded k-means as an alternative flat clusterer over term vectors."""

import logging
from collections.abc import Iterable

import numpy as np
from sklearn.cluster import KMeans

from ..errors import ConfigurationError
from ..schemas import ClusterAssignment, TermCount
from ..term_counts import group_vectors
from .hierarchical import validate_cluster_count

logger = logging.getLogger(__name__)

DEFAULT_SEED = 42


def term_matrix(
    counts: Iterable[TermCount],
    groups: Iterable[str] | None = None,
) -> tuple[list[str], list[str], np.ndarray]:
    """
    Dense group x term count matrix.

    Returns:
        (groups, vocabulary, matrix), groups and vocabulary sorted
    """
    vectors = group_vectors(counts)
    ordered = sorted(set(vectors) | set(groups or ()))
    vocabulary = sorted({t for v in vectors.values() for t in v})
    column = {t: j for j, t in enumerate(vocabulary)}

    matrix = np.zeros((len(ordered), len(vocabulary)), dtype=np.float64)
    for i, group in enumerate(ordered):
        for term, count in vectors.get(group, {}).items():
            matrix[i, column[term]] = count
    return ordered, vocabulary, matrix


def kmeans_cluster(
    counts: Iterable[TermCount],
    k: int,
    groups: Iterable[str] | None = None,
    seed: int = DEFAULT_SEED,
    n_init: int = 10,
) -> ClusterAssignment:
    """
    Cluster groups with k-means on L2-normalized term vectors.

    Normalizing rows makes squared euclidean distance equal to
    ``2 * (1 - cosine)``, so the grouping follows cosine similarity.

    Args:
        counts: Term counts for the corpus
        k: Number of clusters
        groups: All groups to cluster; defaults to the groups in counts
        seed: Random seed for centroid initialization
        n_init: Number of initializations; the best inertia wins

    Returns:
        ClusterAssignment with ids 1..k in order of first group

    Raises:
        ConfigurationError: If k is outside [1, n], or k < n exceeds the
            number of distinct normalized term vectors
    """
    ordered, vocabulary, matrix = term_matrix(counts, groups)
    n = len(ordered)
    validate_cluster_count(k, n)

    # Every group is its own cluster, duplicates included
    if k == n:
        logger.info(f"[CLUSTER] k-means with k=n={n}: one cluster per group")
        return ClusterAssignment(labels={g: i for i, g in enumerate(ordered, start=1)}, k=k, method="kmeans")

    if not vocabulary:
        matrix = np.zeros((n, 1), dtype=np.float64)

    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    normalized = np.divide(matrix, norms, out=np.zeros_like(matrix), where=norms > 0)

    n_distinct = len(np.unique(normalized, axis=0))
    if k > n_distinct:
        raise ConfigurationError(
            f"Cluster count k={k} exceeds the {n_distinct} distinct term vectors among {n} groups"
        )

    logger.info(f"[CLUSTER] k-means with k={k}, seed={seed} over {n} groups x {len(vocabulary)} terms")
    model = KMeans(n_clusters=k, random_state=seed, n_init=n_init)
    raw_labels = model.fit_predict(normalized)

    relabel: dict[int, int] = {}
    labels: dict[str, int] = {}
    for group, raw in zip(ordered, raw_labels):
        raw = int(raw)
        if raw not in relabel:
            relabel[raw] = len(relabel) + 1
        labels[group] = relabel[raw]

    if len(relabel) != k:
        raise ConfigurationError(f"k-means found {len(relabel)} clusters, expected k={k}")
    return ClusterAssignment(labels=labels, k=k, method="kmeans")
