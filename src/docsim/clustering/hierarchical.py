"""Agglomerative hierarchical clustering over a DistanceMatrix."""

import logging
import math
from typing import Literal, get_args

import numpy as np

from ..errors import ConfigurationError
from ..schemas import ClusterAssignment, Dendrogram, DendrogramMerge
from .distance import DistanceMatrix

logger = logging.getLogger(__name__)

LinkageMethod = Literal["single", "complete", "average", "centroid", "ward"]
LINKAGE_METHODS: tuple[str, ...] = get_args(LinkageMethod)

# Methods whose Lance-Williams update is defined on squared distances
_SQUARED_METHODS = frozenset({"centroid", "ward"})


class UnionFind:
    """Union-Find data structure for efficient cluster merging."""

    def __init__(self):
        self.parent: dict[str, str] = {}
        self.rank: dict[str, int] = {}

    def add(self, x: str) -> None:
        """Register x as a singleton set; registration order fixes get_clusters() order."""
        if x not in self.parent:
            self.parent[x] = x
            self.rank[x] = 0

    def find(self, x: str) -> str:
        """Find the root of the set containing x with path compression."""
        self.add(x)
        if self.parent[x] != x:
            self.parent[x] = self.find(self.parent[x])
        return self.parent[x]

    def union(self, x: str, y: str) -> None:
        """Union the sets containing x and y by rank."""
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return

        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
        elif self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] += 1

    def get_clusters(self) -> dict[str, list[str]]:
        """Get all clusters as a dict mapping root -> members, in insertion order."""
        clusters: dict[str, list[str]] = {}
        for x in self.parent:
            clusters.setdefault(self.find(x), []).append(x)
        return clusters


def validate_cluster_count(k: int, n_groups: int) -> None:
    """Raise ConfigurationError unless 1 <= k <= n_groups."""
    if isinstance(k, bool) or not isinstance(k, int):
        raise ConfigurationError(f"Cluster count must be an integer, got {k!r}")
    if k < 1 or k > n_groups:
        raise ConfigurationError(f"Cluster count k={k} must be between 1 and {n_groups}")


def _validate_method(method: str) -> None:
    if method not in LINKAGE_METHODS:
        raise ConfigurationError(
            f"Unknown linkage method {method!r}; expected one of {', '.join(LINKAGE_METHODS)}"
        )


def _lance_williams(
    method: str,
    d_ik: np.ndarray,
    d_jk: np.ndarray,
    d_ij: float,
    n_i: int,
    n_j: int,
    n_k: np.ndarray,
) -> np.ndarray:
    """Distance from every remaining cluster k to the union of clusters i and j."""
    if method == "single":
        return np.minimum(d_ik, d_jk)
    if method == "complete":
        return np.maximum(d_ik, d_jk)
    if method == "average":
        return (n_i * d_ik + n_j * d_jk) / (n_i + n_j)
    if method == "centroid":
        n = n_i + n_j
        return np.maximum((n_i * d_ik + n_j * d_jk) / n - n_i * n_j * d_ij / (n * n), 0.0)
    # ward
    return ((n_i + n_k) * d_ik + (n_j + n_k) * d_jk - n_k * d_ij) / (n_i + n_j + n_k)


def linkage(matrix: DistanceMatrix, method: str = "ward") -> Dendrogram:
    """
    Agglomerate groups bottom-up into a dendrogram.

    Starts with every group as its own cluster and repeatedly merges the two
    closest clusters, updating distances with the Lance-Williams recurrence.
    Centroid and ward work on squared distances and report the square root
    as the merge height.

    Ties are broken by the smallest (row, column) among the current cluster
    slots, where a merged cluster takes over the lower slot. Identical input
    order therefore always yields the identical dendrogram.

    Args:
        matrix: Distance matrix between groups
        method: One of LINKAGE_METHODS

    Returns:
        Dendrogram with n - 1 merges

    Raises:
        ConfigurationError: If the linkage method is unknown
    """
    _validate_method(method)

    n = matrix.size
    squared = method in _SQUARED_METHODS
    d = np.array(matrix.values, dtype=np.float64)
    if squared:
        d = d * d
    np.fill_diagonal(d, np.inf)

    node_ids = list(range(n))
    sizes = np.ones(n, dtype=np.int64)
    active = np.ones(n, dtype=bool)
    merges: list[DendrogramMerge] = []

    for step in range(n - 1):
        # First minimum in row-major order, so i < j
        i, j = divmod(int(np.argmin(d)), n)
        d_ij = float(d[i, j])
        n_i, n_j = int(sizes[i]), int(sizes[j])

        height = math.sqrt(max(d_ij, 0.0)) if squared else d_ij
        merges.append(
            DendrogramMerge(
                left=min(node_ids[i], node_ids[j]),
                right=max(node_ids[i], node_ids[j]),
                height=height,
                size=n_i + n_j,
            )
        )

        others = np.flatnonzero(active)
        others = others[(others != i) & (others != j)]
        if others.size:
            updated = _lance_williams(method, d[i, others], d[j, others], d_ij, n_i, n_j, sizes[others])
            d[i, others] = updated
            d[others, i] = updated

        d[j, :] = np.inf
        d[:, j] = np.inf
        active[j] = False
        sizes[i] = n_i + n_j
        node_ids[i] = n + step

    logger.info(f"[CLUSTER] {method} linkage produced {len(merges)} merges over {n} groups")
    return Dendrogram(groups=matrix.groups, method=method, merges=merges)


def cut_tree(dendrogram: Dendrogram, k: int) -> ClusterAssignment:
    """
    Cut a dendrogram into exactly k flat clusters.

    Applies the first n - k merges, which undoes the last k - 1. For
    single, complete, average and ward these are also the k - 1 highest
    merges. Centroid linkage can produce inversions (a later merge lower
    than an earlier one); merge order is still used there, because it is
    always a valid cut of the tree. Cluster ids run 1..k in order of each
    cluster's first group in the dendrogram's leaf order.

    Args:
        dendrogram: Result of linkage()
        k: Number of clusters

    Returns:
        ClusterAssignment covering every leaf group

    Raises:
        ConfigurationError: If k is outside [1, n]
    """
    groups = dendrogram.groups
    n = len(groups)
    validate_cluster_count(k, n)

    union_find = UnionFind()
    for group in groups:
        union_find.add(group)

    representative = dict(enumerate(groups))
    for step, merge in enumerate(dendrogram.merges[: n - k]):
        left = representative[merge.left]
        union_find.union(left, representative[merge.right])
        representative[n + step] = left

    labels: dict[str, int] = {}
    for cluster_id, members in enumerate(union_find.get_clusters().values(), start=1):
        for member in members:
            labels[member] = cluster_id

    labels = {g: labels[g] for g in groups}
    return ClusterAssignment(labels=labels, k=k, method=f"hierarchical:{dendrogram.method}")


def hierarchical_cluster(
    matrix: DistanceMatrix,
    k: int,
    method: str = "ward",
) -> tuple[Dendrogram, ClusterAssignment]:
    """
    Build the dendrogram and cut it into k clusters.

    Configuration is checked before any work is done.

    Returns:
        (dendrogram, assignment)
    """
    _validate_method(method)
    validate_cluster_count(k, matrix.size)

    dendrogram = linkage(matrix, method)
    assignment = cut_tree(dendrogram, k)
    logger.info(f"[CLUSTER] Cut dendrogram into {k} clusters")
    return dendrogram, assignment
