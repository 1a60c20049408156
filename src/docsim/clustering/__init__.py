"""Distance matrices, clustering and cluster-label joins."""

from .distance import DistanceMatrix, build_distance_matrix
from .hierarchical import LINKAGE_METHODS, UnionFind, cut_tree, hierarchical_cluster, linkage
from .kmeans import kmeans_cluster, term_matrix
from .merge import merge_cluster_labels

__all__ = [
    # Distance
    "DistanceMatrix",
    "build_distance_matrix",
    # Hierarchical
    "LINKAGE_METHODS",
    "UnionFind",
    "linkage",
    "cut_tree",
    "hierarchical_cluster",
    # K-means
    "kmeans_cluster",
    "term_matrix",
    # Join
    "merge_cluster_labels",
]
