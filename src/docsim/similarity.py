"""
Pairwise cosine similarity between groups' term-count vectors.

Each group is a sparse vector over the shared vocabulary, with an implicit
zero for terms it never used. Every unordered pair of distinct groups gets
one score; the result is ranked for inspection.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from itertools import combinations

from tqdm import tqdm

from .schemas import SimilarityPair, TermCount
from .term_counts import group_vectors

logger = logging.getLogger(__name__)


def cosine_similarity(vec1: Mapping[str, int], vec2: Mapping[str, int]) -> float:
    """
    Calculate cosine similarity between two sparse count vectors.

    Args:
        vec1: First vector, term -> count
        vec2: Second vector, term -> count

    Returns:
        Similarity in [0, 1], or 0.0 if either vector is all zeros
    """
    if len(vec2) < len(vec1):
        vec1, vec2 = vec2, vec1
    dot_product = sum(v * vec2.get(t, 0) for t, v in vec1.items())
    norm_sq1 = sum(v * v for v in vec1.values())
    norm_sq2 = sum(v * v for v in vec2.values())

    if norm_sq1 == 0 or norm_sq2 == 0:
        return 0.0

    # Single sqrt of the product keeps identical integer vectors at exactly 1.0
    score = dot_product / math.sqrt(norm_sq1 * norm_sq2)
    return min(1.0, max(0.0, score))


def pairwise_similarity(
    counts: Iterable[TermCount],
    groups: Iterable[str] | None = None,
    show_progress: bool = False,
) -> list[SimilarityPair]:
    """
    Compute cosine similarity for every unordered pair of distinct groups.

    Args:
        counts: Term counts for the corpus
        groups: All groups to compare. Groups without any counts take part
            with a zero vector. Defaults to the groups found in counts.
        show_progress: Whether to show a progress bar

    Returns:
        C(n, 2) SimilarityPairs, highest score first, ties by (group_a, group_b)
    """
    vectors = group_vectors(counts)
    all_groups = sorted(set(vectors) | set(groups or ()))
    n_pairs = len(all_groups) * (len(all_groups) - 1) // 2

    logger.info(f"[SIMILARITY] Comparing {len(all_groups)} groups ({n_pairs} pairs)")

    iterator = combinations(all_groups, 2)
    if show_progress:
        iterator = tqdm(iterator, total=n_pairs, desc="Pairwise similarity", unit="pair")

    pairs = [
        SimilarityPair(
            group_a=a,
            group_b=b,
            score=cosine_similarity(vectors.get(a, {}), vectors.get(b, {})),
        )
        for a, b in iterator
    ]
    pairs.sort(key=lambda p: (-p.score, p.group_a, p.group_b))

    if pairs:
        top = pairs[0]
        logger.info(f"[SIMILARITY] Most similar: {top.group_a} / {top.group_b} ({top.score:.3f})")
    return pairs


def filter_pairs(pairs: Iterable[SimilarityPair], group: str) -> list[SimilarityPair]:
    """Pairs involving the given group, in their original rank order."""
    return [p for p in pairs if p.involves(group)]
