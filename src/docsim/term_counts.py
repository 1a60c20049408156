"""Term-frequency aggregation over a tokenized corpus."""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping

from .errors import MissingKeyError
from .schemas import TermCount

logger = logging.getLogger(__name__)


def count_terms(
    tokens: Iterable[tuple[str, str]],
    document_groups: Mapping[str, str],
) -> list[TermCount]:
    """
    Count token occurrences per (group, term).

    Args:
        tokens: (document_id, token) pairs, e.g. from tokenize_documents()
        document_groups: Mapping from document id to owning group

    Returns:
        TermCount list sorted by (group, term)

    Raises:
        MissingKeyError: If a token's document id has no group
    """
    counter: Counter = Counter()
    for doc_id, token in tokens:
        group = document_groups.get(doc_id)
        if group is None:
            raise MissingKeyError(f"Document {doc_id!r} has no group", missing=[doc_id])
        counter[(group, token)] += 1

    counts = [
        TermCount(group=group, term=term, count=n)
        for (group, term), n in sorted(counter.items())
    ]
    n_groups = len({c.group for c in counts})
    n_terms = len({c.term for c in counts})
    logger.info(f"[COUNT] {len(counts)} term counts across {n_groups} groups, vocabulary {n_terms}")
    return counts


def group_vectors(counts: Iterable[TermCount]) -> dict[str, dict[str, int]]:
    """Sparse term-count vector per group."""
    vectors: dict[str, dict[str, int]] = {}
    for c in counts:
        vectors.setdefault(c.group, {})[c.term] = c.count
    return vectors


def top_terms(counts: Iterable[TermCount], n: int = 10) -> dict[str, list[tuple[str, int]]]:
    """
    Most frequent terms per group.

    Args:
        counts: Term counts
        n: Terms to keep per group

    Returns:
        Mapping group -> [(term, count)], highest count first, ties alphabetical
    """
    return {
        group: sorted(vector.items(), key=lambda x: (-x[1], x[0]))[:n]
        for group, vector in sorted(group_vectors(counts).items())
    }
