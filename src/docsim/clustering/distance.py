"""Dense group x group distance matrix built from similarity pairs."""

import logging
from collections.abc import Iterable

import numpy as np

from ..errors import DataIntegrityError
from ..schemas import SimilarityPair

logger = logging.getLogger(__name__)


class DistanceMatrix:
    """Square, symmetric, zero-diagonal matrix of ``1 - similarity`` indexed by group."""

    def __init__(self, groups: list[str], values: np.ndarray):
        """
        Args:
            groups: Row/column labels, in matrix order
            values: n x n array of distances
        """
        values = np.array(values, dtype=np.float64)
        if values.shape != (len(groups), len(groups)):
            raise DataIntegrityError(
                f"Matrix shape {values.shape} does not match {len(groups)} groups"
            )
        if len(set(groups)) != len(groups):
            raise DataIntegrityError("Duplicate group labels in distance matrix")
        if not np.array_equal(values, values.T):
            raise DataIntegrityError("Distance matrix is not symmetric")
        if np.any(np.diag(values) != 0.0):
            raise DataIntegrityError("Distance matrix diagonal is not zero")
        if np.any(values < 0.0):
            raise DataIntegrityError("Distance matrix has negative entries")

        self._groups = list(groups)
        self._index = {g: i for i, g in enumerate(self._groups)}
        self._values = values
        self._values.setflags(write=False)

    @property
    def groups(self) -> list[str]:
        return list(self._groups)

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the dense matrix."""
        return self._values

    @property
    def size(self) -> int:
        return len(self._groups)

    def index_of(self, group: str) -> int:
        if group not in self._index:
            raise KeyError(f"Unknown group {group!r}")
        return self._index[group]

    def distance(self, group_a: str, group_b: str) -> float:
        return float(self._values[self.index_of(group_a), self.index_of(group_b)])

    def condensed(self) -> np.ndarray:
        """Upper triangle in row-major order, as scipy's condensed form."""
        rows, cols = np.triu_indices(self.size, k=1)
        return self._values[rows, cols]

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            a: {b: float(self._values[i, j]) for j, b in enumerate(self._groups)}
            for i, a in enumerate(self._groups)
        }

    def to_list(self) -> list[list[float]]:
        return self._values.tolist()


def build_distance_matrix(
    pairs: Iterable[SimilarityPair],
    groups: Iterable[str] | None = None,
) -> DistanceMatrix:
    """
    Materialize ``1 - similarity`` for every pair of groups.

    Args:
        pairs: Similarity pairs, one per unordered group pair
        groups: Expected groups. Defaults to the groups named in pairs.
            A single group with no pairs needs this to be given.

    Returns:
        DistanceMatrix with groups in lexicographic order

    Raises:
        DataIntegrityError: A pair is missing, appears with conflicting
            scores, or names a group outside ``groups``
    """
    pairs = list(pairs)
    scores: dict[tuple[str, str], float] = {}
    conflicts: list[tuple[str, str]] = []

    for pair in pairs:
        seen = scores.get(pair.key)
        if seen is not None and seen != pair.score:
            conflicts.append(pair.key)
        scores.setdefault(pair.key, pair.score)

    if conflicts:
        raise DataIntegrityError(
            f"{len(conflicts)} pair(s) appear with conflicting scores: {conflicts[:5]}",
            pairs=conflicts,
        )

    named = {g for key in scores for g in key}
    if groups is None:
        ordered = sorted(named)
    else:
        ordered = sorted(set(groups))
        unknown = sorted(named - set(ordered))
        if unknown:
            raise DataIntegrityError(
                f"Similarity pairs name unknown groups: {unknown[:5]}",
                pairs=[k for k in scores if k[0] in unknown or k[1] in unknown],
            )

    n = len(ordered)
    values = np.zeros((n, n), dtype=np.float64)
    missing: list[tuple[str, str]] = []
    for i in range(n):
        for j in range(i + 1, n):
            key = (ordered[i], ordered[j])
            if key not in scores:
                missing.append(key)
                continue
            values[i, j] = values[j, i] = 1.0 - scores[key]

    if missing:
        raise DataIntegrityError(
            f"{len(missing)} group pair(s) have no similarity score: {missing[:5]}",
            pairs=missing,
        )

    logger.info(f"[DISTANCE] Built {n}x{n} distance matrix from {len(scores)} pairs")
    return DistanceMatrix(ordered, values)
