"""Pydantic models for the corpus similarity pipeline."""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Document(BaseModel):
    """A raw text document owned by a group (author, speaker, ...)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier for the document")
    group: str = Field(..., description="Group that owns the document, e.g. the author")
    text: str = Field(..., description="The raw text content of the document")
    date: datetime.date | None = Field(default=None, description="Optional date the document was written")


class TermCount(BaseModel):
    """Number of times a term occurs across all documents of a group."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(..., description="Group the count belongs to")
    term: str = Field(..., description="Normalized token")
    count: int = Field(..., ge=1, description="Occurrences of the term within the group")


class SimilarityPair(BaseModel):
    """Cosine similarity between two distinct groups.

    The pair is unordered: it is always stored with ``group_a < group_b``.
    """

    model_config = ConfigDict(frozen=True)

    group_a: str = Field(..., description="Lexicographically smaller group")
    group_b: str = Field(..., description="Lexicographically larger group")
    score: float = Field(..., ge=0.0, le=1.0, description="Cosine similarity between 0 and 1")

    @model_validator(mode="before")
    @classmethod
    def order_groups(cls, data: Any) -> Any:
        if isinstance(data, dict):
            a, b = data.get("group_a"), data.get("group_b")
            if a is not None and a == b:
                raise ValueError(f"Self-pair ({a}, {b}) is not a similarity pair")
            if a is not None and b is not None and b < a:
                data = {**data, "group_a": b, "group_b": a}
        return data

    @property
    def key(self) -> tuple[str, str]:
        return (self.group_a, self.group_b)

    def involves(self, group: str) -> bool:
        return group in (self.group_a, self.group_b)


class DendrogramMerge(BaseModel):
    """One agglomeration step.

    Leaves are numbered ``0..n-1`` in the distance matrix's group order and
    the i-th merge creates node ``n + i``.
    """

    left: int = Field(..., description="Node id of the first merged cluster")
    right: int = Field(..., description="Node id of the second merged cluster")
    height: float = Field(..., description="Linkage distance at which the merge happened")
    size: int = Field(..., description="Number of groups in the merged cluster")


class Dendrogram(BaseModel):
    """Merge order and heights of an agglomerative clustering run."""

    groups: list[str] = Field(..., description="Leaf labels, in leaf id order")
    method: str = Field(..., description="Linkage method used")
    merges: list[DendrogramMerge] = Field(default_factory=list, description="Merges in order")

    @property
    def heights(self) -> list[float]:
        return [m.height for m in self.merges]


class ClusterAssignment(BaseModel):
    """Mapping from group to a cluster id in ``[1, k]``."""

    model_config = ConfigDict(frozen=True)

    labels: dict[str, int] = Field(..., description="Cluster id per group")
    k: int = Field(..., ge=1, description="Number of clusters")
    method: str = Field(..., description="Algorithm that produced the assignment")

    def members(self, cluster: int) -> list[str]:
        """Groups assigned to a cluster, in assignment order."""
        return [g for g, c in self.labels.items() if c == cluster]


class LabeledDocument(Document):
    """A document with the cluster id of its group attached."""

    cluster: int = Field(..., ge=1, description="Cluster id of the document's group")

    def to_record(self) -> dict:
        """Flat row suitable for tabular reporting."""
        return {
            "id": self.id,
            "group": self.group,
            "date": self.date.isoformat() if self.date else None,
            "cluster": self.cluster,
            "text": self.text,
        }


class PipelineResult(BaseModel):
    """Everything produced by one pipeline run."""

    term_counts: list[TermCount] = Field(default_factory=list, description="Sparse group x term counts")
    pairs: list[SimilarityPair] = Field(default_factory=list, description="Ranked similarity pairs")
    groups: list[str] = Field(default_factory=list, description="Distance matrix row/column labels")
    distances: list[list[float]] = Field(default_factory=list, description="Dense distance matrix")
    dendrogram: Dendrogram | None = Field(default=None, description="Present for hierarchical runs")
    assignment: ClusterAssignment = Field(..., description="Cluster id per group")
    documents: list[LabeledDocument] = Field(default_factory=list, description="Documents with clusters")
