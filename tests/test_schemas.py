"""Tests for Pydantic schema models."""

from datetime import date

import pytest
from pydantic import ValidationError

from docsim import ClusterAssignment, Dendrogram, DendrogramMerge, Document, LabeledDocument, TermCount


class TestDocument:
    """Tests for the Document schema."""

    def test_document_creation(self):
        doc = Document(id="d1", group="lincoln", text="Four score", date="1863-11-19")
        assert doc.id == "d1"
        assert doc.group == "lincoln"
        assert doc.date == date(1863, 11, 19)

    def test_document_minimal(self):
        doc = Document(id="d1", group="g", text="")
        assert doc.date is None

    def test_document_is_immutable(self):
        doc = Document(id="d1", group="g", text="text")
        with pytest.raises(ValidationError):
            doc.text = "changed"

    def test_missing_group(self):
        with pytest.raises(ValidationError):
            Document(id="d1", text="text")


class TestTermCount:
    """Tests for the TermCount schema."""

    def test_zero_count_rejected(self):
        with pytest.raises(ValidationError):
            TermCount(group="g", term="t", count=0)


class TestClusterAssignment:
    """Tests for the ClusterAssignment schema."""

    def test_members(self):
        assignment = ClusterAssignment(labels={"a": 1, "b": 2, "c": 1}, k=2, method="test")
        assert assignment.members(1) == ["a", "c"]
        assert assignment.members(3) == []

    def test_k_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClusterAssignment(labels={}, k=0, method="test")


class TestLabeledDocument:
    """Tests for the LabeledDocument schema."""

    def test_to_record_with_date(self):
        doc = LabeledDocument(id="d1", group="g", text="hi", date=date(2020, 1, 2), cluster=3)
        assert doc.to_record() == {"id": "d1", "group": "g", "date": "2020-01-02", "cluster": 3, "text": "hi"}

    def test_cluster_must_be_positive(self):
        with pytest.raises(ValidationError):
            LabeledDocument(id="d1", group="g", text="hi", cluster=0)


class TestDendrogram:
    """Tests for the Dendrogram schema."""

    def test_heights(self):
        dendrogram = Dendrogram(
            groups=["a", "b", "c"],
            method="single",
            merges=[
                DendrogramMerge(left=0, right=1, height=0.1, size=2),
                DendrogramMerge(left=2, right=3, height=0.4, size=3),
            ],
        )
        assert dendrogram.heights == [0.1, 0.4]
