"""Pytest configuration and fixtures."""

import pytest

from docsim import Document

DOCSIM_ENV_VARS = (
    "DOCSIM_LINKAGE",
    "DOCSIM_N_CLUSTERS",
    "DOCSIM_METHOD",
    "DOCSIM_SEED",
    "DOCSIM_MIN_TOKEN_LENGTH",
    "DOCSIM_SHOW_PROGRESS",
    "DOCSIM_STOPWORDS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove DOCSIM_* variables so tests see only what they set."""
    for name in DOCSIM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def cat_docs() -> list[Document]:
    """Two identical groups and one unrelated group."""
    return [
        Document(id="a1", group="A", text="the cat sat"),
        Document(id="b1", group="B", text="the cat sat"),
        Document(id="c1", group="C", text="dogs run fast"),
    ]


@pytest.fixture
def speech_docs() -> list[dict]:
    """A small multi-document corpus as plain dicts."""
    return [
        {"id": "1", "group": "lincoln", "text": "A new nation, conceived in liberty.", "date": "1863-11-19"},
        {"id": "2", "group": "lincoln", "text": "This nation, under God, shall have a new birth of freedom."},
        {"id": "3", "group": "kennedy", "text": "Ask what you can do for your country."},
        {"id": "4", "group": "kennedy", "text": "We choose to go to the moon."},
        {"id": "5", "group": "roosevelt", "text": "The only thing we have to fear is fear itself."},
        {"id": "6", "group": "obama", "text": "Our nation can change. Freedom and liberty for our country."},
    ]
