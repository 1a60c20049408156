"""Text normalization and stop-word aware tokenization."""

import logging
import re
from collections.abc import Iterable, Iterator

from .schemas import Document

logger = logging.getLogger(__name__)

# Default English stop words
STOPWORDS = frozenset({
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "to", "of", "in",
    "for", "on", "with", "at", "by", "from", "as", "into", "through",
    "during", "before", "after", "above", "below", "between", "under",
    "again", "further", "then", "once", "here", "there", "when", "where",
    "why", "how", "all", "each", "every", "few", "more", "most", "other",
    "some", "such", "no", "nor", "not", "only", "own", "same", "so", "than",
    "too", "very", "just", "and", "but", "if", "or", "because", "until",
    "while", "over", "up", "down", "out", "off", "about", "against", "any",
    "both", "i", "me", "my", "myself", "we", "our", "ours", "ourselves",
    "you", "your", "yours", "yourself", "yourselves", "he", "him", "his",
    "himself", "she", "her", "hers", "herself", "it", "its", "itself",
    "they", "them", "their", "theirs", "themselves", "what", "which", "who",
    "whom", "whose", "this", "that", "these", "those", "am", "also", "now",
})

_LINE_BREAKS = re.compile(r"[\r\n]+")
_APOSTROPHES = re.compile(r"['’]")
_NON_LETTERS = re.compile(r"[^\w\s]|[\d_]")


def _stop_set(stopwords: Iterable[str]) -> frozenset[str]:
    """Lower-cased stop-word set; the default list is already lower-case."""
    if stopwords is STOPWORDS:
        return STOPWORDS
    return frozenset(w.lower() for w in stopwords)


def _split(text: str, stop: frozenset[str], min_length: int) -> Iterator[str]:
    for token in normalize_text(text).split():
        if len(token) >= min_length and token not in stop:
            yield token


def normalize_text(text: str) -> str:
    """
    Normalize raw document text before splitting.

    Performs:
    - Lowercase conversion
    - Hard line breaks collapsed to spaces
    - Apostrophes dropped ("don't" -> "dont")
    - Other punctuation, digits and underscores replaced by spaces

    Args:
        text: Raw document text

    Returns:
        Normalized text
    """
    text = text.lower()
    text = _LINE_BREAKS.sub(" ", text)
    text = _APOSTROPHES.sub("", text)
    return _NON_LETTERS.sub(" ", text)


def tokenize(
    text: str,
    stopwords: Iterable[str] = STOPWORDS,
    min_length: int = 1,
) -> Iterator[str]:
    """
    Lazily split text into normalized tokens, skipping stop words.

    Args:
        text: Raw document text
        stopwords: Words to drop (compared case-insensitively)
        min_length: Minimum token length to keep

    Yields:
        Normalized tokens in document order
    """
    return _split(text, _stop_set(stopwords), min_length)


def tokenize_documents(
    documents: Iterable[Document],
    stopwords: Iterable[str] = STOPWORDS,
    min_length: int = 1,
) -> Iterator[tuple[str, str]]:
    """
    Lazily tokenize a corpus into (document_id, token) pairs.

    The returned generator is consumed once; call again on the same input
    to restart.

    Args:
        documents: Documents to tokenize
        stopwords: Words to drop (compared case-insensitively)
        min_length: Minimum token length to keep

    Yields:
        (document_id, token) tuples
    """
    stop = _stop_set(stopwords)
    n_docs = 0
    n_tokens = 0
    for doc in documents:
        n_docs += 1
        for token in _split(doc.text, stop, min_length):
            n_tokens += 1
            yield doc.id, token
    logger.debug(f"[TOKENIZE] Emitted {n_tokens} tokens from {n_docs} documents")
