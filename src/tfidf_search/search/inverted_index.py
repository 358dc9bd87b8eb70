"""In-memory inverted index.

All indexing state lives in four maps owned by one ``InvertedIndex``:

- postings: term -> ids of documents containing it
- term frequencies: id -> term -> count
- term sequences: id -> terms in tokenizer order, duplicates kept
- raw text: id -> original content

``add_document`` and ``remove_document`` are the only mutation paths and
always update the four maps together. The index is not thread-safe; callers
sharing it across threads must hold one lock around every call (see
``tfidf_search.engine.SearchEngine``).
"""

from __future__ import annotations

from collections import Counter
import logging

from tfidf_search.search.analyzers import Tokenizer, WhitespaceTokenizer


logger = logging.getLogger(__name__)


class InvertedIndex:
    """Term -> document postings plus per-document term statistics."""

    def __init__(self, tokenizer: Tokenizer | None = None) -> None:
        self._tokenizer: Tokenizer = WhitespaceTokenizer() if tokenizer is None else tokenizer
        self._postings: dict[str, set[str]] = {}
        self._term_frequency: dict[str, dict[str, int]] = {}
        self._term_sequence: dict[str, tuple[str, ...]] = {}
        self._raw_text: dict[str, str] = {}

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def add_document(self, doc_id: str, content: str) -> None:
        """Index ``content`` under ``doc_id``, replacing any previous version."""

        if doc_id in self._term_frequency:
            logger.debug("Replacing indexed document %s", doc_id)
            self.remove_document(doc_id)

        terms = tuple(self._tokenizer.tokenize(content))
        counts = dict(Counter(terms))

        self._raw_text[doc_id] = content
        self._term_sequence[doc_id] = terms
        self._term_frequency[doc_id] = counts
        for term in counts:
            self._postings.setdefault(term, set()).add(doc_id)

        logger.debug("Indexed document %s (%d terms, %d distinct)", doc_id, len(terms), len(counts))

    def remove_document(self, doc_id: str) -> None:
        """Erase every trace of ``doc_id``. Unknown ids are ignored."""

        counts = self._term_frequency.pop(doc_id, None)
        if counts is None:
            return

        for term in counts:
            doc_ids = self._postings.get(term)
            if doc_ids is None:
                continue
            doc_ids.discard(doc_id)
            if not doc_ids:
                del self._postings[term]

        del self._term_sequence[doc_id]
        del self._raw_text[doc_id]
        logger.debug("Removed document %s", doc_id)

    def get_document_ids(self, term: str) -> frozenset[str]:
        return frozenset(self._postings.get(term, ()))

    def get_term_frequency(self, doc_id: str, term: str) -> int:
        counts = self._term_frequency.get(doc_id)
        if counts is None:
            return 0
        return counts.get(term, 0)

    def get_terms_in_document(self, doc_id: str) -> list[str]:
        """Return the terms recorded at index time, in order and with duplicates."""
        return list(self._term_sequence.get(doc_id, ()))

    def get_document_count(self) -> int:
        return len(self._term_frequency)

    def get_document_frequency(self, term: str) -> int:
        doc_ids = self._postings.get(term)
        return len(doc_ids) if doc_ids else 0

    def get_document_text(self, doc_id: str) -> str | None:
        return self._raw_text.get(doc_id)

    def document_ids(self) -> tuple[str, ...]:
        """Indexed ids in indexing order; a re-indexed id moves to the end."""
        return tuple(self._term_frequency)

    def vocabulary(self) -> frozenset[str]:
        return frozenset(self._postings)

    def retokenize(self, tokenizer: Tokenizer) -> None:
        """Switch tokenizers and rebuild every document from its stored text.

        Every document is tokenized before anything is replaced, so a tokenizer
        that raises leaves the index and its current tokenizer untouched.
        """

        sequences = {doc_id: tuple(tokenizer.tokenize(content)) for doc_id, content in self._raw_text.items()}

        postings: dict[str, set[str]] = {}
        term_frequency: dict[str, dict[str, int]] = {}
        for doc_id, terms in sequences.items():
            counts = dict(Counter(terms))
            term_frequency[doc_id] = counts
            for term in counts:
                postings.setdefault(term, set()).add(doc_id)

        self._tokenizer = tokenizer
        self._postings = postings
        self._term_frequency = term_frequency
        self._term_sequence = sequences
        logger.info("Re-tokenized %d documents", len(sequences))

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._term_frequency

    def __len__(self) -> int:
        return len(self._term_frequency)
