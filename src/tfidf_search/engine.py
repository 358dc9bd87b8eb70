"""Search engine facade over an inverted index and a TF-IDF ranker.

Indexing and queries go through the same tokenizer. Every call runs under
one re-entrant lock, so an engine can be shared between threads without
readers ever seeing a half-applied add or remove.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import threading

from tfidf_search.config import Settings
from tfidf_search.domain.search import Document, SearchResult, TermImportance
from tfidf_search.observability.context import bind_context
from tfidf_search.observability.metrics import (
    INDEX_DOC_COUNT,
    INDEX_OPERATIONS,
    SEARCH_LATENCY,
    SEARCH_RESULTS,
    track_latency,
)
from tfidf_search.observability.tracing import create_span
from tfidf_search.search.analyzers import Tokenizer, get_tokenizer
from tfidf_search.search.inverted_index import InvertedIndex
from tfidf_search.search.tfidf import TfIdfRanker


logger = logging.getLogger(__name__)


class SearchEngine:
    """Index documents and rank them against free-text queries."""

    def __init__(
        self,
        tokenizer: Tokenizer | None = None,
        *,
        ranker: TfIdfRanker | None = None,
        name: str = "default",
        max_results: int | None = None,
    ) -> None:
        self.name = name
        self.max_results = max_results
        self._index = InvertedIndex(tokenizer)
        self._ranker = ranker or TfIdfRanker()
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchEngine:
        tokenizer = get_tokenizer(settings.tokenizer, stopwords=settings.get_stopwords())
        return cls(tokenizer, name=settings.index_name, max_results=settings.get_max_results())

    @property
    def index(self) -> InvertedIndex:
        return self._index

    @property
    def tokenizer(self) -> Tokenizer:
        return self._index.tokenizer

    def index_document(self, doc_id: str, content: str) -> None:
        with self._lock, bind_context(index=self.name):
            self._index.add_document(doc_id, content)
            self._record_mutation("add")

    def index_documents(self, documents: Iterable[Document]) -> int:
        """Index a batch of documents; returns how many were indexed."""
        count = 0
        with self._lock, bind_context(index=self.name):
            for document in documents:
                self._index.add_document(document.id, document.content)
                count += 1
            self._record_mutation("add", count)
            logger.info("Indexed %d documents into %s", count, self.name)
        return count

    def remove_document(self, doc_id: str) -> None:
        with self._lock, bind_context(index=self.name):
            if doc_id not in self._index:
                return
            self._index.remove_document(doc_id)
            self._record_mutation("remove")

    def search(self, query: str, limit: int | None = None) -> list[SearchResult]:
        """Rank documents for ``query``; an empty list means no match."""

        limit = self.max_results if limit is None else limit
        with (
            self._lock,
            bind_context(index=self.name),
            create_span("search.query", attributes={"search.index": self.name}) as span,
        ):
            with track_latency(SEARCH_LATENCY, index=self.name):
                query_terms = self._index.tokenizer.tokenize(query)
                ranked = self._ranker.rank_documents(self._index, query_terms)
            if limit is not None:
                ranked = ranked[: max(limit, 0)]
            span.set_attribute("search.term_count", len(query_terms))
            span.set_attribute("search.result_count", len(ranked))
            SEARCH_RESULTS.labels(index=self.name).observe(len(ranked))
            logger.debug("Query %r matched %d documents", query, len(ranked))

        return [
            SearchResult(document_id=entry.doc_id, score=entry.score, matched_terms=list(entry.matched_terms))
            for entry in ranked
        ]

    def term_importance(self, doc_id: str, limit: int | None = None) -> list[TermImportance]:
        """Return the document's terms, most distinctive first."""

        with self._lock:
            scored = self._ranker.term_importance(self._index, doc_id)
        if limit is not None:
            scored = scored[: max(limit, 0)]
        return [TermImportance(term=entry.term, score=entry.score, frequency=entry.frequency) for entry in scored]

    def document_count(self) -> int:
        with self._lock:
            return self._index.get_document_count()

    def __contains__(self, doc_id: object) -> bool:
        with self._lock:
            return doc_id in self._index

    def _record_mutation(self, operation: str, amount: int = 1) -> None:
        if amount:
            INDEX_OPERATIONS.labels(index=self.name, operation=operation).inc(amount)
        INDEX_DOC_COUNT.labels(index=self.name).set(self._index.get_document_count())
