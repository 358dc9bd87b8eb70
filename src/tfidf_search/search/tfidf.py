"""TF-IDF scoring and ranking over an ``InvertedIndex``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tfidf_search.search.inverted_index import InvertedIndex
from tfidf_search.search.stats import calculate_idf, calculate_tf


@dataclass(frozen=True)
class RankedDocument:
    """A document matched by a query, with its summed TF-IDF score."""

    doc_id: str
    score: float
    matched_terms: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoredTerm:
    term: str
    score: float
    frequency: int


class TfIdfRanker:
    """Stateless TF-IDF ranker; every call reads the index it is given.

    Ranking is coverage first: a document containing more distinct query
    terms always ranks above one containing fewer, whatever the scores.
    Summed TF-IDF only orders documents with equal coverage, and indexing
    order breaks any remaining tie.
    """

    def tf(self, index: InvertedIndex, doc_id: str, term: str) -> float:
        return calculate_tf(index.get_term_frequency(doc_id, term))

    def idf(self, index: InvertedIndex, term: str) -> float:
        return calculate_idf(index.get_document_frequency(term), index.get_document_count())

    def score(self, index: InvertedIndex, doc_id: str, term: str) -> float:
        return self.tf(index, doc_id, term) * self.idf(index, term)

    def rank_documents(self, index: InvertedIndex, query_terms: Sequence[str]) -> list[RankedDocument]:
        """Rank every document containing at least one query term."""

        distinct_terms = list(dict.fromkeys(query_terms))
        candidates: set[str] = set()
        for term in distinct_terms:
            candidates.update(index.get_document_ids(term))
        if not candidates:
            return []

        ranked: list[tuple[int, float, RankedDocument]] = []
        for doc_id in index.document_ids():
            if doc_id not in candidates:
                continue
            matched = tuple(term for term in distinct_terms if index.get_term_frequency(doc_id, term) > 0)
            # Duplicated query terms weigh in once per occurrence.
            total = sum(self.score(index, doc_id, term) for term in query_terms)
            ranked.append((len(matched), total, RankedDocument(doc_id=doc_id, score=total, matched_terms=matched)))

        ranked.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)
        return [entry[2] for entry in ranked]

    def term_importance(self, index: InvertedIndex, doc_id: str) -> list[ScoredTerm]:
        """Order the document's distinct terms by score, then by raw frequency."""

        scored = [
            ScoredTerm(
                term=term,
                score=self.score(index, doc_id, term),
                frequency=index.get_term_frequency(doc_id, term),
            )
            for term in dict.fromkeys(index.get_terms_in_document(doc_id))
        ]
        scored.sort(key=lambda entry: (entry.score, entry.frequency), reverse=True)
        return scored
