"""Domain value objects."""

from tfidf_search.domain.search import Document, SearchResult, TermImportance


__all__ = ["Document", "SearchResult", "TermImportance"]
