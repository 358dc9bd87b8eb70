"""Shared test fixtures and configuration."""

import os

import pytest

from tfidf_search.search.inverted_index import InvertedIndex
from tfidf_search.search.tfidf import TfIdfRanker


# Complete test environment that overrides every configurable value
TEST_ENV = {
    "TFIDF_SEARCH_INDEX_NAME": "test",
    "TFIDF_SEARCH_TOKENIZER": "whitespace",
    "TFIDF_SEARCH_STOPWORDS": "",
    "TFIDF_SEARCH_MAX_RESULTS": "0",
    "TFIDF_SEARCH_LOG_LEVEL": "info",
    "TFIDF_SEARCH_LOG_JSON": "true",
}


for key, value in TEST_ENV.items():
    os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset configuration env vars before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def index() -> InvertedIndex:
    return InvertedIndex()


@pytest.fixture
def ranker() -> TfIdfRanker:
    return TfIdfRanker()


@pytest.fixture
def sample_corpus() -> dict[str, str]:
    """Small corpus where 'search' is common and the other terms are rare."""
    return {
        "doc1": "search engine search information",
        "doc2": "inverted index search",
        "doc3": "ranking algorithm",
        "doc4": "search engine optimization",
    }


@pytest.fixture
def populated_index(index: InvertedIndex, sample_corpus: dict[str, str]) -> InvertedIndex:
    for doc_id, content in sample_corpus.items():
        index.add_document(doc_id, content)
    return index
