"""Unit tests for the SearchEngine facade."""

from concurrent.futures import ThreadPoolExecutor

from prometheus_client import REGISTRY
import pytest

from tfidf_search.config import Settings
from tfidf_search.domain.search import Document, SearchResult, TermImportance
from tfidf_search.engine import SearchEngine
from tfidf_search.search.analyzers import AnalyzerTokenizer, CompoundSplitTokenizer, StandardAnalyzer


KOREAN_SPLITS = {
    "엔진은": ["엔진", "은"],
    "시스템입니다": ["시스템", "입니다"],
    "엔진의": ["엔진", "의"],
    "알고리즘의": ["알고리즘", "의"],
}


@pytest.fixture
def engine() -> SearchEngine:
    engine = SearchEngine(name="engine-test")
    engine.index_document("doc1", "search engine search information")
    engine.index_document("doc2", "inverted index search")
    engine.index_document("doc3", "ranking algorithm")
    return engine


@pytest.mark.unit
class TestSearch:
    def test_returns_ranked_results(self, engine):
        results = engine.search("search engine")

        assert [result.document_id for result in results] == ["doc1", "doc2"]
        assert all(isinstance(result, SearchResult) for result in results)
        assert results[0].matched_terms == ["search", "engine"]
        assert results[1].matched_terms == ["search"]

    def test_no_match_returns_empty_list(self, engine):
        assert engine.search("nothing here") == []

    def test_empty_query_returns_empty_list(self, engine):
        assert engine.search("   ") == []

    def test_fresh_engine_returns_empty_list(self):
        assert SearchEngine().search("anything") == []

    def test_limit_truncates_results(self, engine):
        assert [r.document_id for r in engine.search("search engine", limit=1)] == ["doc1"]
        assert engine.search("search", limit=0) == []

    def test_query_uses_indexing_tokenizer(self):
        engine = SearchEngine(AnalyzerTokenizer(StandardAnalyzer()))
        engine.index_document("doc", "Indexing the Documents")

        results = engine.search("documents indexed")

        assert [r.document_id for r in results] == ["doc"]
        assert results[0].matched_terms == ["document", "index"]

    def test_morphological_tokenizer_end_to_end(self):
        engine = SearchEngine(CompoundSplitTokenizer(KOREAN_SPLITS))
        engine.index_document("doc1", "검색 엔진은 정보 검색 시스템입니다")
        engine.index_document("doc2", "역색인은 검색 엔진의 핵심 자료구조입니다")
        engine.index_document("doc3", "알고리즘의 관계")

        results = engine.search("검색 엔진은")

        assert [r.document_id for r in results] == ["doc1", "doc2"]
        assert engine.term_importance("doc1")[0].term == "검색"


@pytest.mark.unit
class TestIndexing:
    def test_remove_document(self, engine):
        engine.remove_document("doc1")

        assert "doc1" not in engine
        assert engine.document_count() == 2
        assert [r.document_id for r in engine.search("engine")] == []

    def test_remove_unknown_document_is_noop(self, engine):
        engine.remove_document("missing")
        engine.remove_document("missing")

        assert engine.document_count() == 3

    def test_reindex_replaces_content(self, engine):
        engine.index_document("doc3", "search only")

        assert engine.document_count() == 3
        assert engine.search("ranking") == []
        assert "doc3" in {r.document_id for r in engine.search("search")}

    def test_index_documents_bulk(self):
        engine = SearchEngine()
        documents = [
            Document(id="a", title="First", content="alpha beta"),
            Document(id="b", title="Second", content="beta gamma"),
        ]

        assert engine.index_documents(documents) == 2
        assert engine.document_count() == 2
        assert engine.index.get_document_text("a") == "alpha beta"

    def test_concurrent_indexing_keeps_count(self):
        engine = SearchEngine()

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda n: engine.index_document(f"doc{n}", f"shared term{n}"), range(200)))

        assert engine.document_count() == 200
        assert engine.index.get_document_frequency("shared") == 200


@pytest.mark.unit
class TestTermImportance:
    def test_returns_models_in_importance_order(self, engine):
        importance = engine.term_importance("doc1")

        assert all(isinstance(entry, TermImportance) for entry in importance)
        # engine and information tie on score and frequency, so first occurrence decides
        assert [entry.term for entry in importance] == ["search", "engine", "information"]
        assert importance[0].frequency == 2

    def test_limit(self, engine):
        assert [entry.term for entry in engine.term_importance("doc1", limit=1)] == ["search"]

    def test_unknown_document(self, engine):
        assert engine.term_importance("missing") == []


@pytest.mark.unit
class TestFromSettings:
    def test_builds_configured_tokenizer(self, monkeypatch):
        monkeypatch.setenv("TFIDF_SEARCH_TOKENIZER", "standard")
        monkeypatch.setenv("TFIDF_SEARCH_INDEX_NAME", "docs")

        engine = SearchEngine.from_settings(Settings())
        engine.index_document("d", "The Quick Dogs")

        assert engine.name == "docs"
        assert engine.index.get_terms_in_document("d") == ["quick", "dog"]

    def test_applies_default_result_limit(self, monkeypatch):
        monkeypatch.setenv("TFIDF_SEARCH_MAX_RESULTS", "1")
        engine = SearchEngine.from_settings(Settings())
        engine.index_document("a", "x")
        engine.index_document("b", "x")

        assert len(engine.search("x")) == 1
        assert len(engine.search("x", limit=5)) == 2

    def test_custom_stopwords(self, monkeypatch):
        monkeypatch.setenv("TFIDF_SEARCH_TOKENIZER", "english-nostem")
        monkeypatch.setenv("TFIDF_SEARCH_STOPWORDS", "quick")

        engine = SearchEngine.from_settings(Settings())
        engine.index_document("d", "the quick fox")

        assert engine.index.get_terms_in_document("d") == ["the", "fox"]


@pytest.mark.unit
class TestMetrics:
    def test_mutations_update_document_gauge(self):
        engine = SearchEngine(name="metrics-gauge")
        engine.index_document("a", "x")
        engine.index_document("b", "y")
        engine.remove_document("a")

        assert REGISTRY.get_sample_value("tfidf_index_document_count", {"index": "metrics-gauge"}) == 1.0

    def test_mutations_are_counted_by_operation(self):
        engine = SearchEngine(name="metrics-ops")
        engine.index_document("a", "x")
        engine.index_documents([Document(id="b", content="y"), Document(id="c", content="z")])
        engine.remove_document("a")
        engine.remove_document("a")

        def ops(operation: str) -> float | None:
            return REGISTRY.get_sample_value(
                "tfidf_index_operations_total", {"index": "metrics-ops", "operation": operation}
            )

        assert ops("add") == 3.0
        assert ops("remove") == 1.0

    def test_search_latency_is_observed(self):
        engine = SearchEngine(name="metrics-latency")
        engine.index_document("a", "x")

        engine.search("x")
        engine.search("y")

        assert REGISTRY.get_sample_value("tfidf_search_latency_seconds_count", {"index": "metrics-latency"}) == 2.0
        assert REGISTRY.get_sample_value("tfidf_search_results_sum", {"index": "metrics-latency"}) == 1.0
