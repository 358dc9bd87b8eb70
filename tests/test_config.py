"""Unit tests for the config module."""

from pydantic import ValidationError
import pytest

from tfidf_search.config import Settings


pytestmark = pytest.mark.unit


class TestConfig:
    """Test configuration loading and validation."""

    def test_values_come_from_environment(self):
        settings = Settings()

        assert settings.index_name == "test"
        assert settings.tokenizer == "whitespace"
        assert settings.log_json is True

    def test_defaults_without_environment(self, monkeypatch):
        for key in ("INDEX_NAME", "TOKENIZER", "STOPWORDS", "MAX_RESULTS", "LOG_LEVEL", "LOG_JSON"):
            monkeypatch.delenv(f"TFIDF_SEARCH_{key}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.index_name == "default"
        assert settings.tokenizer == "whitespace"
        assert settings.max_results == 0
        assert settings.log_level == "info"

    def test_tokenizer_name_is_normalized(self, monkeypatch):
        monkeypatch.setenv("TFIDF_SEARCH_TOKENIZER", " Standard ")

        assert Settings().tokenizer == "standard"

    def test_unknown_tokenizer_is_rejected(self, monkeypatch):
        monkeypatch.setenv("TFIDF_SEARCH_TOKENIZER", "morse")

        with pytest.raises(ValidationError, match="Unknown tokenizer"):
            Settings()

    def test_negative_max_results_is_rejected(self, monkeypatch):
        monkeypatch.setenv("TFIDF_SEARCH_MAX_RESULTS", "-1")

        with pytest.raises(ValidationError):
            Settings()

    def test_max_results_zero_means_unlimited(self):
        assert Settings().get_max_results() is None
        assert Settings(max_results=7).get_max_results() == 7

    def test_stopwords_parsing(self, monkeypatch):
        assert Settings().get_stopwords() is None

        monkeypatch.setenv("TFIDF_SEARCH_STOPWORDS", "foo, bar,,baz ")

        assert Settings().get_stopwords() == ["foo", "bar", "baz"]

    def test_unrelated_env_vars_are_ignored(self, monkeypatch):
        monkeypatch.setenv("TFIDF_SEARCH_SOMETHING_ELSE", "1")

        assert Settings().index_name == "test"
