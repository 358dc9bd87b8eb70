"""Tokenizers for the TF-IDF index.

The index and ranker only ever see ``Tokenizer.tokenize(text) -> list[str]``.
Everything else in this module is a way to build such a tokenizer: plain
whitespace splitting, a composable token-stream pipeline (regex split plus
lowercase/stopword/stemming filters), a dictionary-driven compound splitter,
or Korean morphological analysis via Kiwi.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
import re
from typing import Any, Protocol, runtime_checkable

from kiwipiepy import Kiwi


@runtime_checkable
class Tokenizer(Protocol):
    """Maps text to an ordered list of terms, duplicates preserved."""

    def tokenize(self, text: str) -> list[str]:  # pragma: no cover - interface definition
        ...


@dataclass
class Token:
    """A term emitted by a token-stream analyzer, with its offsets."""

    text: str
    position: int
    start_char: int
    end_char: int
    attributes: MutableMapping[str, Any] = field(default_factory=dict)

    def copy_with(self, **updates: Any) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
            "attributes": dict(self.attributes),
        }
        data.update(updates)
        return Token(**data)


class Analyzer(Protocol):
    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class TokenGenerator(Protocol):
    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class WhitespaceTokenizer:
    """Splits on runs of whitespace. Empty input yields no terms."""

    _SPLIT = re.compile(r"\s+")

    def tokenize(self, text: str) -> list[str]:
        return [part for part in self._SPLIT.split(text) if part]


class AnalyzerTokenizer:
    """Adapts a token-stream analyzer to the ``Tokenizer`` contract."""

    def __init__(self, analyzer: Analyzer) -> None:
        self.analyzer = analyzer

    def tokenize(self, text: str) -> list[str]:
        return [token.text for token in self.analyzer(text) if token.text]


class CompoundSplitTokenizer:
    """Whitespace tokenizer that expands known surface forms into morphemes.

    ``splits`` maps a surface form to the terms it stands for, e.g.
    ``{"엔진은": ["엔진", "은"]}``. Words missing from the table pass through
    unchanged. A different ``base`` tokenizer may produce the surface forms.
    """

    def __init__(self, splits: Mapping[str, Sequence[str]], base: Tokenizer | None = None) -> None:
        self.splits = {surface: tuple(parts) for surface, parts in splits.items()}
        self.base = base or WhitespaceTokenizer()

    def tokenize(self, text: str) -> list[str]:
        terms: list[str] = []
        for word in self.base.tokenize(text):
            terms.extend(self.splits.get(word, (word,)))
        return terms


class KoreanTokenizer:
    """Korean morphological tokenizer backed by ``kiwipiepy.Kiwi``.

    Morphemes tagged J* (particles), E* (endings), S* (symbols, foreign
    words, numbers), MAG or MAJ are dropped, and so are one-character forms.
    The analyzer model loads on first use; pass ``analyzer`` to share one.
    """

    EXCLUDED_TAG_PREFIXES = ("J", "E", "S")
    EXCLUDED_TAGS = frozenset({"MAG", "MAJ"})

    def __init__(self, analyzer: Any | None = None, *, min_length: int = 2) -> None:
        self._analyzer = analyzer
        self.min_length = min_length

    @property
    def analyzer(self) -> Any:
        if self._analyzer is None:
            self._analyzer = Kiwi()
        return self._analyzer

    def tokenize(self, text: str) -> list[str]:
        if not text.strip():
            return []
        return [token.form for token in self.analyzer.tokenize(text) if self._keep(token.tag, token.form)]

    def _keep(self, tag: str, form: str) -> bool:
        if tag.startswith(self.EXCLUDED_TAG_PREFIXES) or tag in self.EXCLUDED_TAGS:
            return False
        return len(form) >= self.min_length


class RegexTokenizer:
    """Regex-based token stream of word tokens."""

    def __init__(self, pattern: str = r"[\w']+", flags: int = re.UNICODE | re.MULTILINE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class CodeTokenizer(RegexTokenizer):
    """Keeps identifiers such as ``get_queryset`` and ``torch.nn.Module`` whole."""

    def __init__(self) -> None:
        super().__init__(r"[\w]+(?:[._][\w]+)*", re.UNICODE)


class LowercaseFilter:
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


DEFAULT_STOPWORDS = (
    "a an and are as at be but by for if in into is it no not of on or such "
    "that the their then there these they this to was will with"
).split()


class StopFilter:
    """Removes stopwords, compared case-insensitively."""

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = {word.lower() for word in vocab}

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.lower() not in self.stopwords:
                yield token


_SUFFIX_RULES: tuple[tuple[str, str], ...] = (
    ("ization", "ize"),
    ("ational", "ate"),
    ("fulness", "ful"),
    ("ousness", "ous"),
    ("iveness", "ive"),
    ("tional", "tion"),
    ("biliti", "ble"),
    ("lessli", "less"),
    ("entli", "ent"),
    ("enci", "ence"),
    ("anci", "ance"),
    ("izer", "ize"),
    ("abli", "able"),
    ("alli", "al"),
    ("ator", "ate"),
    ("alism", "al"),
    ("aliti", "al"),
    ("ousli", "ous"),
    ("ation", "ate"),
    ("ness", ""),
    ("ment", ""),
)

_SIMPLE_SUFFIXES: tuple[str, ...] = ("ingly", "edly", "ing", "ed", "ly", "es", "s")


def stem(word: str) -> str:
    """Small Porter-style suffix stripper. Always returns lowercase."""
    lower = word.lower()
    for suffix, replacement in _SUFFIX_RULES:
        if lower.endswith(suffix) and len(lower) - len(suffix) >= 2:
            return lower[: -len(suffix)] + replacement
    for suffix in _SIMPLE_SUFFIXES:
        if lower.endswith(suffix) and len(lower) - len(suffix) >= 2:
            return lower[: -len(suffix)]
    return lower


class PorterStemFilter:
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            yield token.copy_with(text=stem(token.text))


class AnalyzerPipeline:
    """Token generator followed by filters; positions are renumbered after filtering."""

    def __init__(self, generator: TokenGenerator, filters: Sequence[TokenFilter] | None = None) -> None:
        self.generator = generator
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.generator(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):
            token.position = idx
        return tokens


class StandardAnalyzer(AnalyzerPipeline):
    """Regex split, lowercase, stopword removal and (optionally) stemming."""

    def __init__(self, *, stopwords: Sequence[str] | None = None, apply_stemming: bool = True) -> None:
        filters: list[TokenFilter] = [LowercaseFilter(), StopFilter(stopwords)]
        if apply_stemming:
            filters.append(PorterStemFilter())
        super().__init__(RegexTokenizer(), filters)


class CodeFriendlyAnalyzer(AnalyzerPipeline):
    """Lowercased code identifiers without stemming."""

    def __init__(self, *, stopwords: Sequence[str] | None = None) -> None:
        super().__init__(CodeTokenizer(), [LowercaseFilter(), StopFilter(stopwords)])


class KeywordAnalyzer:
    """Treats the entire input as a single token."""

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return [Token(text=text, position=0, start_char=0, end_char=len(text))]


_TOKENIZER_FACTORIES: dict[str, Callable[[Sequence[str] | None], Tokenizer]] = {
    "whitespace": lambda _stopwords: WhitespaceTokenizer(),
    "standard": lambda stopwords: AnalyzerTokenizer(StandardAnalyzer(stopwords=stopwords)),
    "english-nostem": lambda stopwords: AnalyzerTokenizer(
        StandardAnalyzer(stopwords=stopwords, apply_stemming=False)
    ),
    "code-friendly": lambda stopwords: AnalyzerTokenizer(CodeFriendlyAnalyzer(stopwords=stopwords)),
    "keyword": lambda _stopwords: AnalyzerTokenizer(KeywordAnalyzer()),
    "korean": lambda _stopwords: KoreanTokenizer(),
}


def available_tokenizers() -> list[str]:
    return sorted(_TOKENIZER_FACTORIES)


def get_tokenizer(name: str | None, *, stopwords: Sequence[str] | None = None) -> Tokenizer:
    """Return a tokenizer by registry name, defaulting to whitespace splitting."""

    if name is None:
        return _TOKENIZER_FACTORIES["whitespace"](stopwords)
    normalized = name.lower()
    if normalized not in _TOKENIZER_FACTORIES:
        msg = f"Unknown tokenizer '{name}'. Available: {available_tokenizers()}"
        raise ValueError(msg)
    return _TOKENIZER_FACTORIES[normalized](stopwords)
