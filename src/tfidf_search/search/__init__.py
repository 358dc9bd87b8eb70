"""
Indexing and ranking core.

- analyzers: Tokenizer contract and tokenizer implementations
- inverted_index: postings and per-document term statistics
- stats: tf/idf weighting rules
- tfidf: TF-IDF scoring and ranking
"""
