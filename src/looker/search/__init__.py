"""
Indexing and retrieval engine package.

This package provides a pure-Python tf-idf search stack:
- analyzers: Text normalization (character filters, tokenizer, stop words)
- models: Document and result value objects
- stats: idf ratio and vector norm helpers
- index_store: Inverted index with term statistics
- storage: JSON persistence of the index
- query_engine: Cosine-similarity ranking
- readers: Content readers for supported file types
- indexer: Directory traversal feeding the index
"""
