"""
Core resolution engine.

This package contains the primary logic. Accessions are validated by
`accession`, fetched concurrently by the `ConcurrentFetcher`, turned into runs
by `parser`, and optionally trimmed to their read pair by `normalizer`.
`resolver` strings these stages together.
"""
