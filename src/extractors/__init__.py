"""
Corpus sources for vocabulary extraction.

Each source implements fetch_page(page, page_size, fields) returning a list of
raw hits; a page shorter than page_size marks the end of the corpus. Hits are
validated into CorpusRecord at the ingestion boundary.
"""

from typing import Optional

from .base import BaseCorpusSource, CorpusSourceError
from .records import CorpusRecord


def get_corpus_source(backend: Optional[str] = None) -> BaseCorpusSource:
    """
    Create the corpus source configured by CORPUS_BACKEND.

    Args:
        backend: 'local' or 'algolia' (defaults to settings)

    Raises:
        CorpusSourceError: If the backend is unknown or misconfigured
    """
    from settings import CORPUS_BACKEND

    backend = backend or CORPUS_BACKEND

    if backend == 'local':
        from .local import LocalCorpusSource
        return LocalCorpusSource()
    if backend == 'algolia':
        from .algolia import AlgoliaCorpusSource
        return AlgoliaCorpusSource()

    raise CorpusSourceError(f"Unknown corpus backend: {backend}")


__all__ = ['BaseCorpusSource', 'CorpusSourceError', 'CorpusRecord', 'get_corpus_source']
