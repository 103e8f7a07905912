"""
Local corpus sources: the SQLite corpus database and in-memory record lists.
"""

from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from db.corpus import CorpusDatabase
from .base import BaseCorpusSource, CorpusSourceError


def _project(hit: dict, fields: Optional[List[str]]) -> dict:
    """Keep only the requested fields of a hit (all of them for None or '*')."""
    if not fields or '*' in fields:
        return dict(hit)
    return {key: hit[key] for key in fields if key in hit}


class LocalCorpusSource(BaseCorpusSource):
    """Corpus source paging over the local SQLite corpus database."""

    name = 'local'

    def __init__(self, corpus_db: Optional[CorpusDatabase] = None):
        self.corpus_db = corpus_db or CorpusDatabase()

    def fetch_page(self, page: int, page_size: int, fields: Optional[List[str]] = None) -> List[dict]:
        try:
            hits = self.corpus_db.fetch_page(offset=page * page_size, limit=page_size)
        except SQLAlchemyError as e:
            raise CorpusSourceError(f"Local corpus query failed for page {page}: {e}") from e
        return [_project(hit, fields) for hit in hits]

    def describe(self) -> str:
        return f"local:{self.corpus_db.db_path}"


class InMemoryCorpusSource(BaseCorpusSource):
    """Corpus source over a fixed list of hits."""

    name = 'memory'

    def __init__(self, hits: Sequence[dict]):
        self.hits = list(hits)
        self.requested_pages: List[int] = []

    def fetch_page(self, page: int, page_size: int, fields: Optional[List[str]] = None) -> List[dict]:
        self.requested_pages.append(page)
        start = page * page_size
        return [_project(hit, fields) for hit in self.hits[start:start + page_size]]
