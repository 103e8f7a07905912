"""
Algolia corpus source.

Pages through a search index with an empty query using the Algolia REST API.
"""

from typing import List, Optional

import requests

from settings import ALGOLIA_APP_ID, ALGOLIA_SEARCH_KEY, ALGOLIA_TIMEOUT, CORPUS_INDEX
from .base import BaseCorpusSource, CorpusSourceError


class AlgoliaCorpusSource(BaseCorpusSource):
    """
    Corpus source backed by an Algolia index.

    Example:
        >>> source = AlgoliaCorpusSource()
        >>> hits = source.fetch_page(0, 1000, ['objectID', 'question', 'year'])
    """

    name = 'algolia'

    def __init__(
        self,
        app_id: Optional[str] = None,
        api_key: Optional[str] = None,
        index_name: Optional[str] = None,
        timeout: Optional[int] = None
    ):
        """
        Initialize Algolia source.

        If parameters are not provided, uses values from settings.py.

        Raises:
            CorpusSourceError: If the application id or search key is missing
        """
        self.app_id = app_id or ALGOLIA_APP_ID
        self.api_key = api_key or ALGOLIA_SEARCH_KEY
        self.index_name = index_name or CORPUS_INDEX
        self.timeout = timeout or ALGOLIA_TIMEOUT

        if not self.app_id or not self.api_key:
            raise CorpusSourceError("Missing Algolia credentials (ALGOLIA_APP_ID / ALGOLIA_SEARCH_KEY)")

    @property
    def query_url(self) -> str:
        return f"https://{self.app_id}-dsn.algolia.net/1/indexes/{self.index_name}/query"

    def fetch_page(self, page: int, page_size: int, fields: Optional[List[str]] = None) -> List[dict]:
        headers = {
            'X-Algolia-Application-Id': self.app_id,
            'X-Algolia-API-Key': self.api_key,
            'Content-Type': 'application/json'
        }
        body = {
            'query': '',
            'page': page,
            'hitsPerPage': page_size,
            'attributesToRetrieve': fields or ['*']
        }

        try:
            response = requests.post(self.query_url, json=body, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise CorpusSourceError(f"Algolia query failed for page {page}: {e}") from e
        except ValueError as e:
            raise CorpusSourceError(f"Algolia returned invalid JSON for page {page}: {e}") from e

        hits = data.get('hits')
        if not isinstance(hits, list):
            raise CorpusSourceError(f"Algolia response for page {page} has no hits list")
        return hits

    def describe(self) -> str:
        return f"algolia:{self.index_name}"
