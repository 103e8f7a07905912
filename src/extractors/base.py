"""
Base class for corpus sources.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class CorpusSourceError(Exception):
    """Raised when a corpus source cannot be queried."""
    pass


class BaseCorpusSource(ABC):
    """Base class for all paginated corpus sources."""

    name = 'base'

    @abstractmethod
    def fetch_page(self, page: int, page_size: int, fields: Optional[List[str]] = None) -> List[dict]:
        """
        Fetch one page of corpus records.

        Args:
            page: Zero-based page number
            page_size: Records per page
            fields: Fields to retrieve (None retrieves every field)

        Returns:
            List of raw hit dictionaries. A page shorter than page_size is the last one.

        Raises:
            CorpusSourceError: If the page cannot be fetched
        """
        pass

    def probe(self) -> int:
        """
        Run a zero-result-tolerant query against the source.

        Returns:
            Number of records returned by a one-record query (0 is valid)

        Raises:
            CorpusSourceError: If the source is unreachable
        """
        return len(self.fetch_page(0, 1, ['objectID']))

    def describe(self) -> str:
        return self.name
