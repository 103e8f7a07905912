"""
Database package for the vocabulary extractor.
"""

from .models import Base, VocabularyWord, VocabularyExample, ExtractionRun, ConnectionProbe, RunStatus, utcnow
from .batching import WriteBatch, BatchWriter, BatchCommitError
from .database import Database

__all__ = ['Base', 'VocabularyWord', 'VocabularyExample', 'ExtractionRun', 'ConnectionProbe', 'RunStatus', 'utcnow', 'WriteBatch', 'BatchWriter', 'BatchCommitError', 'Database']
