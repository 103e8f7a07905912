"""
Extraction run configuration.

Snapshot of the thresholds and limits used by one extraction run. Defaults
come from settings.py; commands override individual values.
"""

from dataclasses import dataclass, field, replace
from typing import List

import settings


@dataclass(frozen=True)
class ExtractionConfig:
    """Parameters for a vocabulary extraction run."""

    corpus_index: str = settings.CORPUS_INDEX
    page_size: int = settings.PAGE_SIZE
    max_words_to_store: int = settings.MAX_WORDS_TO_STORE
    min_frequency: int = settings.MIN_FREQUENCY
    min_word_length: int = settings.MIN_WORD_LENGTH
    max_word_length: int = settings.MAX_WORD_LENGTH
    exclude_common_words: bool = settings.EXCLUDE_COMMON_WORDS
    max_examples_per_word: int = settings.MAX_EXAMPLES_PER_WORD
    highlighted_examples: int = settings.HIGHLIGHTED_EXAMPLES
    progress_interval: int = settings.PROGRESS_INTERVAL
    page_delay_ms: int = settings.PAGE_DELAY_MS
    commit_limit: int = settings.COMMIT_LIMIT
    text_fields: List[str] = field(default_factory=lambda: list(settings.TEXT_FIELDS))

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")
        # Every word is written as two records that share a commit
        if self.commit_limit < 2:
            raise ValueError("commit_limit must be at least 2")
        if self.min_word_length > self.max_word_length:
            raise ValueError("min_word_length cannot exceed max_word_length")

    def with_overrides(self, **overrides) -> 'ExtractionConfig':
        """Return a copy with the given non-None values replaced."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @property
    def retrieved_fields(self) -> List[str]:
        """Fields requested from the corpus source for every page."""
        return ['objectID', *self.text_fields, 'paper_info', 'subject', 'year']

    def to_parameters(self) -> dict:
        """Parameters snapshot stored with the run metadata."""
        return {
            'indexName': self.corpus_index,
            'pageSize': self.page_size,
            'maxWords': self.max_words_to_store,
            'minFrequency': self.min_frequency,
            'minWordLength': self.min_word_length,
            'maxWordLength': self.max_word_length,
            'excludeCommon': self.exclude_common_words,
            'maxExamplesPerWord': self.max_examples_per_word,
            'commitLimit': self.commit_limit,
            'fieldsProcessed': list(self.text_fields),
        }
