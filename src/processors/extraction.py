"""
Vocabulary extraction pipeline.

Drives one extraction run end to end:

    initialize → extract (page loop: tokenize + aggregate) → prepare (rank)
    → store (batched writes) → complete

Run states: not_started → running → completed | failed. A failed run is never
retried automatically; running the pipeline again starts a new run with a
fresh identifier.
"""

import sys
import time
from datetime import timezone
from typing import Callable, List, Optional

from db import RunStatus, utcnow
from settings import DEBUG
from domain.word_rank import RankedWordRecord, rank_words
from extractors import BaseCorpusSource, CorpusRecord, CorpusSourceError
from .aggregation import WordAggregator
from .config import ExtractionConfig
from .persistence import store_ranked_words
from .tokenization import tokenize_record

NOT_STARTED = 'not_started'

# Maximum number of error entries persisted with a run
ERROR_LOG_LIMIT = 100


class ConnectivityError(Exception):
    """Raised when the corpus source or the vocabulary store is unreachable at startup."""
    pass


class VocabularyExtractor:
    """
    Extract ranked vocabulary from a paginated question corpus.

    The extractor owns the word aggregator for the lifetime of one run.

    Example:
        >>> extractor = VocabularyExtractor(get_corpus_source(), Database())
        >>> exit_code = extractor.run()
    """

    def __init__(
        self,
        source: BaseCorpusSource,
        database,
        config: Optional[ExtractionConfig] = None,
        verbose: bool = True,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize extractor.

        Args:
            source: Corpus source to page through
            database: Vocabulary store (Database)
            config: Run parameters (defaults from settings)
            verbose: Print progress to stdout
            sleep: Function used for the delay between page fetches
        """
        self.source = source
        self.db = database
        self.config = config or ExtractionConfig()
        self.verbose = verbose
        self._sleep = sleep

        self.start_time = utcnow()
        epoch_ms = int(self.start_time.replace(tzinfo=timezone.utc).timestamp() * 1000)
        self.extraction_id = f"extraction_{epoch_ms}"
        self.status = NOT_STARTED

        self.statistics = {
            'totalQuestions': 0,
            'totalWords': 0,
            'uniqueWords': 0,
            'filteredWords': 0,
            'storedWords': 0,
            'avgWordsPerQuestion': 0.0,
            'topFrequency': 0,
            'processingTimeMs': 0,
            'errorsEncountered': 0
        }
        self.errors: List[dict] = []
        self.aggregator = WordAggregator(
            max_examples=self.config.max_examples_per_word,
            highlighted_examples=self.config.highlighted_examples
        )

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def record_error(self, error, **context):
        """Append an error entry (with page, question_id or word context) and count it."""
        entry = dict(context)
        entry['error'] = str(error)
        entry['timestamp'] = utcnow().isoformat()
        self.errors.append(entry)
        self.statistics['errorsEncountered'] += 1

    # ------------------------------------------------------------------
    # Stages

    def initialize(self):
        """
        Probe both services and record the start of the run.

        Raises:
            ConnectivityError: If the store or the corpus source is unreachable
        """
        self._log("🚀 Initializing Vocabulary Extractor...")

        if not self.db.probe():
            raise ConnectivityError("Vocabulary store is not reachable")

        try:
            sample_size = self.source.probe()
        except CorpusSourceError as e:
            raise ConnectivityError(f"Corpus source is not reachable: {e}") from e

        if sample_size == 0:
            self._log("⚠️  Corpus source connected but returned no records")

        self.db.create_run(
            self.extraction_id,
            self.start_time,
            parameters=self.config.to_parameters(),
            statistics=self.statistics
        )
        self.status = RunStatus.RUNNING
        self._log(f"✓ Initialized. Extraction ID: {self.extraction_id}")

    def extract(self) -> int:
        """
        Page through the corpus and aggregate every record.

        Stops at the first page shorter than the page size. A failed page
        fetch is recorded and ends the loop; the run continues with what was
        aggregated so far.

        Returns:
            Number of records processed
        """
        page_size = self.config.page_size
        fields = self.config.retrieved_fields
        page = 0

        self._log(f"Starting corpus extraction from {self.source.describe()}...")

        while True:
            try:
                self._log(f"  Fetching page {page + 1}...")
                hits = self.source.fetch_page(page, page_size, fields)
            except Exception as e:
                self._log(f"  ✗ Error fetching page {page}: {e}")
                self.record_error(e, page=page)
                break

            self.process_records(hits)
            self._log(f"  Retrieved {len(hits)} questions (Total: {self.statistics['totalQuestions']})")

            page += 1
            if len(hits) < page_size:
                break

            if self.config.page_delay_ms > 0:
                self._sleep(self.config.page_delay_ms / 1000)

        total = self.statistics['totalQuestions']
        self.statistics['uniqueWords'] = len(self.aggregator)
        self.statistics['avgWordsPerQuestion'] = self.statistics['totalWords'] / total if total else 0.0

        self._log(f"✓ Processed {total} questions")
        self._log(f"  Total words found: {self.statistics['totalWords']}")
        self._log(f"  Unique words: {self.statistics['uniqueWords']}")
        self._log(f"  Average words per question: {self.statistics['avgWordsPerQuestion']:.2f}")

        return total

    def process_records(self, hits: List[dict]):
        """Tokenize and aggregate one page of hits; a bad record is recorded and skipped."""
        for hit in hits:
            self.statistics['totalQuestions'] += 1
            try:
                record = CorpusRecord.from_hit(hit, self.config.text_fields)
                occurrences = tokenize_record(record, self.config)
                self.aggregator.fold_all(occurrences)
                self.statistics['totalWords'] += len(occurrences)
            except Exception as e:
                question_id = hit.get('objectID') if isinstance(hit, dict) else None
                self._log(f"  ✗ Error processing question {question_id}: {e}")
                self.record_error(e, question_id=question_id)

            processed = self.statistics['totalQuestions']
            if self.config.progress_interval and processed % self.config.progress_interval == 0:
                self._log(f"  Processed {processed} questions, {len(self.aggregator)} unique words so far")

    def prepare_words(self) -> List[RankedWordRecord]:
        """Rank the aggregated words and update run statistics."""
        self._log("Preparing words for storage...")

        result = rank_words(
            self.aggregator.aggregates(),
            min_frequency=self.config.min_frequency,
            max_words=self.config.max_words_to_store
        )

        self.statistics['uniqueWords'] = result.unique_words
        self.statistics['filteredWords'] = result.filtered_words
        self.statistics['storedWords'] = result.stored_words
        self.statistics['topFrequency'] = result.top_frequency

        self._log(f"  Words after filtering: {result.stored_words}")
        self._log(f"  Top word frequency: {result.top_frequency}")

        return result.words

    def store_words(self, words: List[RankedWordRecord]) -> dict:
        """
        Persist ranked words in bounded batches.

        Raises:
            BatchCommitError: If a batch commit fails
        """
        stats = store_ranked_words(
            words,
            self.db,
            commit_limit=self.config.commit_limit,
            errors=self.errors,
            extraction_id=self.extraction_id,
            verbose=self.verbose
        )
        self.statistics['errorsEncountered'] += stats['failed']
        return stats

    def complete(self):
        """Record the run as completed."""
        end_time = utcnow()
        self.statistics['processingTimeMs'] = self._elapsed_ms(end_time)

        self.db.finish_run(
            self.extraction_id,
            RunStatus.COMPLETED,
            end_time,
            statistics=self.statistics,
            errors=self.errors[:ERROR_LOG_LIMIT]
        )
        self.status = RunStatus.COMPLETED
        self._log(f"✓ Extraction complete! Processing time: {self.statistics['processingTimeMs']}ms")

    def fail(self, error: Exception):
        """
        Record the run as failed, appending the fatal error.

        Best effort: a failure while recording is printed to stderr only.
        A run that already completed is left untouched.
        """
        if self.status == RunStatus.COMPLETED:
            print(f"Warning: Run {self.extraction_id} already completed, not marking it failed", file=sys.stderr)
            return

        self.status = RunStatus.FAILED
        end_time = utcnow()
        self.statistics['processingTimeMs'] = self._elapsed_ms(end_time)

        fatal = {'error': str(error), 'timestamp': end_time.isoformat(), 'fatal': True}

        try:
            self.db.finish_run(
                self.extraction_id,
                RunStatus.FAILED,
                end_time,
                statistics=self.statistics,
                errors=self.errors[:ERROR_LOG_LIMIT] + [fatal]
            )
        except Exception as log_error:
            print(f"Warning: Failed to log error to database: {log_error}", file=sys.stderr)

    def _elapsed_ms(self, end_time) -> int:
        return int((end_time - self.start_time).total_seconds() * 1000)

    # ------------------------------------------------------------------

    def run(self) -> int:
        """
        Execute the whole pipeline.

        Returns:
            Process exit code: 0 on success, 1 on any fatal error
        """
        try:
            self.initialize()
        except Exception as e:
            print(f"✗ Initialization failed: {e}", file=sys.stderr)
            return 1

        try:
            self.extract()
            words = self.prepare_words()
            self.store_words(words)
            self.complete()
        except Exception as e:
            print(f"💥 Fatal error during extraction: {e}", file=sys.stderr)
            if DEBUG:
                import traceback
                traceback.print_exc()
            self.fail(e)
            return 1

        self.print_summary()
        return 0

    def print_summary(self):
        stats = self.statistics
        self._log("\n🎉 EXTRACTION SUMMARY")
        self._log("━" * 52)
        self._log(f"  Total Questions Processed: {stats['totalQuestions']}")
        self._log(f"  Total Words Extracted: {stats['totalWords']}")
        self._log(f"  Unique Words Found: {stats['uniqueWords']}")
        self._log(f"  Words Stored: {stats['storedWords']}")
        self._log(f"  Top Word Frequency: {stats['topFrequency']}")
        self._log(f"  Average Words/Question: {stats['avgWordsPerQuestion']:.2f}")
        self._log(f"  Processing Time: {stats['processingTimeMs'] / 1000:.2f}s")
        self._log(f"  Errors Encountered: {stats['errorsEncountered']}")
        self._log(f"  Extraction ID: {self.extraction_id}")
        self._log("━" * 52)
