"""
Batch persistence of ranked vocabulary words.

Every word is written as two records: a summary in vocabulary_words and the
full example list in vocabulary_examples. Writes go through a BatchWriter so
no commit exceeds the configured operation limit.
"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from db import BatchWriter, BatchCommitError, VocabularyWord, VocabularyExample, utcnow
from domain.word_rank import RankedWordRecord

# Summary record plus detail record
OPERATIONS_PER_WORD = 2


def build_word_documents(record: RankedWordRecord, timestamp: datetime,
                         extraction_id: Optional[str] = None) -> tuple:
    """
    Build the summary and detail documents of a ranked word.

    Derived fields (year range, rounded average sentence length, top examples)
    are computed here, at write time.

    Returns:
        Tuple of (summary document, detail document)

    Raises:
        ValueError: If the record has no years
    """
    year_range = record.year_range

    summary = {
        'original_word': record.original_word,
        'frequency': record.frequency,
        'rank': record.rank,
        'difficulty': record.difficulty,
        'question_count': record.question_count,
        'year_earliest': year_range['earliest'],
        'year_latest': year_range['latest'],
        'subject_areas': list(record.subjects),
        'avg_sentence_length': record.rounded_avg_sentence_length,
        'examples': record.top_examples,
        'extraction_id': extraction_id,
        'extracted_at': timestamp,
        'last_updated': timestamp,
    }

    detail = {
        'examples': [example.to_dict() for example in record.examples],
        'total_examples': len(record.examples),
        'extraction_id': extraction_id,
        'extracted_at': timestamp,
        'last_updated': timestamp,
    }

    return summary, detail


def store_ranked_words(
    records: Sequence[RankedWordRecord],
    database,
    commit_limit: int = 500,
    errors: Optional[List[dict]] = None,
    extraction_id: Optional[str] = None,
    verbose: bool = True
) -> Dict:
    """
    Persist ranked words in batches of at most `commit_limit` operations.

    A failure preparing one word is recorded in `errors` and the writer moves
    on to the next word. A failed commit is not recoverable here and
    propagates as BatchCommitError.

    Both records of a word go into the same commit, so a commit holds at
    most commit_limit // 2 words.

    Args:
        records: Ranked words, in rank order
        database: Store providing batch() and timestamp()
        commit_limit: Maximum write operations per commit
        errors: Run error list to append per-word failures to
        extraction_id: Run identifier stored with every record
        verbose: Print progress

    Returns:
        Dictionary with stats: stored, failed, commits, commit_sizes
    """
    if commit_limit < OPERATIONS_PER_WORD:
        raise ValueError(f"commit_limit must be at least {OPERATIONS_PER_WORD}")

    if errors is None:
        errors = []

    writer = BatchWriter(database.batch, max_operations=commit_limit, verbose=verbose)
    stats = {'stored': 0, 'failed': 0, 'commits': 0, 'commit_sizes': []}

    if verbose:
        print(f"Storing {len(records)} words (max {commit_limit} operations per commit)...")

    for record in records:
        try:
            timestamp = database.timestamp()
            summary, detail = build_word_documents(record, timestamp, extraction_id)

            # Summary and detail of a word always share a commit
            writer.set_many([
                (VocabularyWord, record.word, summary),
                (VocabularyExample, record.word, detail),
            ])
            stats['stored'] += 1

        except BatchCommitError:
            raise

        except Exception as e:
            stats['failed'] += 1
            errors.append({
                'word': record.word,
                'error': str(e),
                'timestamp': utcnow().isoformat()
            })
            if verbose:
                print(f"  ✗ Error preparing word '{record.word}': {e}")

    writer.flush()

    stats['commits'] = len(writer.commit_sizes)
    stats['commit_sizes'] = list(writer.commit_sizes)

    if verbose:
        print(f"✓ Stored {stats['stored']} words and their examples in {stats['commits']} commits")

    return stats
