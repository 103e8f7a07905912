"""
Word ranking by corpus frequency.

Turns the per-word aggregates of a run into the ordered list of ranked
records that gets stored:

1. Map every aggregate to its frequency, sorted years, subjects and average
   sentence length.
2. Drop words below the minimum frequency.
3. Sort by frequency, descending. The sort is stable, so ties keep discovery
   order (the order in which words first appeared in the corpus).
4. Keep the top `max_words`.
5. Assign dense 1-based ranks and compute difficulty.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from domain.difficulty import round_to, word_difficulty

QUICK_ACCESS_EXAMPLES = 3


@dataclass(frozen=True)
class RankedWordRecord:
    """A word that survived filtering and truncation, with its final rank."""
    word: str
    original_word: str
    frequency: int
    rank: int
    difficulty: int
    years: Tuple[int, ...]
    subjects: Tuple[str, ...]
    question_count: int
    avg_sentence_length: float
    examples: tuple

    @property
    def year_range(self) -> Dict[str, int]:
        """Earliest and latest year the word was seen in. Raises ValueError without years."""
        if not self.years:
            raise ValueError(f"Word '{self.word}' has no years")
        return {'earliest': min(self.years), 'latest': max(self.years)}

    @property
    def rounded_avg_sentence_length(self) -> float:
        return round_to(self.avg_sentence_length, 2)

    @property
    def top_examples(self) -> List[str]:
        """First example sentences, for quick access in listings."""
        return [example.sentence for example in self.examples[:QUICK_ACCESS_EXAMPLES]]


@dataclass(frozen=True)
class RankingResult:
    """Ranked words plus the statistics the orchestrator records."""
    words: List[RankedWordRecord]
    unique_words: int
    filtered_words: int
    stored_words: int
    top_frequency: int


def rank_words(aggregates: Iterable, min_frequency: int, max_words: int) -> RankingResult:
    """
    Filter, sort, truncate and rank word aggregates.

    Args:
        aggregates: WordAggregate values in discovery order
        min_frequency: Words seen fewer times are dropped
        max_words: Maximum number of ranked words

    Returns:
        RankingResult. filtered_words counts both threshold-filtered and
        truncated words (unique_words - stored_words).
    """
    aggregates = list(aggregates)

    candidates = [
        {
            'word': aggregate.word,
            'original_word': aggregate.original_word,
            'frequency': aggregate.count,
            'examples': tuple(aggregate.examples),
            'question_count': len(aggregate.question_ids),
            'years': tuple(aggregate.sorted_years()),
            'subjects': tuple(aggregate.sorted_subjects()),
            'avg_sentence_length': aggregate.avg_sentence_length,
        }
        for aggregate in aggregates
    ]

    candidates = [c for c in candidates if c['frequency'] >= min_frequency]
    candidates.sort(key=lambda c: c['frequency'], reverse=True)
    candidates = candidates[:max(max_words, 0)]

    ranked = [
        RankedWordRecord(
            rank=index + 1,
            difficulty=word_difficulty(
                candidate['word'],
                candidate['frequency'],
                [example.complexity for example in candidate['examples']]
            ),
            **candidate
        )
        for index, candidate in enumerate(candidates)
    ]

    return RankingResult(
        words=ranked,
        unique_words=len(aggregates),
        filtered_words=len(aggregates) - len(ranked),
        stored_words=len(ranked),
        top_frequency=ranked[0].frequency if ranked else 0
    )
