"""
Per-word aggregation of word occurrences across the corpus.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .tokenization import WordOccurrence


@dataclass(frozen=True)
class ExampleRecord:
    """Example sentence retained for a word."""
    sentence: str
    question_id: str
    question_number: Optional[int]
    year: int
    subject: str
    word_position: int
    sentence_length: int
    complexity: int
    highlighted: bool

    def to_dict(self) -> dict:
        """Stored representation of the example."""
        return {
            'sentence': self.sentence,
            'questionId': self.question_id,
            'questionNumber': self.question_number,
            'year': self.year,
            'subject': self.subject,
            'wordPosition': self.word_position,
            'sentenceLength': self.sentence_length,
            'complexity': self.complexity,
            'isHighlighted': self.highlighted,
        }


@dataclass
class WordAggregate:
    """Accumulated statistics of one normalized word over a run."""
    word: str
    original_word: str
    count: int = 0
    examples: List[ExampleRecord] = field(default_factory=list)
    years: Set[int] = field(default_factory=set)
    subjects: Set[str] = field(default_factory=set)
    question_ids: Set[str] = field(default_factory=set)
    total_sentence_length: int = 0
    sentence_count: int = 0

    def sorted_years(self) -> List[int]:
        return sorted(self.years)

    def sorted_subjects(self) -> List[str]:
        return sorted(self.subjects)

    @property
    def avg_sentence_length(self) -> float:
        if self.sentence_count == 0:
            return 0.0
        return self.total_sentence_length / self.sentence_count


class WordAggregator:
    """
    Fold word occurrences into per-word aggregates.

    Counts and sets do not depend on fold order. Examples are first come,
    first served: the first `max_examples` occurrences of a word are kept
    and later ones only update counts and sets.

    Example:
        >>> aggregator = WordAggregator(max_examples=10)
        >>> aggregator.fold_all(tokenize_record(record, config))
        >>> aggregator.get('analyze').count
        3
    """

    def __init__(self, max_examples: int = 10, highlighted_examples: int = 3):
        if max_examples < 0:
            raise ValueError("max_examples cannot be negative")

        self.max_examples = max_examples
        self.highlighted_examples = highlighted_examples
        self._aggregates: Dict[str, WordAggregate] = {}

    def __len__(self) -> int:
        return len(self._aggregates)

    def __contains__(self, word: str) -> bool:
        return word in self._aggregates

    def get(self, word: str) -> Optional[WordAggregate]:
        return self._aggregates.get(word)

    def aggregates(self) -> List[WordAggregate]:
        """All aggregates in discovery order (first occurrence in the corpus)."""
        return list(self._aggregates.values())

    def fold(self, occurrence: WordOccurrence) -> WordAggregate:
        """Fold one occurrence into the aggregate of its word."""
        aggregate = self._aggregates.get(occurrence.word)
        if aggregate is None:
            aggregate = WordAggregate(word=occurrence.word, original_word=occurrence.original_word)
            self._aggregates[occurrence.word] = aggregate

        aggregate.count += 1
        aggregate.years.add(occurrence.year)
        aggregate.subjects.add(occurrence.subject)
        aggregate.question_ids.add(occurrence.record_id)
        aggregate.total_sentence_length += occurrence.sentence_length
        aggregate.sentence_count += 1

        if len(aggregate.examples) < self.max_examples:
            aggregate.examples.append(ExampleRecord(
                sentence=occurrence.sentence,
                question_id=occurrence.record_id,
                question_number=occurrence.question_number,
                year=occurrence.year,
                subject=occurrence.subject,
                word_position=occurrence.position,
                sentence_length=occurrence.sentence_length,
                complexity=occurrence.complexity,
                highlighted=len(aggregate.examples) < self.highlighted_examples
            ))

        return aggregate

    def fold_all(self, occurrences: Iterable[WordOccurrence]) -> int:
        """Fold a sequence of occurrences. Returns how many were folded."""
        folded = 0
        for occurrence in occurrences:
            self.fold(occurrence)
            folded += 1
        return folded
