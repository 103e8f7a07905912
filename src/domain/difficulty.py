"""
Sentence complexity and word difficulty scoring.

Both scores are heuristics on a 1-10 scale. No external frequency corpus is
consulted:

- Sentence complexity grows with average word length and sentence length.
- Word difficulty averages three components: rarity (frequency score),
  contextual complexity (mean complexity of the word's examples) and word
  length. Rarer, longer words seen in complex sentences score higher.
"""

import math
from typing import Sequence

MIN_SCORE = 1
MAX_SCORE = 10

# Complexity component used when a word has no examples to average
NEUTRAL_COMPLEXITY = (MIN_SCORE + MAX_SCORE) / 2


def clamp(value, low=MIN_SCORE, high=MAX_SCORE):
    """Clamp value to [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int = 2) -> float:
    """Round half up to a fixed number of decimals."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def sentence_complexity(words: Sequence[str]) -> int:
    """
    Complexity of a sentence on a 1-10 scale.

    complexity = clamp(round(0.5 * avg_word_length + 0.1 * word_count), 1, 10)

    Args:
        words: Whitespace-separated tokens of the sentence

    Returns:
        int in [1, 10]; 1 for an empty sentence

    Examples:
        >>> sentence_complexity("The quick brown fox".split())
        2
    """
    if not words:
        return MIN_SCORE

    avg_word_length = sum(len(word) for word in words) / len(words)
    return clamp(round_half_up(avg_word_length * 0.5 + len(words) * 0.1))


def frequency_score(frequency: int) -> int:
    """Rarity component: 10 for words seen up to 10 times, down to 1 from 100 occurrences."""
    return clamp(11 - math.ceil(frequency / 10))


def length_score(word: str) -> int:
    return clamp(len(word) - 2)


def complexity_score(complexities: Sequence[int]) -> float:
    """Mean example complexity, or the neutral midpoint when there are no examples."""
    if not complexities:
        return NEUTRAL_COMPLEXITY
    return sum(complexities) / len(complexities)


def word_difficulty(word: str, frequency: int, complexities: Sequence[int]) -> int:
    """
    Composite difficulty of a word on a 1-10 scale.

    Args:
        word: Normalized word
        frequency: Total occurrences in the corpus
        complexities: Complexity scores of the word's retained examples

    Returns:
        int in [1, 10]

    Examples:
        >>> word_difficulty('analyze', 45, [7] * 10)
        6
    """
    total = frequency_score(frequency) + complexity_score(complexities) + length_score(word)
    return clamp(round_half_up(total / 3))
