"""
Tokenization utilities for vocabulary extraction.

This module turns the free text of a corpus record into word occurrences:
normalized English words with their sentence context and source metadata.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from domain.difficulty import sentence_complexity
from extractors.records import CorpusRecord


# Common English words excluded from vocabulary (when EXCLUDE_COMMON_WORDS is on)
COMMON_WORDS = frozenset({
    'the', 'be', 'to', 'of', 'and', 'a', 'in', 'that', 'have', 'i', 'it', 'for',
    'not', 'on', 'with', 'he', 'as', 'you', 'do', 'at', 'this', 'but', 'his',
    'by', 'from', 'they', 'she', 'or', 'an', 'will', 'my', 'one', 'all', 'would',
    'there', 'their', 'what', 'so', 'up', 'out', 'if', 'about', 'who', 'get',
    'which', 'go', 'me', 'when', 'make', 'can', 'like', 'time', 'no', 'just',
    'him', 'know', 'take', 'people', 'into', 'year', 'your', 'good', 'some',
    'could', 'them', 'see', 'other', 'than', 'then', 'now', 'look', 'only',
    'come', 'its', 'over', 'think', 'also', 'back', 'after', 'use', 'two',
    'how', 'our', 'work', 'first', 'well', 'way', 'even', 'new', 'want',
    'because', 'any', 'these', 'give', 'day', 'most', 'us', 'is', 'was',
    'are', 'been', 'has', 'had', 'were', 'said', 'each', 'did',
    'very', 'where', 'much', 'too', 'may', 'should', 'must', 'such', 'here',
    'more', 'still', 'through', 'being', 'does', 'might', 'shall', 'before',
    'between', 'under', 'while', 'again', 'within', 'without', 'during',
})

# Hangul syllables (the Korean half of the question pairs)
HANGUL_PATTERN = re.compile(r'[가-힣]')

# Anything that is not an ASCII word character, whitespace or a sentence terminator
PUNCTUATION_PATTERN = re.compile(r'[^\w\s.!?]', re.ASCII)

WHITESPACE_PATTERN = re.compile(r'\s+')
SENTENCE_BOUNDARY_PATTERN = re.compile(r'[.!?]+')
WORD_PATTERN = re.compile(r'^[a-z]+$')


@dataclass(frozen=True)
class WordOccurrence:
    """One validated appearance of a normalized word within one sentence."""
    word: str
    original_word: str
    sentence: str
    sentence_index: int
    position: int
    record_id: str
    question_number: Optional[int]
    year: int
    subject: str
    sentence_length: int
    complexity: int


def normalize_text(text: str) -> str:
    """
    Strip Korean characters and punctuation, then collapse whitespace.

    Sentence terminators are kept so the text can still be split into sentences.

    Examples:
        >>> normalize_text("다음 글의 요지는? The author's   point, clearly!")
        '? The author s point clearly!'
    """
    text = HANGUL_PATTERN.sub(' ', text)
    text = PUNCTUATION_PATTERN.sub(' ', text)
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def split_sentences(text: str) -> List[str]:
    """Split on runs of '.', '!' and '?', dropping empty sentences."""
    return [s.strip() for s in SENTENCE_BOUNDARY_PATTERN.split(text) if s.strip()]


def is_vocabulary_word(word: str, min_length: int, max_length: int, exclude_common: bool = True) -> bool:
    """
    Check whether a lowercased token qualifies as a vocabulary word.

    Rejects tokens outside [min_length, max_length], common words (when
    exclude_common is set) and anything that is not purely a-z.
    """
    if len(word) < min_length or len(word) > max_length:
        return False
    if exclude_common and word in COMMON_WORDS:
        return False
    return bool(WORD_PATTERN.match(word))


def tokenize_text(text, record: CorpusRecord, config) -> List[WordOccurrence]:
    """
    Extract word occurrences from one text field of a corpus record.

    Args:
        text: Raw text (anything that is not a non-empty string yields no words)
        record: Source record providing id, year, subject and question number
        config: ExtractionConfig with word length bounds and stop-word toggle

    Returns:
        List of WordOccurrence in sentence order, then position order

    Examples:
        >>> words = tokenize_text("The quick brown fox jumps over the lazy dog.", record, config)
        >>> [w.word for w in words]
        ['quick', 'brown', 'fox', 'jumps', 'lazy', 'dog']
    """
    if not text or not isinstance(text, str):
        return []

    normalized = normalize_text(text)
    if not normalized:
        return []

    occurrences = []
    for sentence_index, sentence in enumerate(split_sentences(normalized)):
        tokens = sentence.split()
        complexity = sentence_complexity(tokens)

        for position, token in enumerate(tokens):
            word = token.lower()
            if not is_vocabulary_word(word, config.min_word_length, config.max_word_length,
                                      config.exclude_common_words):
                continue

            occurrences.append(WordOccurrence(
                word=word,
                original_word=token,
                sentence=sentence,
                sentence_index=sentence_index,
                position=position,
                record_id=record.record_id,
                question_number=record.question_number,
                year=record.year,
                subject=record.subject,
                sentence_length=len(tokens),
                complexity=complexity
            ))

    return occurrences


def tokenize_record(record: CorpusRecord, config) -> List[WordOccurrence]:
    """Tokenize every text field of a record, in configured field order."""
    occurrences = []
    for text in record.texts:
        occurrences.extend(tokenize_text(text, record, config))
    return occurrences
