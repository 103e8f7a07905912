"""Tests for text normalization and word occurrence extraction."""

import pytest

from conftest import make_record
from processors.aggregation import WordAggregator
from processors.tokenization import (
    COMMON_WORDS,
    is_vocabulary_word,
    normalize_text,
    split_sentences,
    tokenize_record,
    tokenize_text,
)


# ---------------------------------------------------------------------------
# Normalization


def test_normalize_text_strips_hangul_and_punctuation():
    text = "다음 글의 요지는? The author's   point, clearly!"
    assert normalize_text(text) == "? The author s point clearly!"


@pytest.mark.parametrize("text", [
    "The quick brown fox jumps over the lazy dog.",
    "다음 빈칸에 들어갈 말로 가장 적절한 것은?  (A) theory -- practice!!",
    "  Tabs\tand\nnewlines...   everywhere  ",
    "",
])
def test_normalize_text_is_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_split_sentences_drops_empty_sentences():
    assert split_sentences("First one. Second one!! Third?") == ["First one", "Second one", "Third"]
    assert split_sentences("...") == []


# ---------------------------------------------------------------------------
# Word filter


def test_is_vocabulary_word_rules():
    assert is_vocabulary_word("analyze", 3, 20)
    assert not is_vocabulary_word("an", 3, 20)
    assert not is_vocabulary_word("a" * 21, 3, 20)
    assert not is_vocabulary_word("the", 3, 20)
    assert is_vocabulary_word("the", 3, 20, exclude_common=False)
    assert not is_vocabulary_word("covid19", 3, 20)
    assert not is_vocabulary_word("snake_case", 3, 20)


def test_common_words_are_lowercase():
    assert all(word == word.lower() for word in COMMON_WORDS)


# ---------------------------------------------------------------------------
# Tokenization


def test_tokenize_pangram(config):
    record = make_record('q1')
    occurrences = tokenize_text("The quick brown fox jumps over the lazy dog.", record, config)

    assert [o.word for o in occurrences] == ['quick', 'brown', 'fox', 'jumps', 'lazy', 'dog']
    assert [o.position for o in occurrences] == [1, 2, 3, 4, 7, 8]
    assert {o.sentence for o in occurrences} == {"The quick brown fox jumps over the lazy dog"}
    assert all(o.sentence_length == 9 for o in occurrences)
    assert all(o.complexity == 3 for o in occurrences)
    assert all(o.record_id == 'q1' and o.year == 2023 and o.subject == 'english' for o in occurrences)


def test_pangram_words_each_have_one_highlighted_example(config):
    record = make_record('q1')
    aggregator = WordAggregator(max_examples=10, highlighted_examples=3)
    aggregator.fold_all(tokenize_text("The quick brown fox jumps over the lazy dog.", record, config))

    assert len(aggregator) == 6
    for aggregate in aggregator.aggregates():
        assert aggregate.count == 1
        assert len(aggregate.examples) == 1
        assert aggregate.examples[0].highlighted is True


def test_tokenize_keeps_sentence_context(config):
    record = make_record('q2')
    occurrences = tokenize_text("Scientists analyze data. Researchers analyze results!", record, config)

    analyze = [o for o in occurrences if o.word == 'analyze']
    assert [o.sentence_index for o in analyze] == [0, 1]
    assert [o.sentence for o in analyze] == ["Scientists analyze data", "Researchers analyze results"]
    assert all(o.position == 1 for o in analyze)


def test_tokenize_preserves_original_casing(config):
    occurrences = tokenize_text("Photosynthesis matters.", make_record(), config)
    assert occurrences[0].word == 'photosynthesis'
    assert occurrences[0].original_word == 'Photosynthesis'


@pytest.mark.parametrize("text", [None, "", 42, "   ", "다음 중 옳은 것은?", "?!..."])
def test_tokenize_text_without_words(config, text):
    assert tokenize_text(text, make_record(), config) == []


def test_tokenize_respects_length_bounds(config):
    strict = config.with_overrides(min_word_length=4)
    words = [o.word for o in tokenize_text("The quick brown fox jumps over the lazy dog.", make_record(), strict)]
    assert 'fox' not in words and 'dog' not in words
    assert 'quick' in words


def test_tokenize_without_stop_word_filter(config):
    permissive = config.with_overrides(exclude_common_words=False)
    words = [o.word for o in tokenize_text("The quick brown fox jumps over the lazy dog.", make_record(), permissive)]
    assert words.count('the') == 2
    assert 'over' in words


def test_tokenize_record_walks_fields_in_order(config):
    record = make_record('q3', texts=("Alpha beta gamma.", "Delta epsilon."))
    words = [o.word for o in tokenize_record(record, config)]
    assert words == ['alpha', 'beta', 'gamma', 'delta', 'epsilon']


@pytest.mark.parametrize("texts", [
    ("다음 글을 읽고 답하시오. Scientists analyze data! Researchers analyze results?",),
    ("Theory precedes practice. 이론과 실천! Practice refines theory...", "연구자들은 데이터를 분석한다. Analysts verify."),
    ("Mixed 한국어 words, and English words; repeated words. Again words!",),
])
def test_tokenize_record_is_deterministic(config, texts):
    record = make_record('q9', texts=texts)

    first = tokenize_record(record, config)
    second = tokenize_record(record, config)

    assert first
    assert first == second
