"""Tests for frequency ranking of word aggregates."""

import pytest

from domain.word_rank import RankedWordRecord, rank_words
from processors.aggregation import ExampleRecord, WordAggregate


def _aggregate(word, count, years=(2023,), subjects=('english',)):
    aggregate = WordAggregate(word=word, original_word=word, count=count)
    aggregate.years.update(years)
    aggregate.subjects.update(subjects)
    aggregate.question_ids.update(f"{word}-q{i}" for i in range(count))
    aggregate.total_sentence_length = 8 * count
    aggregate.sentence_count = count
    return aggregate


def _example(sentence, complexity=5):
    return ExampleRecord(
        sentence=sentence,
        question_id='q1',
        question_number=None,
        year=2023,
        subject='english',
        word_position=0,
        sentence_length=4,
        complexity=complexity,
        highlighted=True
    )


def test_threshold_and_truncation_statistics():
    aggregates = [_aggregate(f"single{i}", 1) for i in range(200)]
    aggregates += [_aggregate(f"repeat{i}", 2 + i % 40) for i in range(850)]

    result = rank_words(aggregates, min_frequency=2, max_words=500)

    assert result.unique_words == 1050
    assert result.stored_words == 500
    assert len(result.words) == 500
    assert result.filtered_words == 550
    assert all(word.frequency >= 2 for word in result.words)


def test_ranks_follow_descending_frequency():
    aggregates = [_aggregate('alpha', 3), _aggregate('beta', 9), _aggregate('gamma', 5)]
    result = rank_words(aggregates, min_frequency=1, max_words=10)

    assert [w.word for w in result.words] == ['beta', 'gamma', 'alpha']
    assert [w.rank for w in result.words] == [1, 2, 3]
    assert result.top_frequency == 9
    frequencies = [w.frequency for w in result.words]
    assert frequencies == sorted(frequencies, reverse=True)


def test_ties_keep_discovery_order():
    aggregates = [_aggregate('first', 2), _aggregate('second', 4), _aggregate('third', 2), _aggregate('fourth', 2)]
    result = rank_words(aggregates, min_frequency=1, max_words=10)
    assert [w.word for w in result.words] == ['second', 'first', 'third', 'fourth']


def test_empty_ranking():
    result = rank_words([], min_frequency=2, max_words=500)
    assert result.words == []
    assert result.top_frequency == 0
    assert result.filtered_words == 0


def test_ranked_record_fields():
    aggregate = _aggregate('analyze', 4, years=(2021, 2015, 2023), subjects=('science', 'english'))
    aggregate.examples.extend(_example(f"Sentence {i}", complexity=7) for i in range(5))

    [record] = rank_words([aggregate], min_frequency=1, max_words=1).words

    assert record.years == (2015, 2021, 2023)
    assert record.subjects == ('english', 'science')
    assert record.year_range == {'earliest': 2015, 'latest': 2023}
    assert record.question_count == 4
    assert record.avg_sentence_length == pytest.approx(8.0)
    assert record.top_examples == ["Sentence 0", "Sentence 1", "Sentence 2"]
    assert 1 <= record.difficulty <= 10


def test_year_range_requires_years():
    record = RankedWordRecord(
        word='orphan', original_word='orphan', frequency=1, rank=1, difficulty=5,
        years=(), subjects=(), question_count=0, avg_sentence_length=0.0, examples=()
    )
    with pytest.raises(ValueError):
        record.year_range


def test_rounded_average_sentence_length():
    record = RankedWordRecord(
        word='theory', original_word='theory', frequency=3, rank=1, difficulty=5,
        years=(2023,), subjects=('english',), question_count=3,
        avg_sentence_length=22 / 3, examples=()
    )
    assert record.rounded_avg_sentence_length == pytest.approx(7.33)
