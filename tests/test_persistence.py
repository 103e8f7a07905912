"""Tests for storing ranked words in the vocabulary database."""

import pytest

from db import RunStatus, utcnow
from domain.word_rank import RankedWordRecord
from processors.aggregation import ExampleRecord
from processors.persistence import build_word_documents, store_ranked_words


def _example(i, highlighted):
    return ExampleRecord(
        sentence=f"Scientists analyze sample {i}",
        question_id=f"q{i}",
        question_number=i,
        year=2020 + i,
        subject='science',
        word_position=1,
        sentence_length=4,
        complexity=3,
        highlighted=highlighted
    )


def _record(word='analyze', rank=1, frequency=5, years=(2019, 2023), examples=None):
    if examples is None:
        examples = tuple(_example(i, i < 3) for i in range(5))
    return RankedWordRecord(
        word=word,
        original_word=word.capitalize(),
        frequency=frequency,
        rank=rank,
        difficulty=6,
        years=years,
        subjects=('english', 'science'),
        question_count=4,
        avg_sentence_length=22 / 3,
        examples=examples
    )


def test_build_word_documents():
    timestamp = object()
    summary, detail = build_word_documents(_record(), timestamp, extraction_id='extraction_1')

    assert summary['original_word'] == 'Analyze'
    assert summary['year_earliest'] == 2019
    assert summary['year_latest'] == 2023
    assert summary['avg_sentence_length'] == pytest.approx(7.33)
    assert summary['examples'] == [f"Scientists analyze sample {i}" for i in range(3)]
    assert summary['extracted_at'] is timestamp
    assert detail['total_examples'] == 5
    assert detail['examples'][0]['isHighlighted'] is True
    assert detail['examples'][4]['isHighlighted'] is False
    assert detail['extraction_id'] == 'extraction_1'


def test_store_ranked_words_round_trip(database):
    records = [_record('analyze', 1, 5), _record('theory', 2, 3)]
    stats = store_ranked_words(records, database, commit_limit=500, extraction_id='extraction_1', verbose=False)

    assert stats == {'stored': 2, 'failed': 0, 'commits': 1, 'commit_sizes': [4]}

    word = database.get_word('analyze')
    assert word['rank'] == 1
    assert word['frequency'] == 5
    assert word['year_range'] == {'earliest': 2019, 'latest': 2023}
    assert word['subject_areas'] == ['english', 'science']
    assert len(word['examples']) == 3
    assert word['extraction_id'] == 'extraction_1'

    detail = database.get_examples('ANALYZE')
    assert detail['total_examples'] == 5
    assert detail['examples'][0]['questionId'] == 'q0'


def test_store_overwrites_previous_run(database):
    store_ranked_words([_record('analyze', 1, 5)], database, verbose=False)
    store_ranked_words([_record('analyze', 3, 9)], database, extraction_id='extraction_2', verbose=False)

    assert database.count_words() == 1
    word = database.get_word('analyze')
    assert word['frequency'] == 9
    assert word['extraction_id'] == 'extraction_2'


def test_failed_word_is_recorded_and_skipped(database):
    errors = []
    records = [_record('analyze', 1), _record('orphan', 2, years=()), _record('theory', 3)]
    stats = store_ranked_words(records, database, commit_limit=2, errors=errors, verbose=False)

    assert stats['stored'] == 2
    assert stats['failed'] == 1
    assert stats['commit_sizes'] == [2, 2]
    assert [e['word'] for e in errors] == ['orphan']
    assert database.get_word('orphan') is None
    assert database.get_word('theory') is not None


def test_list_words_filters_and_pages(database):
    records = [
        _record('analyze', 1, 9),
        _record('theory', 2, 5),
        _record('paradigm', 3, 2),
    ]
    store_ranked_words(records, database, verbose=False)

    page, total = database.list_words(limit=2)
    assert total == 3
    assert [w['word'] for w in page] == ['analyze', 'theory']

    page, total = database.list_words(sort_by='alphabetical', offset=1, limit=5)
    assert [w['word'] for w in page] == ['paradigm', 'theory']

    page, total = database.list_words(min_frequency=5)
    assert total == 2

    page, total = database.list_words(search='ADIG')
    assert [w['word'] for w in page] == ['paradigm']

    _, total = database.list_words(subject='history')
    assert total == 0
    _, total = database.list_words(subject='science')
    assert total == 3

    with pytest.raises(ValueError):
        database.list_words(sort_by='random')


@pytest.mark.parametrize("search", ['_', '%', 'a_a', '\\'])
def test_list_words_search_matches_literally(database, search):
    store_ranked_words([_record('analyze', 1, 9), _record('theory', 2, 5)], database, verbose=False)

    page, total = database.list_words(search=search)
    assert total == 0
    assert page == []


# ---------------------------------------------------------------------------
# Run records


def test_finished_run_cannot_be_finished_again(database):
    started = utcnow()
    database.create_run('extraction_1', started, parameters={}, statistics={'storedWords': 0})
    database.finish_run('extraction_1', RunStatus.COMPLETED, utcnow(), statistics={'storedWords': 2}, errors=[])

    with pytest.raises(ValueError):
        database.finish_run('extraction_1', RunStatus.FAILED, utcnow(),
                            statistics={'storedWords': 0}, errors=[{'error': 'late', 'fatal': True}])

    run = database.get_run('extraction_1')
    assert run['status'] == RunStatus.COMPLETED
    assert run['statistics'] == {'storedWords': 2}
    assert run['errors'] == []


def test_finishing_unknown_run_fails(database):
    with pytest.raises(ValueError):
        database.finish_run('missing', RunStatus.COMPLETED, utcnow(), statistics={}, errors=[])
