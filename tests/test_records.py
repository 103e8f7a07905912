"""Tests for CorpusRecord validation and defaults."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import TEXT_FIELDS
from extractors.records import DEFAULT_SUBJECT, CorpusRecord


def test_from_hit_full():
    hit = {
        'objectID': 'q-2023-18',
        'question': "Which statement best describes the passage?",
        'english_text': "Ubiquitous devices changed daily life.",
        'korean_text': "다음 글의 주제로 가장 적절한 것은?",
        'paper_info': {'year': 2021, 'question_number': 18},
        'subject': 'english',
        'year': 2023,
    }
    record = CorpusRecord.from_hit(hit, TEXT_FIELDS)

    assert record.record_id == 'q-2023-18'
    assert record.year == 2023
    assert record.subject == 'english'
    assert record.question_number == 18
    assert record.texts == (hit['question'], hit['english_text'], hit['korean_text'])


def test_from_hit_defaults():
    record = CorpusRecord.from_hit({'objectID': 'q1'}, TEXT_FIELDS)

    assert record.year == datetime.now(timezone.utc).year
    assert record.subject == DEFAULT_SUBJECT
    assert record.question_number is None
    assert record.texts == ()


def test_year_falls_back_to_paper_info():
    record = CorpusRecord.from_hit({'objectID': 'q1', 'paper_info': {'year': 2017}}, TEXT_FIELDS)
    assert record.year == 2017


def test_numeric_values_are_coerced():
    record = CorpusRecord.from_hit({'objectID': 42, 'year': '2019'}, TEXT_FIELDS)
    assert record.record_id == '42'
    assert record.year == 2019


def test_texts_skip_blank_and_non_string_fields():
    hit = {'objectID': 'q1', 'question': "   ", 'english_text': ['not', 'text'], 'korean_text': "한국어 문장"}
    record = CorpusRecord.from_hit(hit, TEXT_FIELDS)
    assert record.texts == ("한국어 문장",)


def test_texts_follow_configured_fields():
    hit = {'objectID': 'q1', 'question': "Question text", 'passage': "Passage text"}
    record = CorpusRecord.from_hit(hit, ['passage', 'question'])
    assert record.texts == ("Passage text", "Question text")


@pytest.mark.parametrize("hit", [
    None,
    "q1",
    {},
    {'objectID': ''},
    {'objectID': 'q1', 'year': 'unknown'},
])
def test_invalid_hits_raise_value_error(hit):
    with pytest.raises(ValueError):
        CorpusRecord.from_hit(hit, TEXT_FIELDS)


def test_record_is_frozen():
    record = CorpusRecord(record_id='q1', year=2023)
    with pytest.raises(ValidationError):
        record.year = 2024
