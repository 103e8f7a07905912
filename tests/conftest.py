"""Shared fixtures for the vocabulary extractor tests."""

from pathlib import Path
import sys

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from db import Database
from db.corpus import CorpusDatabase
from extractors.records import CorpusRecord
from processors.config import ExtractionConfig


TEXT_FIELDS = ['question', 'english_text', 'korean_text']


def make_hit(object_id, question=None, year=2023, subject='english', **extra):
    hit = {'objectID': object_id, 'year': year, 'subject': subject}
    if question is not None:
        hit['question'] = question
    hit.update(extra)
    return hit


def make_record(object_id='q1', year=2023, subject='english', question_number=None, texts=()):
    return CorpusRecord(
        record_id=object_id,
        year=year,
        subject=subject,
        question_number=question_number,
        texts=tuple(texts)
    )


@pytest.fixture
def config():
    return ExtractionConfig(
        corpus_index='test-index',
        page_size=2,
        max_words_to_store=100,
        min_frequency=1,
        min_word_length=3,
        max_word_length=20,
        exclude_common_words=True,
        max_examples_per_word=10,
        highlighted_examples=3,
        progress_interval=0,
        page_delay_ms=0,
        commit_limit=500,
        text_fields=list(TEXT_FIELDS)
    )


@pytest.fixture
def database(tmp_path):
    return Database(str(tmp_path / "vocabulary.db"))


@pytest.fixture
def corpus_db(tmp_path):
    return CorpusDatabase(str(tmp_path / "corpus.db"))
