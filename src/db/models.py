"""
SQLAlchemy models for the vocabulary store.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, Float, JSON, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the format every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RunStatus:
    """Lifecycle states of an extraction run."""
    RUNNING = 'running'
    COMPLETED = 'completed'
    FAILED = 'failed'

    ALL = (RUNNING, COMPLETED, FAILED)


class VocabularyWord(Base):
    """Ranked vocabulary word (summary record used for listing and search)."""
    __tablename__ = 'vocabulary_words'

    word = Column(String(64), primary_key=True)
    original_word = Column(String(64), nullable=False)
    frequency = Column(Integer, nullable=False, index=True)
    rank = Column(Integer, nullable=False, index=True)
    difficulty = Column(Integer, nullable=False, index=True)
    question_count = Column(Integer, nullable=False, default=0)
    year_earliest = Column(Integer, nullable=True)
    year_latest = Column(Integer, nullable=True)
    subject_areas = Column(JSON, nullable=False, default=list)
    avg_sentence_length = Column(Float, nullable=False, default=0.0)
    examples = Column(JSON, nullable=False, default=list)       # Top 3 example sentences for quick access
    extraction_id = Column(String(64), nullable=True, index=True)
    extracted_at = Column(DateTime, default=utcnow, nullable=False)
    last_updated = Column(DateTime, default=utcnow, nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            'word': self.word,
            'original_word': self.original_word,
            'frequency': self.frequency,
            'rank': self.rank,
            'difficulty': self.difficulty,
            'question_count': self.question_count,
            'year_range': {'earliest': self.year_earliest, 'latest': self.year_latest},
            'subject_areas': list(self.subject_areas or []),
            'avg_sentence_length': self.avg_sentence_length,
            'examples': list(self.examples or []),
            'extraction_id': self.extraction_id,
            'extracted_at': self.extracted_at,
            'last_updated': self.last_updated,
        }

    def __repr__(self):
        return f"<VocabularyWord(word='{self.word}', rank={self.rank}, frequency={self.frequency})>"


class VocabularyExample(Base):
    """Full example list of a vocabulary word (detail record)."""
    __tablename__ = 'vocabulary_examples'

    word = Column(String(64), primary_key=True)
    examples = Column(JSON, nullable=False, default=list)
    total_examples = Column(Integer, nullable=False, default=0)
    extraction_id = Column(String(64), nullable=True, index=True)
    extracted_at = Column(DateTime, default=utcnow, nullable=False)
    last_updated = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            'word': self.word,
            'examples': list(self.examples or []),
            'total_examples': self.total_examples,
            'extraction_id': self.extraction_id,
            'extracted_at': self.extracted_at,
            'last_updated': self.last_updated,
        }

    def __repr__(self):
        return f"<VocabularyExample(word='{self.word}', total_examples={self.total_examples})>"


class ExtractionRun(Base):
    """Metadata of one extraction run: status, statistics, parameters and errors."""
    __tablename__ = 'extraction_runs'

    extraction_id = Column(String(64), primary_key=True)
    status = Column(String(20), nullable=False, default=RunStatus.RUNNING, index=True)  # running, completed, failed
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    statistics = Column(JSON, nullable=True)
    parameters = Column(JSON, nullable=True)
    errors = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_extraction_runs_status_start', 'status', 'start_time'),
    )

    def to_dict(self) -> dict:
        return {
            'extraction_id': self.extraction_id,
            'status': self.status,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'statistics': dict(self.statistics or {}),
            'parameters': dict(self.parameters or {}),
            'errors': list(self.errors or []),
        }

    def __repr__(self):
        return f"<ExtractionRun(id='{self.extraction_id}', status={self.status})>"


class ConnectionProbe(Base):
    """Scratch row written, read back and deleted to verify store connectivity."""
    __tablename__ = 'connection_probes'

    id = Column(String(64), primary_key=True)
    payload = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
