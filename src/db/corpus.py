"""
Local corpus database for storing exam question records.

This module provides a separate SQLite database holding the raw question
hits, so extraction runs can page over a local copy of the corpus instead of
the remote search index.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from sqlalchemy import create_engine, Column, Integer, String, Text, DateTime, Index, func
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from settings import get_setting
from .models import utcnow


Base = declarative_base()


class CorpusQuestion(Base):
    """One question record of the corpus."""

    __tablename__ = 'corpus_questions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    object_id = Column(String(128), unique=True, nullable=False, index=True)
    year = Column(Integer, nullable=True, index=True)
    subject = Column(String(100), nullable=True, index=True)
    question_number = Column(Integer, nullable=True)
    payload = Column(Text, nullable=False)  # Raw hit as JSON
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_corpus_subject_year', 'subject', 'year'),
    )


def _as_int(value) -> Optional[int]:
    try:
        return int(value) if value not in (None, '') else None
    except (TypeError, ValueError):
        return None


class CorpusDatabase:
    """Database interface for the local question corpus."""

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize corpus database.

        Args:
            db_path: Path to SQLite database file. If None, uses default from settings.
        """
        if db_path is None:
            db_path = get_setting('CORPUS_DB_PATH', 'data/corpus.db')

        # Ensure data directory exists
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self.db_path = db_path
        self.engine = create_engine(f'sqlite:///{db_path}')
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine)

    def _get_session(self) -> Session:
        """Create a new database session."""
        return self.SessionLocal()

    def import_records(self, records: Iterable[dict]) -> Dict:
        """
        Insert or update question records keyed by objectID.

        Args:
            records: Raw hits (dicts with at least an 'objectID')

        Returns:
            Dictionary with import statistics: total, inserted, updated, errors
        """
        stats = {'total': 0, 'inserted': 0, 'updated': 0, 'errors': 0}
        session = self._get_session()
        try:
            for record in records:
                stats['total'] += 1
                try:
                    if not isinstance(record, dict) or not record.get('objectID'):
                        raise ValueError("record has no objectID")

                    object_id = str(record['objectID'])
                    paper_info = record.get('paper_info') if isinstance(record.get('paper_info'), dict) else {}
                    values = {
                        'year': _as_int(record.get('year') or paper_info.get('year')),
                        'subject': record.get('subject'),
                        'question_number': _as_int(paper_info.get('question_number')),
                        'payload': json.dumps(record, ensure_ascii=False),
                    }

                    existing = session.query(CorpusQuestion).filter_by(object_id=object_id).first()
                    if existing:
                        for key, value in values.items():
                            setattr(existing, key, value)
                        existing.updated_at = utcnow()
                        stats['updated'] += 1
                    else:
                        session.add(CorpusQuestion(object_id=object_id, **values))
                        stats['inserted'] += 1
                    session.flush()

                except (ValueError, TypeError) as e:
                    stats['errors'] += 1
                    print(f"Error importing record {stats['total']}: {e}")
                    continue

            session.commit()
            return stats
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def fetch_page(self, offset: int, limit: int) -> List[dict]:
        """
        Fetch a page of raw hits in insertion order.

        Args:
            offset: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of hit dictionaries
        """
        session = self._get_session()
        try:
            rows = (session.query(CorpusQuestion)
                    .order_by(CorpusQuestion.id.asc())
                    .offset(offset)
                    .limit(limit)
                    .all())
            return [json.loads(row.payload) for row in rows]
        finally:
            session.close()

    def count(self) -> int:
        session = self._get_session()
        try:
            return session.query(CorpusQuestion).count()
        finally:
            session.close()

    def get_stats(self) -> Dict:
        """
        Get corpus statistics.

        Returns:
            Dictionary with stats: total_records, subjects (name -> count),
            earliest_year, latest_year, oldest_entry, newest_entry
        """
        session = self._get_session()
        try:
            total = session.query(CorpusQuestion).count()
            if total == 0:
                return {
                    'total_records': 0,
                    'subjects': {},
                    'earliest_year': None,
                    'latest_year': None,
                    'oldest_entry': None,
                    'newest_entry': None
                }

            subject_rows = session.query(
                CorpusQuestion.subject,
                func.count(CorpusQuestion.id).label('count')
            ).group_by(CorpusQuestion.subject).all()

            earliest, latest = session.query(
                func.min(CorpusQuestion.year),
                func.max(CorpusQuestion.year)
            ).one()
            oldest, newest = session.query(
                func.min(CorpusQuestion.created_at),
                func.max(CorpusQuestion.created_at)
            ).one()

            subjects = {}
            for row in subject_rows:
                name = row.subject or 'general'
                subjects[name] = subjects.get(name, 0) + row.count

            return {
                'total_records': total,
                'subjects': subjects,
                'earliest_year': earliest,
                'latest_year': latest,
                'oldest_entry': oldest,
                'newest_entry': newest
            }
        finally:
            session.close()

    def clear(self) -> int:
        """Delete every record. Returns the number of records deleted."""
        session = self._get_session()
        try:
            count = session.query(CorpusQuestion).count()
            session.query(CorpusQuestion).delete()
            session.commit()
            return count
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
