"""
Database connection and operations.
"""

from pathlib import Path
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from settings import VOCAB_DB_PATH
from .batching import WriteBatch
from .models import Base, VocabularyWord, VocabularyExample, ExtractionRun, ConnectionProbe, RunStatus, utcnow


WORD_SORT_OPTIONS = ('frequency', 'alphabetical', 'recent')


class Database:
    """Database manager for the vocabulary store."""

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses VOCAB_DB_PATH from settings.
        """
        if db_path is None:
            db_path = VOCAB_DB_PATH

        # Ensure data directory exists
        db_file = Path(db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)

        # Create engine and session
        self.db_path = db_path
        self.engine = create_engine(f'sqlite:///{db_path}', echo=False)
        self.SessionLocal = sessionmaker(bind=self.engine)

        # Create tables if they don't exist
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.SessionLocal()

    def batch(self) -> WriteBatch:
        """Start a new atomic write batch."""
        return WriteBatch(self.SessionLocal)

    @staticmethod
    def timestamp() -> datetime:
        """Server-side timestamp for written records."""
        return utcnow()

    def probe(self) -> bool:
        """
        Verify the store accepts writes, reads and deletes.

        Writes a probe row, reads it back and deletes it.

        Returns:
            True if the round trip succeeded, False otherwise
        """
        session = self.get_session()
        try:
            session.merge(ConnectionProbe(id='connection-test', payload='probe', created_at=utcnow()))
            session.commit()

            probe = session.get(ConnectionProbe, 'connection-test')
            if probe is None:
                print("✗ Store write succeeded but read failed")
                return False

            session.delete(probe)
            session.commit()
            return True
        except SQLAlchemyError as e:
            session.rollback()
            print(f"✗ Store connection failed: {e}")
            return False
        finally:
            session.close()

    # ------------------------------------------------------------------
    # Extraction runs

    def create_run(self, extraction_id: str, start_time: datetime, parameters: dict, statistics: dict) -> None:
        """Record the start of an extraction run with status 'running'."""
        session = self.get_session()
        try:
            run = ExtractionRun(
                extraction_id=extraction_id,
                status=RunStatus.RUNNING,
                start_time=start_time,
                statistics=dict(statistics),
                parameters=dict(parameters),
                errors=[]
            )
            session.add(run)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def finish_run(
        self,
        extraction_id: str,
        status: str,
        end_time: datetime,
        statistics: dict,
        errors: List[dict]
    ) -> None:
        """
        Record the final state of an extraction run.

        Args:
            extraction_id: Run identifier
            status: 'completed' or 'failed'
            end_time: Completion timestamp
            statistics: Statistics snapshot at finalization
            errors: Error entries (already truncated by the caller)

        Raises:
            ValueError: If the run does not exist or is no longer running
        """
        if status not in (RunStatus.COMPLETED, RunStatus.FAILED):
            raise ValueError(f"Invalid final status: {status}")

        session = self.get_session()
        try:
            run = session.get(ExtractionRun, extraction_id)
            if not run:
                raise ValueError(f"Extraction run {extraction_id} not found")
            # A finalized run is never rewritten
            if run.status != RunStatus.RUNNING:
                raise ValueError(f"Extraction run {extraction_id} is already {run.status}")

            run.status = status
            run.end_time = end_time
            run.statistics = dict(statistics)
            run.errors = list(errors)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_run(self, extraction_id: str) -> Optional[Dict]:
        """Get an extraction run by identifier."""
        session = self.get_session()
        try:
            run = session.get(ExtractionRun, extraction_id)
            return run.to_dict() if run else None
        finally:
            session.close()

    def list_runs(self, status: Optional[str] = None, limit: int = 20) -> List[Dict]:
        """List extraction runs, most recent first."""
        session = self.get_session()
        try:
            query = session.query(ExtractionRun)
            if status:
                query = query.filter(ExtractionRun.status == status)
            runs = query.order_by(ExtractionRun.start_time.desc()).limit(limit).all()
            return [run.to_dict() for run in runs]
        finally:
            session.close()

    # ------------------------------------------------------------------
    # Vocabulary

    def get_word(self, word: str) -> Optional[Dict]:
        """Get the summary record of a word."""
        session = self.get_session()
        try:
            entry = session.get(VocabularyWord, word.lower())
            return entry.to_dict() if entry else None
        finally:
            session.close()

    def get_examples(self, word: str) -> Optional[Dict]:
        """Get the detail record (full example list) of a word."""
        session = self.get_session()
        try:
            entry = session.get(VocabularyExample, word.lower())
            return entry.to_dict() if entry else None
        finally:
            session.close()

    def count_words(self) -> int:
        session = self.get_session()
        try:
            return session.query(VocabularyWord).count()
        finally:
            session.close()

    def list_words(
        self,
        sort_by: str = 'frequency',
        subject: Optional[str] = None,
        min_frequency: int = 1,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> Tuple[List[Dict], int]:
        """
        List stored vocabulary words.

        Args:
            sort_by: 'frequency' (default), 'alphabetical' or 'recent'
            subject: Only words seen in this subject area ('all' or None for every subject)
            min_frequency: Minimum frequency
            search: Case-insensitive substring of the word
            limit: Page size
            offset: Number of matching words to skip

        Returns:
            Tuple of (page of word dicts, total number of matching words)
        """
        if sort_by not in WORD_SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort_by}")

        session = self.get_session()
        try:
            query = session.query(VocabularyWord)

            if min_frequency > 1:
                query = query.filter(VocabularyWord.frequency >= min_frequency)
            if search:
                escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
                query = query.filter(VocabularyWord.word.like(f"%{escaped}%", escape="\\"))

            if sort_by == 'alphabetical':
                query = query.order_by(VocabularyWord.word.asc())
            elif sort_by == 'recent':
                query = query.order_by(VocabularyWord.last_updated.desc(), VocabularyWord.rank.asc())
            else:
                query = query.order_by(VocabularyWord.frequency.desc(), VocabularyWord.rank.asc())

            entries = query.all()

            # Subject areas live in a JSON list, so this filter runs in Python
            if subject and subject != 'all':
                entries = [e for e in entries if subject in (e.subject_areas or [])]

            total = len(entries)
            page = entries[offset:offset + limit]
            return [e.to_dict() for e in page], total
        finally:
            session.close()
