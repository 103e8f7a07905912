"""
Corpus record schema.

Search hits carry loosely-shaped optional fields (paper_info, subject, year,
several free-text fields). CorpusRecord is the validated shape the pipeline
works with; every default is applied here and nowhere else.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_SUBJECT = 'general'


class CorpusRecord(BaseModel):
    """One exam question record with its tokenizable text fields."""

    model_config = ConfigDict(frozen=True)

    record_id: str = Field(min_length=1, description="Unique identifier (objectID) of the source record")
    year: int = Field(description="Exam year; defaults to the current year when missing")
    subject: str = Field(default=DEFAULT_SUBJECT, description="Subject/category label")
    question_number: Optional[int] = Field(default=None, description="Question number within the paper")
    texts: Tuple[str, ...] = Field(default=(), description="Non-empty free-text fields in configured order")

    @classmethod
    def from_hit(cls, hit: dict, text_fields: Sequence[str]) -> 'CorpusRecord':
        """
        Build a record from a raw search hit.

        Defaults:
        - year: hit.year, then paper_info.year, then the current year
        - subject: hit.subject, then 'general'
        - question_number: paper_info.question_number or None

        Args:
            hit: Raw hit dictionary
            text_fields: Names of the free-text fields to keep, in order

        Returns:
            CorpusRecord

        Raises:
            ValueError: If the hit is not a mapping, has no objectID, or a
                field cannot be coerced (pydantic.ValidationError is a ValueError)
        """
        if not isinstance(hit, dict):
            raise ValueError(f"Corpus hit must be a mapping, got {type(hit).__name__}")

        record_id = hit.get('objectID')
        if record_id in (None, ''):
            raise ValueError("Corpus hit has no objectID")

        paper_info = hit.get('paper_info')
        if not isinstance(paper_info, dict):
            paper_info = {}

        year = hit.get('year') or paper_info.get('year') or datetime.now(timezone.utc).year
        subject = hit.get('subject') or DEFAULT_SUBJECT

        texts = tuple(
            hit[field] for field in text_fields
            if isinstance(hit.get(field), str) and hit[field].strip()
        )

        return cls(
            record_id=str(record_id),
            year=year,
            subject=str(subject),
            question_number=paper_info.get('question_number') or None,
            texts=texts
        )
