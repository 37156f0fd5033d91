"""
Datastore abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Dict, Optional, Protocol

from sqlalchemy import Column, DateTime, String, Text, create_engine, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from screenhound.submissions import (
    DogPhoto,
    Submission,
    SubmissionStatus,
    SubmissionType,
    TriviaSubmission,
    parse_timestamp,
)


class DatastoreError(Exception):
    """Raised when an insert/select/update is rejected by the datastore."""


class DbClient(Protocol):
    """Interface for submission storage."""

    def insert_submission(self, submission: Submission) -> Submission:
        ...

    def get_submission(
        self, kind: SubmissionType, submission_id: str
    ) -> Optional[Submission]:
        ...

    def list_submissions(
        self,
        kind: SubmissionType,
        status: SubmissionStatus,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> list[Submission]:
        ...

    def update_status(
        self, kind: SubmissionType, submission_id: str, status: SubmissionStatus
    ) -> list[Submission]:
        ...


class InMemoryDbClient:
    """Simple in-memory datastore for development and tests."""

    def __init__(self):
        self.tables: Dict[SubmissionType, Dict[str, Submission]] = {
            SubmissionType.DOG_PHOTO: {},
            SubmissionType.TRIVIA: {},
        }

    def insert_submission(self, submission: Submission) -> Submission:
        stored = replace(submission, id=uuid.uuid4().hex)
        self.tables[stored.type][stored.id] = stored
        return replace(stored)

    def get_submission(
        self, kind: SubmissionType, submission_id: str
    ) -> Optional[Submission]:
        stored = self.tables[SubmissionType(kind)].get(str(submission_id))
        return replace(stored) if stored else None

    def list_submissions(
        self,
        kind: SubmissionType,
        status: SubmissionStatus,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> list[Submission]:
        rows = [
            row
            for row in self.tables[SubmissionType(kind)].values()
            if row.status == status
        ]
        # sorted() is stable, so equal timestamps keep insertion order.
        rows = sorted(rows, key=lambda row: row.created_at, reverse=newest_first)
        if limit is not None:
            rows = rows[:limit]
        return [replace(row) for row in rows]

    def update_status(
        self, kind: SubmissionType, submission_id: str, status: SubmissionStatus
    ) -> list[Submission]:
        stored = self.tables[SubmissionType(kind)].get(str(submission_id))
        if not stored:
            return []
        stored.status = SubmissionStatus(status)
        return [replace(stored)]

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        for table in self.tables.values():
            table.clear()


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def insert_submission(self, submission: Submission) -> Submission:
        row_class = _ROW_CLASSES[submission.type]
        values = submission.as_dict()
        values.pop("type")
        values["id"] = uuid.uuid4().hex
        values["created_at"] = submission.created_at
        try:
            with self.Session() as session:
                row = row_class(**values)
                session.add(row)
                session.commit()
                session.refresh(row)
                return _to_submission(submission.type, row)
        except SQLAlchemyError as exc:
            raise DatastoreError(f"insert into {submission.table} failed") from exc

    def get_submission(
        self, kind: SubmissionType, submission_id: str
    ) -> Optional[Submission]:
        kind = SubmissionType(kind)
        try:
            with self.Session() as session:
                row = session.get(_ROW_CLASSES[kind], str(submission_id))
                if not row:
                    return None
                return _to_submission(kind, row)
        except SQLAlchemyError as exc:
            raise DatastoreError(f"select from {kind.value} failed") from exc

    def list_submissions(
        self,
        kind: SubmissionType,
        status: SubmissionStatus,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> list[Submission]:
        kind = SubmissionType(kind)
        row_class = _ROW_CLASSES[kind]
        order = (
            row_class.created_at.desc() if newest_first else row_class.created_at.asc()
        )
        stmt = (
            select(row_class)
            .where(row_class.status == SubmissionStatus(status).value)
            .order_by(order)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            with self.Session() as session:
                rows = session.execute(stmt).scalars().all()
                return [_to_submission(kind, row) for row in rows]
        except SQLAlchemyError as exc:
            raise DatastoreError(f"select from {kind.value} failed") from exc

    def update_status(
        self, kind: SubmissionType, submission_id: str, status: SubmissionStatus
    ) -> list[Submission]:
        kind = SubmissionType(kind)
        row_class = _ROW_CLASSES[kind]
        stmt = (
            update(row_class)
            .where(row_class.id == str(submission_id))
            .values(status=SubmissionStatus(status).value)
        )
        try:
            with self.Session() as session:
                session.execute(stmt)
                session.commit()
                row = session.get(row_class, str(submission_id), populate_existing=True)
                return [_to_submission(kind, row)] if row else []
        except SQLAlchemyError as exc:
            raise DatastoreError(f"update of {kind.value} failed") from exc


Base = declarative_base()


class DogPhotoRow(Base):
    __tablename__ = DogPhoto.table

    id = Column(String, primary_key=True)
    phone_number = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    dog_name = Column(String, nullable=False)
    image_url = Column(Text, nullable=True)
    media_type = Column(String, nullable=True)
    owner_name = Column(String, nullable=True)


class TriviaSubmissionRow(Base):
    __tablename__ = TriviaSubmission.table

    id = Column(String, primary_key=True)
    phone_number = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    trivia_text = Column(Text, nullable=True)


_ROW_CLASSES = {
    SubmissionType.DOG_PHOTO: DogPhotoRow,
    SubmissionType.TRIVIA: TriviaSubmissionRow,
}


def _to_submission(kind: SubmissionType, row) -> Submission:
    if kind == SubmissionType.DOG_PHOTO:
        return DogPhoto(
            id=row.id,
            phone_number=row.phone_number,
            dog_name=row.dog_name,
            image_url=row.image_url,
            media_type=row.media_type,
            owner_name=row.owner_name,
            status=SubmissionStatus(row.status),
            created_at=parse_timestamp(row.created_at),
        )
    return TriviaSubmission(
        id=row.id,
        phone_number=row.phone_number,
        trivia_text=row.trivia_text,
        status=SubmissionStatus(row.status),
        created_at=parse_timestamp(row.created_at),
    )
