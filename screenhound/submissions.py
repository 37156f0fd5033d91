"""
Submission records shared by the webhook, the web forms and moderation.

A submission is either a ``DogPhoto`` or a ``TriviaSubmission``. Both carry
the same lifecycle fields; the kind and the datastore table are class-level
constants so they cannot change once a record exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional, Type, Union

from pydantic import TypeAdapter

DEFAULT_DOG_NAME = "Anonymous Pup"
WEB_SUBMISSION_PHONE = "web-submission"

_DATETIME = TypeAdapter(datetime)


class SubmissionType(str, Enum):
    DOG_PHOTO = "dog_photo"
    TRIVIA = "trivia"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value) -> datetime:
    """Accept a datetime or an ISO-8601 string and return an aware UTC datetime."""
    value = _DATETIME.validate_python(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class DogPhoto:
    phone_number: Optional[str]
    dog_name: str
    image_url: Optional[str] = None
    media_type: Optional[str] = None
    owner_name: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    id: Optional[str] = None

    type: ClassVar[SubmissionType] = SubmissionType.DOG_PHOTO
    table: ClassVar[str] = "dog_photos"

    def __post_init__(self):
        if not (self.dog_name or "").strip():
            self.dog_name = DEFAULT_DOG_NAME

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "phone_number": self.phone_number,
            "type": self.type.value,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "dog_name": self.dog_name,
            "image_url": self.image_url,
            "media_type": self.media_type,
            "owner_name": self.owner_name,
        }

    @classmethod
    def from_row(cls, row: dict) -> "DogPhoto":
        return cls(
            id=_row_id(row),
            phone_number=row.get("phone_number"),
            dog_name=row.get("dog_name"),
            image_url=row.get("image_url"),
            media_type=row.get("media_type"),
            owner_name=row.get("owner_name"),
            status=SubmissionStatus(row["status"]),
            created_at=parse_timestamp(row["created_at"]),
        )


@dataclass
class TriviaSubmission:
    phone_number: Optional[str]
    trivia_text: Optional[str]
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    id: Optional[str] = None

    type: ClassVar[SubmissionType] = SubmissionType.TRIVIA
    table: ClassVar[str] = "trivia_submissions"

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "phone_number": self.phone_number,
            "type": self.type.value,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "trivia_text": self.trivia_text,
        }

    @classmethod
    def from_row(cls, row: dict) -> "TriviaSubmission":
        return cls(
            id=_row_id(row),
            phone_number=row.get("phone_number"),
            trivia_text=row.get("trivia_text"),
            status=SubmissionStatus(row["status"]),
            created_at=parse_timestamp(row["created_at"]),
        )


Submission = Union[DogPhoto, TriviaSubmission]

_CLASSES: dict[SubmissionType, Type[Submission]] = {
    SubmissionType.DOG_PHOTO: DogPhoto,
    SubmissionType.TRIVIA: TriviaSubmission,
}


def submission_class(kind: SubmissionType) -> Type[Submission]:
    return _CLASSES[SubmissionType(kind)]


def _row_id(row: dict) -> Optional[str]:
    value = row.get("id")
    return None if value is None else str(value)
