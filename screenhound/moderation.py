"""
Moderation lifecycle for submissions.

Every submission starts ``pending`` and a moderator moves it to ``approved``
or ``rejected``. By default a moderator may also re-moderate a submission
that already left ``pending`` (an admin override); concurrent actions are not
coordinated and the last write wins. Turning ``allow_override`` off makes the
terminal statuses final.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from screenhound.db import DbClient
from screenhound.submissions import Submission, SubmissionStatus, SubmissionType


class ModerationAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class InvalidTransition(Exception):
    """Raised when overrides are disabled and the submission is no longer pending."""

    def __init__(self, current: SubmissionStatus, target: SubmissionStatus):
        super().__init__(
            f"cannot move submission from {current.value} to {target.value}"
        )
        self.current = current
        self.target = target


class SubmissionNotFound(Exception):
    pass


def target_status(action: Any) -> SubmissionStatus:
    """Anything other than ``approve`` rejects the submission."""
    if action == ModerationAction.APPROVE.value:
        return SubmissionStatus.APPROVED
    return SubmissionStatus.REJECTED


def kind_for_route(route_type: str) -> SubmissionType:
    if route_type == "photo":
        return SubmissionType.DOG_PHOTO
    return SubmissionType.TRIVIA


def transition(
    current: SubmissionStatus,
    action: Any,
    *,
    allow_override: bool = True,
) -> SubmissionStatus:
    target = target_status(action)
    if not allow_override and current != SubmissionStatus.PENDING:
        raise InvalidTransition(SubmissionStatus(current), target)
    return target


def moderate(
    db: DbClient,
    kind: SubmissionType,
    submission_id: str,
    action: Any,
    *,
    allow_override: bool = True,
) -> list[Submission]:
    """Apply ``action`` and return the rows the datastore updated."""
    if allow_override:
        status = target_status(action)
    else:
        current = db.get_submission(kind, submission_id)
        if current is None:
            raise SubmissionNotFound(f"{kind.value} {submission_id} not found")
        status = transition(current.status, action, allow_override=False)
    return db.update_status(kind, submission_id, status)


def list_pending(db: DbClient) -> tuple[list[Submission], list[Submission]]:
    """Pending photos and trivia, oldest first."""
    photos = db.list_submissions(
        SubmissionType.DOG_PHOTO, SubmissionStatus.PENDING, newest_first=False
    )
    trivia = db.list_submissions(
        SubmissionType.TRIVIA, SubmissionStatus.PENDING, newest_first=False
    )
    return photos, trivia


def list_approved(
    db: DbClient, *, photo_limit: int = 20, trivia_limit: int = 10
) -> tuple[list[Submission], list[Submission]]:
    """Most recently created approved photos and trivia, newest first."""
    photos = db.list_submissions(
        SubmissionType.DOG_PHOTO,
        SubmissionStatus.APPROVED,
        newest_first=True,
        limit=photo_limit,
    )
    trivia = db.list_submissions(
        SubmissionType.TRIVIA,
        SubmissionStatus.APPROVED,
        newest_first=True,
        limit=trivia_limit,
    )
    return photos, trivia
