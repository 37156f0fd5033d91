"""
Classification of inbound SMS/MMS messages into submissions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from screenhound.submissions import (
    DogPhoto,
    Submission,
    SubmissionType,
    TriviaSubmission,
)

REPLY_TEMPLATE = (
    "Thanks for submitting to Screenhound! \U0001F415 "
    "Your {noun} will appear on screen once approved!"
)

_MEDIA_COUNT_PATTERN = re.compile(r"^\s*([+-]?[0-9]+)")

# Evaluated in order, first match wins. Only the "by" keyword ignores case so
# the [A-Za-z] classes stay ASCII while \s still matches Unicode spaces.
OWNER_NAME_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"[-–—]\s*([A-Za-z]+)\s*$"),  # "Max - Sarah"
    re.compile(r"\(([A-Za-z]+)\)\s*$"),  # "Max (Sarah)"
    re.compile(r"(?i:by)\s+([A-Za-z]+)\s*$"),  # "Max by Sarah"
)


@dataclass(frozen=True)
class InboundMessage:
    """Fields of a provider webhook delivery that matter for classification."""

    sender: Optional[str] = None
    body: Optional[str] = None
    num_media: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[str] = None


@dataclass(frozen=True)
class ClassifiedMessage:
    submission: Submission
    reply_text: str

    @property
    def kind(self) -> SubmissionType:
        return self.submission.type


def parse_media_count(value: Optional[str]) -> int:
    """Parse the leading integer of ``value``; anything unparseable counts as 0."""
    if value is None:
        return 0
    match = _MEDIA_COUNT_PATTERN.match(str(value))
    return int(match.group(1)) if match else 0


def extract_owner_name(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    for pattern in OWNER_NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def auto_reply_text(kind: SubmissionType) -> str:
    noun = "photo" if kind == SubmissionType.DOG_PHOTO else "dog fact"
    return REPLY_TEMPLATE.format(noun=noun)


def classify_message(message: InboundMessage) -> ClassifiedMessage:
    """
    Turn an inbound message into a pending submission plus the auto-reply.

    Any attachment makes it a dog photo named after the trimmed body; a
    message without attachments is stored verbatim as trivia.
    """
    body = message.body or ""
    submission: Submission
    if parse_media_count(message.num_media) > 0:
        submission = DogPhoto(
            phone_number=message.sender,
            dog_name=body.strip(),
            image_url=message.media_url,
            media_type=message.media_type,
            owner_name=extract_owner_name(body),
        )
    else:
        submission = TriviaSubmission(
            phone_number=message.sender,
            trivia_text=body,
        )
    return ClassifiedMessage(
        submission=submission, reply_text=auto_reply_text(submission.type)
    )
