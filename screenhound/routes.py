"""
HTTP routes for the Screenhound API.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from twilio.twiml.messaging_response import MessagingResponse

from screenhound.classifier import InboundMessage, classify_message
from screenhound.config import Settings
from screenhound.db import DatastoreError, DbClient
from screenhound.dependencies import get_app_settings, get_db_client
from screenhound.moderation import (
    InvalidTransition,
    SubmissionNotFound,
    kind_for_route,
    list_approved,
    list_pending,
    moderate,
)
from screenhound.schemas import (
    DEFAULT_OWNER,
    ContentResponse,
    DogContentItem,
    HealthResponse,
    ModerationRequest,
    ModerationResponse,
    PendingResponse,
    PhotoSubmissionRequest,
    SubmitResponse,
    TriviaContentItem,
    TriviaSubmissionRequest,
)
from screenhound.submissions import (
    WEB_SUBMISSION_PHONE,
    DogPhoto,
    TriviaSubmission,
)

logger = logging.getLogger(__name__)

root_router = APIRouter()
router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@root_router.post("/webhook/twilio")
def twilio_webhook(
    phone_number: Optional[str] = Form(None, alias="From"),
    body: Optional[str] = Form(None, alias="Body"),
    num_media: Optional[str] = Form(None, alias="NumMedia"),
    media_url: Optional[str] = Form(None, alias="MediaUrl0"),
    media_type: Optional[str] = Form(None, alias="MediaContentType0"),
    db: DbClient = Depends(get_db_client),
):
    """Store an inbound SMS/MMS and answer with a TwiML auto-reply."""
    logger.info("Received message from: %s", phone_number)
    logger.info("Body: %s", body)
    logger.info("Media count: %s", num_media)

    classified = classify_message(
        InboundMessage(
            sender=phone_number,
            body=body,
            num_media=num_media,
            media_url=media_url,
            media_type=media_type,
        )
    )
    try:
        saved = db.insert_submission(classified.submission)
    except DatastoreError:
        logger.exception("Error processing webhook")
        return PlainTextResponse("Error processing submission", status_code=500)
    logger.info("Saved %s submission %s", saved.type.value, saved.id)

    twiml = MessagingResponse()
    twiml.message(classified.reply_text)
    return Response(content=str(twiml), media_type="text/xml")


@root_router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_app_settings)):
    return HealthResponse(status="ok", service=settings.service_name)


@router.get("/content", response_model=ContentResponse)
@router.get("/content/{location_id}", response_model=ContentResponse)
def get_content(
    location_id: Optional[str] = None,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_app_settings),
):
    """
    Approved content for the display screen, newest first.

    ``location_id`` is accepted for future per-screen feeds but does not
    filter anything yet.
    """
    logger.debug("Fetching content for location %s", location_id or "default")
    try:
        photos, trivia = list_approved(
            db,
            photo_limit=settings.approved_photo_limit,
            trivia_limit=settings.approved_trivia_limit,
        )
    except DatastoreError:
        logger.exception("Error fetching content")
        return _error(500, "Failed to fetch content")

    content: list = [
        DogContentItem(
            name=photo.dog_name,
            image=photo.image_url,
            owner=photo.owner_name or DEFAULT_OWNER,
        )
        for photo in photos
    ]
    content.extend(TriviaContentItem(fact=item.trivia_text) for item in trivia)
    return ContentResponse(content=content)


@router.get("/moderation/pending", response_model=PendingResponse)
def get_pending(db: DbClient = Depends(get_db_client)):
    try:
        photos, trivia = list_pending(db)
    except DatastoreError:
        logger.exception("Error fetching pending")
        return _error(500, "Failed to fetch pending submissions")
    return PendingResponse(
        photos=[photo.as_dict() for photo in photos],
        trivia=[item.as_dict() for item in trivia],
    )


@router.post("/moderation/{submission_type}/{submission_id}", response_model=ModerationResponse)
def moderate_submission(
    submission_type: str,
    submission_id: str,
    payload: Optional[ModerationRequest] = None,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_app_settings),
):
    """An absent or unknown action rejects the submission."""
    kind = kind_for_route(submission_type)
    action = payload.action if payload else None
    try:
        updated = moderate(
            db,
            kind,
            submission_id,
            action,
            allow_override=settings.moderation_allow_override,
        )
    except SubmissionNotFound:
        return _error(404, "Submission not found")
    except InvalidTransition as exc:
        return _error(409, str(exc))
    except DatastoreError:
        logger.exception("Error moderating submission")
        return _error(500, "Failed to moderate submission")
    logger.info(
        "Moderated %s %s -> %s (%d rows)",
        kind.value,
        submission_id,
        action,
        len(updated),
    )
    return ModerationResponse(data=[row.as_dict() for row in updated])


@router.post("/submit/photo", response_model=SubmitResponse)
def submit_photo(
    payload: PhotoSubmissionRequest, db: DbClient = Depends(get_db_client)
):
    submission = DogPhoto(
        phone_number=payload.phone_number or WEB_SUBMISSION_PHONE,
        dog_name=payload.dog_name,
        owner_name=payload.owner_name,
        image_url=payload.image_url,
        media_type=payload.media_type or "image/jpeg",
    )
    try:
        db.insert_submission(submission)
    except DatastoreError:
        logger.exception("Error submitting photo")
        return _error(500, "Failed to submit photo")
    return SubmitResponse(message="Photo submitted!")


@router.post("/submit/trivia", response_model=SubmitResponse)
def submit_trivia(
    payload: TriviaSubmissionRequest, db: DbClient = Depends(get_db_client)
):
    submission = TriviaSubmission(
        phone_number=payload.phone_number or WEB_SUBMISSION_PHONE,
        trivia_text=payload.trivia_text,
    )
    try:
        db.insert_submission(submission)
    except DatastoreError:
        logger.exception("Error submitting trivia")
        return _error(500, "Failed to submit trivia")
    return SubmitResponse(message="Trivia submitted!")
