"""
Pydantic schemas for the Screenhound API.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel

DEFAULT_OWNER = "A Friend"


class PhotoSubmissionRequest(BaseModel):
    phone_number: Optional[str] = None
    dog_name: Optional[str] = None
    owner_name: Optional[str] = None
    image_url: Optional[str] = None
    media_type: Optional[str] = None


class TriviaSubmissionRequest(BaseModel):
    phone_number: Optional[str] = None
    trivia_text: Optional[str] = None


class SubmitResponse(BaseModel):
    success: bool = True
    message: str


class ModerationRequest(BaseModel):
    # Any value other than "approve" rejects.
    action: Any = None


class ModerationResponse(BaseModel):
    success: bool = True
    data: list[dict]


class PendingResponse(BaseModel):
    photos: list[dict]
    trivia: list[dict]
    success: bool = True


class DogContentItem(BaseModel):
    type: Literal["dog"] = "dog"
    name: str
    image: Optional[str] = None
    owner: str = DEFAULT_OWNER


class TriviaContentItem(BaseModel):
    type: Literal["trivia"] = "trivia"
    fact: Optional[str] = None


class ContentResponse(BaseModel):
    content: list[Union[DogContentItem, TriviaContentItem]]
    success: bool = True


class HealthResponse(BaseModel):
    status: Literal["ok"]
    service: str
