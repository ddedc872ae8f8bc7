"""Chat message types, one per role."""

import time
from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .collaborators import VisionResponseError, parse_vision_payload
from .formatting import Document, segment
from .logger import logger

REQUEST_FAILED = "Failed to process request. Please try again."


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    timestamp: datetime = Field(default_factory=_now)


class UserMessage(_Message):
    role: Literal["user"] = "user"


class SystemMessage(_Message):
    """Notice shown after an image upload."""

    role: Literal["system"] = "system"
    image_url: str


class AssistantMessage(_Message):
    """A model answer. `content` is the raw text and `document` its formatted tree."""

    role: Literal["assistant"] = "assistant"
    document: Document


class ErrorMessage(_Message):
    """Plain-text failure notice. Never passed through the formatter."""

    role: Literal["error"] = "error"


Message = Annotated[
    Union[UserMessage, SystemMessage, AssistantMessage, ErrorMessage],
    Field(discriminator="role"),
]


def user_message(question: str) -> UserMessage:
    return UserMessage(content=question)


def upload_notice(url: str) -> SystemMessage:
    return SystemMessage(
        content=f"Image uploaded successfully!\nURL: {url}",
        image_url=url,
    )


def error_message(text: str = REQUEST_FAILED) -> ErrorMessage:
    return ErrorMessage(content=text)


def format_response(answer: str) -> Document:
    """Run the formatter over one answer and log its size and timing."""
    start = time.perf_counter()
    document = segment(answer)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "response formatted",
        answer_length=len(answer),
        blocks=len(document.blocks),
        duration_ms=round(duration_ms, 2),
    )
    return document


def assistant_message(answer: str) -> AssistantMessage:
    return AssistantMessage(content=answer, document=format_response(answer))


def message_from_vision_payload(payload: Any) -> AssistantMessage | ErrorMessage:
    """Turn a decoded vision API reply into the message to display.

    A payload without an answer yields an ErrorMessage carrying the generic
    failure text instead of raising.
    """
    try:
        answer = parse_vision_payload(payload)
    except VisionResponseError as e:
        logger.warn("vision response rejected", error=str(e))
        return error_message()
    return assistant_message(answer)
