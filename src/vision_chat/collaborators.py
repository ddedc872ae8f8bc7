"""Parsing of replies from the image host and the vision API.

No network calls are made here. The browser client performs the requests and
hands the raw replies to these functions.
"""

import os
from collections.abc import Mapping
from typing import Any

# Constants
VISION_MODEL = os.getenv("VISION_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")
VISION_ANSWER_KEY = "BK9"


class CollaboratorError(ValueError):
    """Raised when an upstream service reply cannot be used."""

    pass


class UploadError(CollaboratorError):
    """Raised when the image host did not return a usable URL."""

    pass


class VisionResponseError(CollaboratorError):
    """Raised when the vision API payload carries no answer."""

    pass


def parse_upload_response(text: str) -> str:
    """Extract the hosted image URL from the upload service's reply.

    Args:
        text: The plain-text body returned by the upload endpoint.

    Returns:
        The URL with surrounding whitespace removed.

    Raises:
        UploadError: If the reply is empty or reports an error.
    """
    url = (text or "").strip()
    if not url or "error" in url.lower():
        raise UploadError("Upload failed")
    return url


def build_vision_params(
    question: str, image_url: str, model: str | None = None
) -> dict[str, str]:
    """Build the query parameters for a vision API request.

    Args:
        question: The user's free-text question.
        image_url: URL of the already-uploaded image.
        model: Model identifier. Defaults to VISION_MODEL.

    Returns:
        Mapping of query parameter name to value.

    Raises:
        ValueError: If the question is blank or no image URL is given.
    """
    if not question or not question.strip():
        raise ValueError("question must not be blank")
    if not image_url:
        raise ValueError("an image must be uploaded before asking a question")
    return {"q": question, "image_url": image_url, "model": model or VISION_MODEL}


def parse_vision_payload(payload: Any) -> str:
    """Extract the answer text from a decoded vision API response.

    Args:
        payload: The decoded JSON body.

    Returns:
        The answer text, unmodified.

    Raises:
        VisionResponseError: If the payload has no non-empty answer.
    """
    if not isinstance(payload, Mapping):
        raise VisionResponseError("Invalid response format")
    answer = payload.get(VISION_ANSWER_KEY)
    if not isinstance(answer, str) or not answer:
        raise VisionResponseError("Invalid response format")
    return answer
