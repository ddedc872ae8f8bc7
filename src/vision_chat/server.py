"""FastAPI service exposing the answer formatter to the chat client."""

import os
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .collaborators import UploadError, build_vision_params, parse_upload_response
from .formatting import Document
from .logger import log_context, logger
from .messages import (
    Message,
    SystemMessage,
    UserMessage,
    format_response,
    message_from_vision_payload,
    upload_notice,
    user_message,
)

# Longest answer text accepted for formatting
MAX_RESPONSE_CHARS = int(os.getenv("MAX_RESPONSE_CHARS", "100000"))

# Longest question accepted from the chat input
MAX_QUESTION_CHARS = 10000


# --- Request/Response Models ---


class FormatRequest(BaseModel):
    text: str = Field(..., max_length=MAX_RESPONSE_CHARS)


class UploadReplyRequest(BaseModel):
    response_text: str = Field(..., max_length=4096)


class VisionReplyRequest(BaseModel):
    payload: Any = None


class QuestionRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=MAX_QUESTION_CHARS)


class VisionParamsRequest(QuestionRequest):
    image_url: str = Field(..., min_length=1)


class VisionParamsResponse(BaseModel):
    q: str
    image_url: str
    model: str


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    code: str
    message: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    logger.info("starting server", max_response_chars=MAX_RESPONSE_CHARS)
    yield
    logger.info("server shutdown")


app = FastAPI(
    title="Vision Chat Formatting API",
    description="Turns vision model answers into structured documents for display",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line written during a request with a request id."""
    with log_context(request_id=str(uuid4()), path=request.url.path):
        return await call_next(request)


# --- Exception Handlers ---


@app.exception_handler(UploadError)
async def upload_error_handler(request, exc: UploadError):
    logger.warn("upload reply rejected", error=str(exc))
    return JSONResponse(
        status_code=502,
        content=ErrorResponse(code="UPLOAD_FAILED", message=str(exc)).model_dump(),
    )


@app.exception_handler(ValueError)
async def value_error_handler(request, exc: ValueError):
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(code="INVALID_REQUEST", message=str(exc)).model_dump(),
    )


# --- Health Endpoints ---


@app.get("/health", response_model=HealthResponse)
def health():
    """Liveness check."""
    return HealthResponse(status="healthy")


# --- Formatting Endpoints ---


@app.post("/api/v1/format", response_model=Document)
def format_text(request: FormatRequest):
    """Format raw answer text into a document tree."""
    return format_response(request.text)


@app.post("/api/v1/messages/user", response_model=UserMessage)
def create_user_message(request: QuestionRequest):
    return user_message(request.question)


@app.post("/api/v1/messages/upload", response_model=SystemMessage)
def create_upload_message(request: UploadReplyRequest):
    """Build the upload notice from the image host's reply."""
    url = parse_upload_response(request.response_text)
    logger.info("image uploaded", image_url=url)
    return upload_notice(url)


@app.post("/api/v1/messages/vision", response_model=Message)
def create_vision_message(request: VisionReplyRequest):
    """Build the assistant message, or an error message, from a vision reply."""
    return message_from_vision_payload(request.payload)


@app.post("/api/v1/vision/params", response_model=VisionParamsResponse)
def vision_params(request: VisionParamsRequest):
    """Query parameters the client should send to the vision API."""
    return VisionParamsResponse(**build_vision_params(request.question, request.image_url))
