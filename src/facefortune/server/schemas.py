"""Request and response bodies for the public API."""

from __future__ import annotations

from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class AnalyzeRequest(BaseModel):
    image: str | None = None


class AnalyzeResponse(BaseModel):
    result: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    analysis_result: str | None = Field(default=None, alias="analysisResult")


class ChatResponse(BaseModel):
    reply: str


class ErrorResponse(BaseModel):
    error: str


async def read_payload(request: Request, model: type[ModelT]) -> ModelT | None:
    """Parse a JSON object body into model, or None if it is malformed."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    try:
        return model.model_validate(body)
    except ValidationError:
        return None
