"""Face reading and follow-up chat endpoints."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from facefortune.config.models import ConfigError
from facefortune.images.datauri import InvalidDataURIError, parse_data_uri
from facefortune.server import errors
from facefortune.server.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    read_payload,
)

router = APIRouter()
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/analyze", response_model=AnalyzeResponse, responses=_ERROR_RESPONSES)
async def analyze(request: Request) -> JSONResponse:
    """Read a face photo sent as a data-URI."""
    server = request.app.state.server
    try:
        service = server.get_service()
    except ConfigError as e:
        logger.error("missing_api_credential", extra={"error.message": str(e)})
        return errors.error_response(500, errors.CONFIG_ERROR)

    payload = await read_payload(request, AnalyzeRequest)
    if payload is None:
        return errors.error_response(400, errors.BAD_REQUEST)
    if not payload.image:
        return errors.error_response(400, errors.IMAGE_REQUIRED)

    try:
        image = parse_data_uri(payload.image)
    except InvalidDataURIError as e:
        logger.warning("invalid_image_format", extra={"error.message": str(e)})
        return errors.error_response(400, errors.INVALID_IMAGE_FORMAT)

    try:
        result = await service.analyze(image)
    except Exception as e:
        kind, status_code, message = errors.analysis_failure(e)
        logger.exception(
            "analysis_failed",
            extra={"error.kind": kind.value, "status_code": status_code},
        )
        return errors.error_response(status_code, message)

    return JSONResponse(content=AnalyzeResponse(result=result).model_dump())


@router.post("/chat", response_model=ChatResponse, responses=_ERROR_RESPONSES)
async def chat(request: Request) -> JSONResponse:
    """Answer a question about an earlier reading."""
    server = request.app.state.server
    try:
        service = server.get_service()
    except ConfigError as e:
        logger.error("missing_api_credential", extra={"error.message": str(e)})
        return errors.error_response(500, errors.CONFIG_ERROR)

    payload = await read_payload(request, ChatRequest)
    if payload is None:
        return errors.error_response(400, errors.BAD_REQUEST)
    if not payload.message:
        return errors.error_response(400, errors.MESSAGE_REQUIRED)
    if not payload.analysis_result:
        return errors.error_response(400, errors.ANALYSIS_REQUIRED)

    try:
        reply = await service.chat(payload.message, payload.analysis_result)
    except Exception as e:
        kind, status_code, message = errors.chat_failure(e)
        logger.exception(
            "chat_failed",
            extra={"error.kind": kind.value, "status_code": status_code},
        )
        return errors.error_response(status_code, message)

    return JSONResponse(content=ChatResponse(reply=reply).model_dump())
