"""User-facing error messages and HTTP status mapping."""

from __future__ import annotations

from fastapi.responses import JSONResponse

from facefortune.generation.errors import ErrorKind, classify_error
from facefortune.server.schemas import ErrorResponse

CONFIG_ERROR = "API 설정 오류입니다."
BAD_REQUEST = "잘못된 요청입니다."
IMAGE_REQUIRED = "이미지가 필요합니다."
INVALID_IMAGE_FORMAT = "잘못된 이미지 형식입니다."
MESSAGE_REQUIRED = "메시지가 필요합니다."
ANALYSIS_REQUIRED = "관상 분석 결과가 필요합니다."
RATE_LIMITED = "요청이 너무 많습니다. 잠시 후 다시 시도해주세요."
CHAT_FAILED = "답변 생성 중 오류가 발생했습니다."
ANALYSIS_FAILED_PREFIX = "분석 중 오류가 발생했습니다: "

MAX_DETAIL_CHARS = 100

ANALYSIS_ERRORS: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.CREDENTIAL: (500, "API 키 설정에 문제가 있습니다. 관리자에게 문의해주세요."),
    ErrorKind.SAFETY: (
        400,
        "안전 정책에 의해 분석이 차단되었습니다. 다른 사진으로 시도해주세요.",
    ),
    ErrorKind.INVALID_IMAGE: (
        400,
        "이미지를 처리할 수 없습니다. 얼굴이 잘 보이는 다른 사진을 사용해주세요.",
    ),
    ErrorKind.RATE_LIMIT: (429, RATE_LIMITED),
    ErrorKind.NOT_FOUND: (500, "AI 모델을 찾을 수 없습니다. 관리자에게 문의해주세요."),
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


def analysis_failure(error: Exception) -> tuple[ErrorKind, int, str]:
    """Map an upstream analysis failure to (kind, status, message)."""
    kind = classify_error(error)
    if kind in ANALYSIS_ERRORS:
        status_code, message = ANALYSIS_ERRORS[kind]
        return kind, status_code, message
    detail = str(error) or type(error).__name__
    return kind, 500, ANALYSIS_FAILED_PREFIX + detail[:MAX_DETAIL_CHARS]


def chat_failure(error: Exception) -> tuple[ErrorKind, int, str]:
    """Map an upstream chat failure; only rate limits are distinguished."""
    kind = classify_error(error)
    if kind == ErrorKind.RATE_LIMIT:
        return kind, 429, RATE_LIMITED
    return kind, 500, CHAT_FAILED
