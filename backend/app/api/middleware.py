# middleware.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.core.config import settings

logger = logging.getLogger(__name__)

INVALID_PAYLOAD_MESSAGE = "데이터 형식이 올바르지 않습니다."


def setup_middleware(app: FastAPI):
    """미들웨어 설정"""

    # CORS 설정
    # 다른 도메인에서의 API 요청을 허용합니다.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def setup_exception_handlers(app: FastAPI):
    """모든 오류 응답을 { errorMessage } 형태로 통일"""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"errorMessage": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        # JSON 이 아니거나 타입이 맞지 않는 요청 (경로 파라미터 포함)
        logger.info(f"Invalid request on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_412_PRECONDITION_FAILED,
            content={"errorMessage": INVALID_PAYLOAD_MESSAGE},
        )
