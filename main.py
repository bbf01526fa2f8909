import os
import logging
from fastapi import FastAPI

from backend.app.core.config import settings
from backend.app.crud.database import create_tables
from backend.app.api import create_api_router
from backend.app.api.middleware import setup_middleware, setup_exception_handlers

# 로깅을 파일 우선으로 설정
try:
    # 로그 디렉토리 생성
    os.makedirs(settings.LOG_DIR, exist_ok=True)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(os.path.join(settings.LOG_DIR, 'app.log'), encoding='utf-8'),  # 파일 우선
            logging.StreamHandler()  # 콘솔은 보조
        ],
        force=True  # 기존 로깅 설정 강제 재설정
    )
except OSError:
    # 로그 디렉토리를 만들 수 없으면 콘솔만 사용
    logging.basicConfig(level=settings.LOG_LEVEL, force=True)

logger = logging.getLogger(__name__)


app = FastAPI(title="Blog API (posts, comments, likes)")

# 미들웨어 및 오류 응답 설정
setup_middleware(app)
setup_exception_handlers(app)

# API 라우터 등록
api_router = create_api_router()
app.include_router(api_router)


# 시스템 초기화
@app.on_event("startup")
async def on_startup():
    """애플리케이션 시작 시 테이블 생성"""
    await create_tables()
    logger.info("=== 블로그 API 초기화 완료 ===")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
