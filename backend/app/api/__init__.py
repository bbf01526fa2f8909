from fastapi import APIRouter
from .routes import likes, posts, comments

def create_api_router() -> APIRouter:
    """모든 라우터를 통합하는 API 라우터 생성"""
    api_router = APIRouter()

    # 각 라우터 등록 (/posts/likes 가 /posts/{post_id} 에 먼저 매칭되도록 likes 를 앞에 둠)
    api_router.include_router(likes.router)
    api_router.include_router(posts.router)
    api_router.include_router(comments.router)
    return api_router
