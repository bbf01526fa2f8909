### backend/app/api/routes/likes.py
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.crud.database import get_db
from backend.app.crud.crud import get_post, toggle_like, list_liked_posts
from backend.app.crud.utils.schemas import AuthUser
from ..dependencies import require_auth
from ..responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["likes"])


# GET /posts/{post_id} 보다 먼저 등록되어야 함
@router.get("/likes")
async def liked_posts(
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """
    내가 좋아요한 게시글 목록 (로그인 필요)
    - 제목, 작성자명(nickname), 작성 날짜, 좋아요 갯수
    - 좋아요가 많은 게시글이 먼저
    """
    try:
        rows = await list_liked_posts(db, user.userId)
    except Exception as e:
        logger.error(f"좋아요 게시글 조회 실패 (user: {user.userId}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "좋아요 게시글 조회에 실패하였습니다.")

    return JSONResponse(status_code=200, content=[
        {
            "postId": post.postId,
            "UserId": post.UserId,
            "nickname": post.nickname,
            "title": post.title,
            "date": post.createdAt.strftime("%Y-%m-%d"),
            "likes": likes,
        }
        for post, likes in rows
    ])


@router.put("/{post_id}/likes")
async def like_post(
    post_id: int,
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """좋아요 토글 (로그인 필요)"""
    try:
        if not await get_post(db, post_id):
            return error_response(status.HTTP_404_NOT_FOUND, "해당하는 게시글이 존재하지 않습니다.")

        liked = await toggle_like(db, post_id, user)
    except Exception as e:
        await db.rollback()
        logger.error(f"좋아요 처리 실패 (post_id: {post_id}, user: {user.userId}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "좋아요 등록에 실패하였습니다.")

    message = "좋아요 등록에 성공하였습니다." if liked else "좋아요 취소가 정상적으로 완료되었습니다."
    return JSONResponse(status_code=status.HTTP_200_OK, content={"message": message})
