import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.crud.database import get_db
from backend.app.crud.models.models import Comment
from backend.app.crud.utils.schemas import AuthUser, CommentBody, CommentCreate, CommentUpdate
from backend.app.crud.crud import get_post, get_comment, list_comments, create_comment, update_comment, delete_comment
from ..dependencies import require_auth
from ..responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["comments"])

POST_NOT_FOUND = "존재하지 않는 게시글입니다."
COMMENT_NOT_FOUND = "존재하지 않는 댓글입니다."
EMPTY_CONTENT = "댓글 내용을 입력해주세요"


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "commentId": comment.commentId,
        "UserId": comment.UserId,
        "PostId": comment.PostId,
        "content": comment.content,
        "createdAt": comment.createdAt.isoformat(),
        "updatedAt": comment.updatedAt.isoformat(),
    }


@router.post("/{post_id}/comments")
async def post_comment(
    post_id: int,
    body: CommentBody | None = None,
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """댓글 생성 (로그인 필요)"""
    try:
        # 게시글 존재 여부 확인
        if not await get_post(db, post_id):
            return error_response(status.HTTP_404_NOT_FOUND, POST_NOT_FOUND)

        content = body.content if body else None
        if not content:
            return error_response(status.HTTP_412_PRECONDITION_FAILED, EMPTY_CONTENT)

        await create_comment(db, CommentCreate(UserId=user.userId, PostId=post_id, content=content))
    except Exception as e:
        await db.rollback()
        logger.error(f"댓글 작성 실패 (post_id: {post_id}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "댓글 작성에 실패하였습니다.")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": "댓글 작성에 성공하였습니다"}
    )


@router.get("/{post_id}/comments")
async def get_comments(post_id: int, db: AsyncSession = Depends(get_db)):
    """댓글 목록 조회 (로그인 불필요, 작성일 내림차순)"""
    try:
        if not await get_post(db, post_id):
            return error_response(status.HTTP_404_NOT_FOUND, POST_NOT_FOUND)
        comments = await list_comments(db, post_id)
    except Exception as e:
        logger.error(f"댓글 목록 조회 실패 (post_id: {post_id}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "댓글 목록 조회에 실패하였습니다.")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": [_comment_to_dict(c) for c in comments]}
    )


@router.put("/{post_id}/comments/{comment_id}")
async def edit_comment(
    post_id: int,
    comment_id: int,
    body: CommentBody | None = None,
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """댓글 수정 (로그인 & 댓글 작성자 확인)"""
    content = body.content if body else None
    if not content or not content.strip():
        return error_response(status.HTTP_412_PRECONDITION_FAILED, EMPTY_CONTENT)

    try:
        comment = await get_comment(db, post_id, comment_id)
        if not comment:
            return error_response(status.HTTP_404_NOT_FOUND, COMMENT_NOT_FOUND)
        if comment.UserId != user.userId:
            return error_response(status.HTTP_403_FORBIDDEN, "댓글 수정 권한이 없습니다.")

        if not await update_comment(db, comment_id, user.userId, CommentUpdate(content=content)):
            return error_response(status.HTTP_404_NOT_FOUND, COMMENT_NOT_FOUND)
    except Exception as e:
        await db.rollback()
        logger.error(f"댓글 수정 실패 (comment_id: {comment_id}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "댓글 수정에 실패하였습니다.")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": "댓글 수정에 성공하였습니다."}
    )


@router.delete("/{post_id}/comments/{comment_id}")
async def delete_comment_endpoint(
    post_id: int,
    comment_id: int,
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """댓글 삭제 (로그인 & 댓글 작성자 확인)"""
    try:
        comment = await get_comment(db, post_id, comment_id)
        if not comment:
            return error_response(status.HTTP_404_NOT_FOUND, COMMENT_NOT_FOUND)
        if comment.UserId != user.userId:
            return error_response(status.HTTP_403_FORBIDDEN, "댓글 삭제 권한이 없습니다.")

        if not await delete_comment(db, comment_id, user.userId):
            return error_response(status.HTTP_404_NOT_FOUND, COMMENT_NOT_FOUND)
    except Exception as e:
        await db.rollback()
        logger.error(f"댓글 삭제 실패 (comment_id: {comment_id}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "댓글 삭제에 실패하였습니다.")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": "성공적으로 댓글을 삭제하였습니다."}
    )
