import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.crud.database import get_db
from backend.app.crud.models.models import Post
from backend.app.crud.utils.schemas import AuthUser, PostBody, PostCreate, PostUpdate
from backend.app.crud.crud import get_post, list_posts, create_post, update_post, delete_post, count_likes
from ..dependencies import require_auth
from ..responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posts"])


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_empty_body(body: PostBody | None) -> bool:
    # 알 수 없는 키만 있는 본문도 "비어있지 않은" 본문으로 취급
    return body is None or not (body.model_fields_set or body.model_extra)


def post_summary(post: Post) -> dict:
    """목록용 게시글 표현. date / update 는 YYYY-MM-DD"""
    return {
        "postId": post.postId,
        "UserId": post.UserId,
        "nickname": post.nickname,
        "title": post.title,
        "content": post.content,
        "date": post.createdAt.strftime("%Y-%m-%d"),
        "update": post.updatedAt.strftime("%Y-%m-%d"),
    }


# 1. 게시글 생성
@router.post("/posts")
async def create_post_endpoint(
    body: PostBody | None = None,
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """게시글 작성 (로그인 필요)"""
    # title 과 content 가 모두 없을 때
    if _is_empty_body(body):
        return error_response(status.HTTP_412_PRECONDITION_FAILED, "데이터 형식이 올바르지 않습니다.")
    if _is_blank(body.title):
        return error_response(status.HTTP_412_PRECONDITION_FAILED, "게시글 제목의 형식이 올바르지 않습니다.")
    # textarea 는 공백만으로도 제출되므로 strip 후 검사
    if _is_blank(body.content):
        return error_response(status.HTTP_412_PRECONDITION_FAILED, "게시글 내용의 형식이 올바르지 않습니다.")

    try:
        await create_post(db, PostCreate(
            UserId=user.userId,
            nickname=user.nickname,
            title=body.title,
            content=body.content,
        ))
    except Exception as e:
        await db.rollback()
        logger.error(f"게시글 작성 실패 (user: {user.userId}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "게시글 작성에 실패하였습니다.")

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "게시글이 성공적으로 작성되었습니다."}
    )


# 2. 전체 게시글 목록 조회
@router.get("/posts")
async def list_posts_endpoint(db: AsyncSession = Depends(get_db)):
    """모든 글 목록을 최신 순서로 반환"""
    try:
        posts = await list_posts(db)
    except Exception as e:
        logger.error(f"게시글 목록 조회 실패: {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "게시글 조회에 실패하였습니다.")

    return JSONResponse(status_code=200, content=[post_summary(post) for post in posts])


# 3. 게시글 상세 조회
@router.get("/posts/{post_id}")
async def post_detail(post_id: int, db: AsyncSession = Depends(get_db)):
    try:
        post = await get_post(db, post_id)
        if not post:
            return error_response(status.HTTP_404_NOT_FOUND, "존재하지 않는 게시글입니다.")
        likes = await count_likes(db, post_id)
    except Exception as e:
        logger.error(f"게시글 상세 조회 실패 (post_id: {post_id}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "게시글 조회에 실패 하였습니다.")

    return JSONResponse(status_code=200, content={
        "postId": post.postId,
        "UserId": post.UserId,
        "nickname": post.nickname,
        "title": post.title,
        "content": post.content,
        "likes": likes,
        "createdAt": post.createdAt.isoformat(),
        "updatedAt": post.updatedAt.isoformat(),
    })


# 4. 게시글 수정
@router.put("/posts/{post_id}")
async def edit_post(
    post_id: int,
    body: PostBody | None = None,
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """글 수정 (로그인 & 작성자 확인)"""
    if _is_empty_body(body):
        return error_response(status.HTTP_412_PRECONDITION_FAILED, "데이터 형식이 올바르지 않습니다.")
    if _is_blank(body.title):
        return error_response(status.HTTP_412_PRECONDITION_FAILED, "제목의 형식이 올바르지 않습니다.")
    if _is_blank(body.content):
        return error_response(status.HTTP_412_PRECONDITION_FAILED, "내용의 형식이 올바르지 않습니다.")

    try:
        post = await get_post(db, post_id)
        if not post:
            return error_response(status.HTTP_404_NOT_FOUND, "존재하지 않는 게시글입니다.")
        if post.UserId != user.userId:
            return error_response(status.HTTP_412_PRECONDITION_FAILED, "게시글 수정권한이 없습니다.")

        updated = await update_post(db, post_id, user.userId, PostUpdate(title=body.title, content=body.content))
        # 확인 직후 다른 요청이 글을 지운 경우
        if not updated:
            return error_response(status.HTTP_404_NOT_FOUND, "존재하지 않는 게시글입니다.")
    except Exception as e:
        await db.rollback()
        logger.error(f"게시글 수정 실패 (post_id: {post_id}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "게시글 수정에 실패하였습니다.")

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "게시글을 성공적으로 수정하였습니다."}
    )


# 5. 게시글 삭제
@router.delete("/posts/{post_id}")
async def delete_post_endpoint(
    post_id: int,
    user: AuthUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """글 삭제 (로그인 & 작성자 확인)"""
    try:
        post = await get_post(db, post_id)
        if not post:
            return error_response(status.HTTP_403_FORBIDDEN, "게시글이 존재하지 않습니다.")
        if post.UserId != user.userId:
            return error_response(status.HTTP_403_FORBIDDEN, "게시글 삭제 권한이 존재하지 않습니다.")

        deleted = await delete_post(db, post_id, user.userId)
        if not deleted:
            return error_response(status.HTTP_403_FORBIDDEN, "게시글이 존재하지 않습니다.")
    except Exception as e:
        await db.rollback()
        logger.error(f"게시글 삭제 실패 (post_id: {post_id}): {e}", exc_info=True)
        return error_response(status.HTTP_400_BAD_REQUEST, "게시글 삭제에 실패하였습니다.")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": "게시글을 성공적으로 삭제하였습니다."}
    )
