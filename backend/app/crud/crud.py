import logging

from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.crud.models.models import User, Post, Comment, Like
from backend.app.crud.utils.schemas import AuthUser, PostCreate, PostUpdate, CommentCreate, CommentUpdate, LikeCreate

logger = logging.getLogger(__name__)


############# 사용자 #################

async def get_user(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.userId == user_id))
    return result.scalars().first()


############# 게시글 #################

async def get_post(db: AsyncSession, post_id: int) -> Post | None:
    result = await db.execute(select(Post).where(Post.postId == post_id))
    return result.scalars().first()


async def list_posts(db: AsyncSession) -> list[Post]:
    """작성일 기준 내림차순 (같은 시각이면 나중에 만든 글이 먼저)"""
    result = await db.execute(select(Post).order_by(Post.createdAt.desc(), Post.postId.desc()))
    return list(result.scalars().all())


async def create_post(db: AsyncSession, post_in: PostCreate) -> Post:
    db_post = Post(
        UserId=post_in.UserId,
        nickname=post_in.nickname,
        title=post_in.title,
        content=post_in.content,
    )
    db.add(db_post)
    await db.commit()
    await db.refresh(db_post)
    return db_post


async def update_post(db: AsyncSession, post_id: int, user_id: int, post_in: PostUpdate) -> int:
    """작성자 본인의 글만 수정. 수정된 행 수를 반환"""
    result = await db.execute(
        update(Post)
        .where(Post.postId == post_id, Post.UserId == user_id)
        .values(title=post_in.title, content=post_in.content)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount


async def delete_post(db: AsyncSession, post_id: int, user_id: int) -> int:
    """작성자 본인의 글만 삭제. 댓글/좋아요는 FK CASCADE 로 함께 삭제됨"""
    result = await db.execute(
        delete(Post).where(Post.postId == post_id, Post.UserId == user_id)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount


############# 댓글 #################

async def get_comment(db: AsyncSession, post_id: int, comment_id: int) -> Comment | None:
    result = await db.execute(
        select(Comment).where(Comment.commentId == comment_id, Comment.PostId == post_id)
    )
    return result.scalars().first()


async def list_comments(db: AsyncSession, post_id: int) -> list[Comment]:
    result = await db.execute(
        select(Comment)
        .where(Comment.PostId == post_id)
        .order_by(Comment.createdAt.desc(), Comment.commentId.desc())
    )
    return list(result.scalars().all())


# 댓글 생성
async def create_comment(db: AsyncSession, comment_in: CommentCreate) -> Comment:
    db_comment = Comment(
        UserId=comment_in.UserId,
        PostId=comment_in.PostId,
        content=comment_in.content,
    )
    db.add(db_comment)
    await db.commit()
    await db.refresh(db_comment)
    return db_comment


# 댓글 수정
async def update_comment(db: AsyncSession, comment_id: int, user_id: int, comment_in: CommentUpdate) -> int:
    result = await db.execute(
        update(Comment)
        .where(Comment.commentId == comment_id, Comment.UserId == user_id)
        .values(content=comment_in.content)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount


# 댓글 삭제
async def delete_comment(db: AsyncSession, comment_id: int, user_id: int) -> int:
    result = await db.execute(
        delete(Comment).where(Comment.commentId == comment_id, Comment.UserId == user_id)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount


############# 좋아요 #################

async def toggle_like(db: AsyncSession, post_id: int, user: AuthUser) -> bool:
    """좋아요 토글. 등록되면 True, 취소되면 False

    조회 후 분기하지 않고 조건부 삭제 → (삭제된 행이 없으면) 삽입 순서로 처리하며,
    (UserId, PostId) 유니크 제약이 동시 삽입을 막는다.
    """
    result = await db.execute(
        delete(Like).where(Like.UserId == user.userId, Like.PostId == post_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount:
        await db.commit()
        return False

    like_in = LikeCreate(UserId=user.userId, PostId=post_id, Nickname=user.nickname)
    db.add(Like(**like_in.model_dump()))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # 동시에 들어온 같은 요청이 먼저 등록했다면 이미 좋아요 상태
        if not await has_liked(db, post_id, user.userId):
            raise
        logger.info(f"중복 좋아요 요청 무시 (user: {user.userId}, post: {post_id})")
    return True


async def has_liked(db: AsyncSession, post_id: int, user_id: int) -> bool:
    result = await db.execute(
        select(Like.likeId).where(Like.PostId == post_id, Like.UserId == user_id)
    )
    return result.first() is not None


async def count_likes(db: AsyncSession, post_id: int) -> int:
    result = await db.execute(select(func.count(Like.likeId)).where(Like.PostId == post_id))
    return result.scalar_one()


async def list_liked_posts(db: AsyncSession, user_id: int) -> list[tuple[Post, int]]:
    """사용자가 좋아요한 게시글과 각 글의 전체 좋아요 수 (좋아요 많은 순)"""
    like_counts = (
        select(Like.PostId, func.count(Like.likeId).label("likes"))
        .group_by(Like.PostId)
        .subquery()
    )
    stmt = (
        select(Post, like_counts.c.likes)
        .join(Like, Like.PostId == Post.postId)
        .join(like_counts, like_counts.c.PostId == Post.postId)
        .where(Like.UserId == user_id)
        .order_by(like_counts.c.likes.desc(), Post.createdAt.desc(), Post.postId.desc())
    )
    result = await db.execute(stmt)
    return [(post, likes) for post, likes in result.all()]
