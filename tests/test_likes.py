import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from backend.app.crud.crud import count_likes, has_liked, toggle_like
from backend.app.crud.models.models import Like, Post, User
from backend.app.crud.utils.schemas import AuthUser


async def _make_post(client, headers, title="Hello") -> int:
    await client.post("/posts", json={"title": title, "content": "World"}, headers=headers)
    posts = (await client.get("/posts")).json()
    return next(p["postId"] for p in posts if p["title"] == title)


async def _like_rows(session_factory, user_id: int, post_id: int) -> int:
    async with session_factory() as session:
        result = await session.execute(
            select(func.count(Like.likeId)).where(Like.UserId == user_id, Like.PostId == post_id)
        )
        return result.scalar_one()


async def test_toggle_twice_is_identity(client, session_factory, author_headers):
    post_id = await _make_post(client, author_headers)

    res = await client.put(f"/posts/{post_id}/likes", headers=author_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "좋아요 등록에 성공하였습니다."}
    assert await _like_rows(session_factory, 7, post_id) == 1

    res = await client.put(f"/posts/{post_id}/likes", headers=author_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "좋아요 취소가 정상적으로 완료되었습니다."}
    assert await _like_rows(session_factory, 7, post_id) == 0


async def test_like_records_nickname(client, session_factory, author_headers, other_headers):
    post_id = await _make_post(client, author_headers)
    await client.put(f"/posts/{post_id}/likes", headers=other_headers)

    async with session_factory() as session:
        like = (await session.execute(select(Like))).scalars().one()
    assert like.UserId == 8
    assert like.Nickname == "u8"


async def test_like_missing_post_is_404(client, author_headers):
    res = await client.put("/posts/999/likes", headers=author_headers)
    assert res.status_code == 404
    assert res.json() == {"errorMessage": "해당하는 게시글이 존재하지 않습니다."}


async def test_like_requires_auth(client, author_headers):
    post_id = await _make_post(client, author_headers)
    res = await client.put(f"/posts/{post_id}/likes")
    assert res.status_code == 401


async def test_duplicate_like_row_is_rejected(session_factory, author):
    """(UserId, PostId) 유니크 제약"""
    async with session_factory() as session:
        post = Post(UserId=7, nickname="u7", title="t", content="c")
        session.add(post)
        await session.commit()
        post_id = post.postId

        session.add(Like(UserId=7, PostId=post_id, Nickname="u7"))
        await session.commit()

        session.add(Like(UserId=7, PostId=post_id, Nickname="u7"))
        with pytest.raises(IntegrityError, match="UNIQUE"):
            await session.commit()
        await session.rollback()

        assert await count_likes(session, post_id) == 1


async def test_toggle_like_crud_directly(session_factory, author):
    user = AuthUser(userId=7, nickname="u7")
    async with session_factory() as session:
        post = Post(UserId=7, nickname="u7", title="t", content="c")
        session.add(post)
        await session.commit()

        assert await toggle_like(session, post.postId, user) is True
        assert await has_liked(session, post.postId, 7)
        assert await toggle_like(session, post.postId, user) is False
        assert not await has_liked(session, post.postId, 7)


async def test_toggle_like_recovers_from_concurrent_insert(session_factory, author, monkeypatch):
    """삭제와 커밋 사이에 다른 세션이 먼저 좋아요를 등록해도 등록 상태로 응답"""
    user = AuthUser(userId=7, nickname="u7")
    async with session_factory() as session:
        post = Post(UserId=7, nickname="u7", title="t", content="c")
        session.add(post)
        await session.commit()
        post_id = post.postId

        original_commit = session.commit

        async def commit_after_rival_insert():
            async with session_factory() as rival:
                rival.add(Like(UserId=7, PostId=post_id, Nickname="u7"))
                await rival.commit()
            monkeypatch.setattr(session, "commit", original_commit)
            await original_commit()

        monkeypatch.setattr(session, "commit", commit_after_rival_insert)

        assert await toggle_like(session, post_id, user) is True

    assert await _like_rows(session_factory, 7, post_id) == 1


async def test_liked_posts_sorted_by_like_count(client, session_factory, author_headers, other_headers):
    popular = await _make_post(client, author_headers, title="popular")
    quiet = await _make_post(client, author_headers, title="quiet")
    await _make_post(client, author_headers, title="unliked")

    await client.put(f"/posts/{quiet}/likes", headers=other_headers)
    await client.put(f"/posts/{popular}/likes", headers=other_headers)
    await client.put(f"/posts/{popular}/likes", headers=author_headers)

    res = await client.get("/posts/likes", headers=other_headers)
    assert res.status_code == 200
    liked = res.json()
    assert [p["title"] for p in liked] == ["popular", "quiet"]
    assert [p["likes"] for p in liked] == [2, 1]

    res = await client.get("/posts/likes")
    assert res.status_code == 401


async def test_deleting_user_cascades(session_factory, author):
    async with session_factory() as session:
        post = Post(UserId=7, nickname="u7", title="t", content="c")
        session.add(post)
        await session.commit()
        session.add(Like(UserId=7, PostId=post.postId, Nickname="u7"))
        await session.commit()

        user = await session.get(User, 7)
        await session.delete(user)
        await session.commit()

        assert (await session.execute(select(Post))).scalars().all() == []
        assert (await session.execute(select(Like))).scalars().all() == []
