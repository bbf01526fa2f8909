from pydantic import BaseModel, ConfigDict
from typing import Optional


class AuthUser(BaseModel):
    """인증 미들웨어가 요청마다 넘겨주는 현재 사용자"""
    userId: int
    nickname: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


# 요청 본문은 필드 누락/공백 여부를 라우터에서 직접 검사하므로 모두 Optional
class PostBody(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class CommentBody(BaseModel):
    content: Optional[str] = None


class PostCreate(BaseModel):
    UserId: int
    nickname: str
    title: str
    content: str

    model_config = ConfigDict(from_attributes=True)


class PostUpdate(BaseModel):
    title: str
    content: str

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    UserId: int
    PostId: int
    content: str

    model_config = ConfigDict(from_attributes=True)


class CommentUpdate(BaseModel):
    content: str

    model_config = ConfigDict(from_attributes=True)


class LikeCreate(BaseModel):
    UserId: int
    PostId: int
    Nickname: str

    model_config = ConfigDict(from_attributes=True)
