# dependencies.py

import logging

import jwt
from fastapi import Depends, Request, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.security import decode_access_token
from backend.app.crud.crud import get_user
from backend.app.crud.database import get_db
from backend.app.crud.utils.schemas import AuthUser

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = "로그인이 필요한 기능입니다."


def _extract_bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> AuthUser | None:
    """
    Authorization: Bearer <token> 헤더를 검증해 현재 사용자를 반환합니다.
    토큰이 없거나 유효하지 않으면 None 을 반환합니다.
    """
    token = _extract_bearer_token(request)
    if token is None:
        return None

    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        logger.warning("[Auth] Expired token")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"[Auth] Invalid token: {e}")
        return None

    user = await get_user(db, payload["userId"])
    if user is None:
        logger.warning(f"[Auth] Token refers to unknown user: {payload['userId']}")
        return None

    return AuthUser(userId=user.userId, nickname=user.nickname)


async def require_auth(user: AuthUser | None = Depends(get_current_user)) -> AuthUser:
    """
    인증이 필요한 모든 API 엔드포인트에서 사용하는 의존성 함수입니다.
    로그인하지 않았다면 핸들러 본문이 실행되기 전에 401 을 돌려줍니다.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=LOGIN_REQUIRED_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
