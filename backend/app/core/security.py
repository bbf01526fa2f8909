import jwt
from datetime import datetime, timedelta, timezone

from backend.app.core.config import settings


def create_access_token(user_id: int, expires_minutes: int = None) -> str:
    """userId 클레임을 담은 액세스 토큰을 발급합니다."""
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {"userId": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """토큰을 검증하고 payload 를 반환합니다. 실패 시 jwt.InvalidTokenError 계열 예외를 그대로 올립니다."""
    payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if not isinstance(payload.get("userId"), int):
        raise jwt.InvalidTokenError("userId claim is missing")
    return payload
