# Хешування паролів та підпис сесійних токенів (JWT у HTTP-only cookie)
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from core.config import settings


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def create_session_token(user_id: str, now: datetime | None = None) -> str:
    """
    Підписує токен сесії для користувача.
    Сервер нічого не зберігає: термін дії закладено в claim 'exp'.
    """
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str) -> str | None:
    """
    Повертає id користувача з токена або None, якщо токен прострочений/підроблений.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        return None
    return user_id
