from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

import core.firebase as firebase
from core.config import settings
from models.record import RecordKind
from models.user import UserInDB
from services import auth_service
from services.record_repository import RecordRepository
from services.user_repository import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    return firebase.ensure_initialized()


def get_user_repository(db=Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_income_repository(db=Depends(get_db)) -> RecordRepository:
    return RecordRepository(db, RecordKind.INCOME)


def get_expense_repository(db=Depends(get_db)) -> RecordRepository:
    return RecordRepository(db, RecordKind.EXPENSE)


def get_session_token(
    session_cookie: str | None = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """
    Токен сесії з HTTP-only cookie; Bearer заголовок як запасний варіант.
    """
    if session_cookie:
        return session_cookie
    if creds and creds.credentials:
        return creds.credentials
    return None


def get_current_user(
    token: str | None = Depends(get_session_token),
    users: UserRepository = Depends(get_user_repository),
) -> UserInDB:
    return auth_service.check_session(users, token)
