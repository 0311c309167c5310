# API роутер для автентифікації

from fastapi import APIRouter, Depends, Response, status

from api.deps import get_session_token, get_user_repository
from core.config import settings
from core.errors import InvalidSessionError, NoSessionError
from models.user import CheckUserResponse, SessionResponse, UserCreate, UserLogin
from services import auth_service
from services.user_repository import UserRepository

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        path="/",
    )


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserCreate,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
):
    """
    Створює користувача і одразу відкриває для нього сесію.
    """
    user, token = auth_service.register(users, user_data)
    _set_session_cookie(response, token)
    return SessionResponse(user=user.public())


@router.post("/login", response_model=SessionResponse)
def login_user(
    credentials: UserLogin,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
):
    user, token = auth_service.login(users, credentials)
    _set_session_cookie(response, token)
    return SessionResponse(user=user.public())


@router.post("/logout")
def logout_user(response: Response):
    # Сесія stateless, тож достатньо прибрати cookie
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )
    return {"status": True}


@router.get("/check-user", response_model=CheckUserResponse)
def check_user(
    token: str | None = Depends(get_session_token),
    users: UserRepository = Depends(get_user_repository),
):
    """
    Перевіряє сесію. Відсутня або невалідна сесія - це не помилка, а status=false.
    """
    try:
        user = auth_service.check_session(users, token)
    except (NoSessionError, InvalidSessionError) as e:
        return CheckUserResponse(status=False, reason=e.code)
    return CheckUserResponse(status=True, user=user.public())
