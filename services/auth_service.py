# Сервісний шар для логіки автентифікації
import logging

from google.api_core.exceptions import AlreadyExists

from core.errors import (
    DuplicateEmailError,
    FinanceError,
    InvalidCredentialsError,
    InvalidSessionError,
    NoSessionError,
    StorageFailureError,
)
from core.security import create_session_token, decode_session_token, hash_password, verify_password
from models.user import UserCreate, UserInDB, UserLogin
from services.user_repository import UserRepository

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def register(users: UserRepository, data: UserCreate) -> tuple[UserInDB, str]:
    """
    Створює користувача з хешованим паролем і повертає його разом з токеном сесії.
    """
    email = _normalize_email(data.email)
    try:
        if users.find_by_email(email) is not None:
            logger.info(f"Registration rejected, email already used: {email}")
            raise DuplicateEmailError()
        user = users.add(name=data.name, email=email, password_hash=hash_password(data.password))
    except AlreadyExists:
        # Паралельна реєстрація встигла зайняти email між перевіркою і записом
        logger.info(f"Registration rejected, email reserved concurrently: {email}")
        raise DuplicateEmailError()
    except FinanceError:
        raise
    except Exception as e:
        logger.exception(f"Registration failed for {email}: {e}")
        raise StorageFailureError("Registration failed")

    logger.info(f"Registered user {user.id}")
    return user, create_session_token(user.id)


def login(users: UserRepository, data: UserLogin) -> tuple[UserInDB, str]:
    email = _normalize_email(data.email)
    try:
        user = users.find_by_email(email)
    except Exception as e:
        logger.exception(f"Login lookup failed for {email}: {e}")
        raise StorageFailureError("Login failed")

    # Та сама помилка для невідомого email і неправильного пароля
    if user is None or not verify_password(data.password, user.password_hash):
        logger.info(f"Failed login attempt for {email}")
        raise InvalidCredentialsError()

    return user, create_session_token(user.id)


def check_session(users: UserRepository, token: str | None) -> UserInDB:
    """
    Перевіряє токен сесії і повертає користувача.
    Нічого не змінює; кидає NoSessionError або InvalidSessionError.
    """
    if not token:
        raise NoSessionError()

    user_id = decode_session_token(token)
    if user_id is None:
        raise InvalidSessionError()

    try:
        user = users.get(user_id)
    except Exception as e:
        logger.exception(f"Session lookup failed for {user_id}: {e}")
        raise StorageFailureError()

    if user is None:
        logger.warning(f"Session token refers to missing user {user_id}")
        raise InvalidSessionError()
    return user
