# Помилки API: кожна має стабільний 'code', який фронтенд може розпізнати
from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class FinanceError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"
    message = "Request failed"

    def __init__(self, detail: str | None = None, headers: dict | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.message,
            headers=headers,
        )


class ValidationFailedError(FinanceError):
    status_code = 422
    code = "validation_failed"
    message = "Validation failed"


class DuplicateEmailError(FinanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_email"
    message = "Email already registered"


class InvalidCredentialsError(FinanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Incorrect email or password"


class NoSessionError(FinanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "no_session"
    message = "Not authenticated"


class InvalidSessionError(FinanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_session"
    message = "Session invalid or expired"


class ForbiddenError(FinanceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    message = "Access to the record is denied"


class NotFoundError(FinanceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Record not found"


class StorageFailureError(FinanceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "storage_failure"
    message = "Storage is unavailable"


async def finance_error_handler(request: Request, exc: FinanceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": False, "code": exc.code, "detail": exc.detail},
        headers=exc.headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=ValidationFailedError.status_code,
        content={
            "status": False,
            "code": ValidationFailedError.code,
            "detail": ValidationFailedError.message,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def register_error_handlers(app) -> None:
    app.add_exception_handler(FinanceError, finance_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
