class ClientError(Exception):
    """Базова помилка клієнта; текст повідомлення показується користувачу."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkFailure(ClientError):
    pass


class ApiError(ClientError):
    def __init__(self, message: str, code: str = "error", status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code

    def __repr__(self):
        return f"ApiError(code={self.code!r}, status_code={self.status_code!r}, message={self.message!r})"
