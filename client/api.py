# HTTP-обгортка над REST API трекера
import datetime
import logging

import httpx

from client.config import client_settings
from client.errors import ApiError, NetworkFailure

logger = logging.getLogger(__name__)


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    message = payload.get("detail")
    if not isinstance(message, str):
        message = f"Request failed with status {response.status_code}"

    errors = payload.get("errors") or []
    if errors and isinstance(errors[0], dict):
        field = ".".join(str(part) for part in errors[0].get("loc", [])[1:])
        if field:
            message = f"{message}: {field}: {errors[0].get('msg', 'invalid value')}"

    return ApiError(message, code=payload.get("code", "error"), status_code=response.status_code)


def _to_json(fields: dict) -> dict:
    return {
        key: value.isoformat() if isinstance(value, (datetime.date, datetime.datetime)) else value
        for key, value in fields.items()
    }


class FinanceAPI:
    """
    Тонкий клієнт ендпоінтів. Cookie сесії живе в jar-і httpx.Client,
    тому клієнт треба перевикористовувати між запитами.
    """

    def __init__(self, http: httpx.Client | None = None, base_url: str | None = None):
        self.http = http or httpx.Client(base_url=base_url or client_settings.API_BASE_URL)
        self.cookie_name = client_settings.SESSION_COOKIE_NAME

    def _request(self, method: str, url: str, **kwargs):
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise NetworkFailure("Network error. Please try again.") from e

        if response.is_error:
            raise _error_from_response(response)
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {url} returned non-JSON body: {e}")
            raise ApiError(
                "Unexpected response from server",
                code="invalid_response",
                status_code=response.status_code,
            ) from e

    def has_session_cookie(self) -> bool:
        return self.http.cookies.get(self.cookie_name) is not None

    def clear_session_cookie(self) -> None:
        self.http.cookies.delete(self.cookie_name)

    # --- auth ---

    def register(self, name: str, email: str, password: str) -> dict:
        return self._request("POST", "register", json={"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> dict:
        return self._request("POST", "login", json={"email": email, "password": password})

    def logout(self) -> dict:
        return self._request("POST", "logout")

    def check_user(self) -> dict:
        return self._request("GET", "check-user")

    # --- records ---

    def add_income(self, fields: dict) -> dict:
        return self._request("POST", "add-income", json=_to_json(fields))

    def get_incomes(self, user_id: str) -> list:
        return self._request("GET", "get-incomes", params={"userid": user_id})

    def delete_income(self, record_id: str) -> dict:
        return self._request("DELETE", f"delete-income/{record_id}")

    def add_expense(self, fields: dict) -> dict:
        return self._request("POST", "add-expense", json=_to_json(fields))

    def get_expenses(self, user_id: str) -> list:
        return self._request("GET", "get-expenses", params={"userid": user_id})

    def delete_expense(self, record_id: str) -> dict:
        return self._request("DELETE", f"delete-expense/{record_id}")
