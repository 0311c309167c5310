# Стан клієнта: користувач, кеш доходів/витрат та похідні підсумки
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from client import aggregation
from client.api import FinanceAPI
from client.errors import ClientError

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"
DASHBOARD_ROUTE = "/"


class AuthStatus(str, Enum):
    UNKNOWN = "unknown"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass
class Notification:
    level: str
    message: str


class FinanceState:
    """
    Явний об'єкт стану замість глобального контексту.

    Після add/delete список завжди перечитується з сервера, локально нічого
    не патчимо. Помилки перетворюються на повідомлення, а стан лишається як був.
    """

    def __init__(self, api: FinanceAPI, on_notify: Callable[[Notification], None] | None = None):
        self.api = api
        self.on_notify = on_notify

        self.status = AuthStatus.UNKNOWN
        self.user: dict | None = None
        self.incomes: list[dict] = []
        self.expenses: list[dict] = []
        self.route: str | None = None
        self.error: str | None = None
        self.notifications: list[Notification] = []

    @property
    def name(self) -> str:
        return (self.user or {}).get("name", "")

    @property
    def user_id(self) -> str | None:
        return (self.user or {}).get("id")

    # --- повідомлення ---

    def _notify(self, level: str, message: str) -> None:
        notification = Notification(level, message)
        self.notifications.append(notification)
        if level == "error":
            self.error = message
        if self.on_notify:
            self.on_notify(notification)

    def dismiss_error(self) -> None:
        self.error = None

    # --- переходи стану ---

    def _authenticate(self, user: dict | None) -> None:
        # Кеш належить попередньому користувачу, навіть якщо новий fetch впаде
        if (user or {}).get("id") != self.user_id:
            self.incomes = []
            self.expenses = []
        self.user = user
        self.status = AuthStatus.AUTHENTICATED
        self.fetch_incomes()
        self.fetch_expenses()

    def _become_anonymous(self) -> None:
        self.user = None
        self.status = AuthStatus.ANONYMOUS
        self.incomes = []
        self.expenses = []
        self.route = LOGIN_ROUTE

    # --- auth ---

    def mount(self) -> AuthStatus:
        """Перевірка сесії при старті (аналог першого рендеру)."""
        return self.check_user()

    def check_user(self) -> AuthStatus:
        if not self.api.has_session_cookie():
            self._become_anonymous()
            return self.status

        try:
            data = self.api.check_user()
        except ClientError as e:
            logger.warning(f"Session check failed: {e.message}")
            self._become_anonymous()
            return self.status

        if data.get("status") and data.get("user"):
            self._authenticate(data["user"])
        else:
            self._become_anonymous()
        return self.status

    def login(self, email: str, password: str) -> bool:
        try:
            data = self.api.login(email, password)
        except ClientError as e:
            self._notify("error", e.message)
            return False

        self._authenticate(data.get("user"))
        self.route = DASHBOARD_ROUTE
        self._notify("success", "Login Successful!")
        return True

    def register(self, name: str, email: str, password: str) -> bool:
        try:
            data = self.api.register(name, email, password)
        except ClientError as e:
            self._notify("error", e.message)
            return False

        self._authenticate(data.get("user"))
        self.route = DASHBOARD_ROUTE
        self._notify("success", "Registration Successful!")
        return True

    def sign_out(self) -> None:
        try:
            self.api.logout()
        except ClientError as e:
            # Вихід локальний; сервер лише прибирає cookie
            logger.warning(f"Logout request failed: {e.message}")
        self.api.clear_session_cookie()
        self._become_anonymous()

    # --- доходи ---

    def add_income(self, fields: dict) -> bool:
        try:
            self.api.add_income(fields)
        except ClientError as e:
            self._notify("error", e.message)
            return False
        self.fetch_incomes()
        return True

    def fetch_incomes(self) -> None:
        if not self.user_id:
            return
        try:
            self.incomes = self.api.get_incomes(self.user_id) or []
        except ClientError as e:
            logger.warning(f"Failed to load incomes: {e.message}")
            self._notify("error", "Failed to load incomes.")

    def delete_income(self, record_id: str) -> bool:
        try:
            self.api.delete_income(record_id)
        except ClientError as e:
            self._notify("error", e.message)
            return False
        self.fetch_incomes()
        return True

    def total_income(self) -> float:
        return aggregation.total_income(self.incomes)

    # --- витрати ---

    def add_expense(self, fields: dict) -> bool:
        try:
            self.api.add_expense(fields)
        except ClientError as e:
            self._notify("error", e.message)
            return False
        self.fetch_expenses()
        return True

    def fetch_expenses(self) -> None:
        if not self.user_id:
            return
        try:
            self.expenses = self.api.get_expenses(self.user_id) or []
        except ClientError as e:
            logger.warning(f"Failed to load expenses: {e.message}")
            self._notify("error", "Failed to load expenses.")

    def delete_expense(self, record_id: str) -> bool:
        try:
            self.api.delete_expense(record_id)
        except ClientError as e:
            self._notify("error", e.message)
            return False
        self.fetch_expenses()
        return True

    def total_expenses(self) -> float:
        return aggregation.total_expenses(self.expenses)

    # --- похідні значення ---

    def total_balance(self) -> float:
        return self.total_income() - self.total_expenses()

    def transaction_history(self) -> list:
        return aggregation.transaction_history(self.incomes, self.expenses)
