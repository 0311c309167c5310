# Pydantic моделі для записів доходів і витрат (однакова структура)

import datetime
import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecordKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def collection(self) -> str:
        return "incomes" if self is RecordKind.INCOME else "expenses"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class RecordCreate(BaseModel):
    # Власник береться з сесії, тому зайві поля (user_uid, userid) ігноруються
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=50)
    amount: float = Field(gt=0)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: datetime.date

    @field_validator("amount")
    @classmethod
    def amount_is_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("Amount must be a positive number")
        return value


class RecordInDB(RecordCreate):
    id: str
    user_uid: str
    type: RecordKind
    created_at: datetime.datetime


class DeleteResponse(BaseModel):
    status: bool = True
    message: str
