# api/v1/expenses.py

from typing import List

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_current_user, get_expense_repository
from models.record import DeleteResponse, RecordCreate, RecordInDB
from models.user import UserInDB
from services import record_service
from services.record_repository import RecordRepository

router = APIRouter()


@router.post(
    "/add-expense",
    response_model=RecordInDB,
    status_code=status.HTTP_201_CREATED
)
def create_expense(
    expense_data: RecordCreate,
    current_user: UserInDB = Depends(get_current_user),
    expenses: RecordRepository = Depends(get_expense_repository),
):
    """
    Створює новий запис про витрати для поточного користувача.
    """
    return record_service.add_record(expenses, current_user.id, expense_data)


@router.get("/get-expenses", response_model=List[RecordInDB])
def get_all_expenses(
    userid: str | None = Query(None),
    current_user: UserInDB = Depends(get_current_user),
    expenses: RecordRepository = Depends(get_expense_repository),
):
    return record_service.list_records(expenses, current_user.id, userid)


@router.delete("/delete-expense/{expense_id}", response_model=DeleteResponse)
def delete_expense(
    expense_id: str,
    current_user: UserInDB = Depends(get_current_user),
    expenses: RecordRepository = Depends(get_expense_repository),
):
    """
    Видаляє запис про витрату поточного користувача.
    """
    record_service.delete_record(expenses, current_user.id, expense_id)
    return DeleteResponse(message="Expense deleted")
