from typing import List

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_current_user, get_income_repository
from models.record import DeleteResponse, RecordCreate, RecordInDB
from models.user import UserInDB
from services import record_service
from services.record_repository import RecordRepository

router = APIRouter()


@router.post(
    "/add-income",
    response_model=RecordInDB,
    status_code=status.HTTP_201_CREATED
)
def create_income(
    income_data: RecordCreate,
    current_user: UserInDB = Depends(get_current_user),
    incomes: RecordRepository = Depends(get_income_repository),
):
    """
    Створює новий запис про дохід для поточного користувача.
    """
    return record_service.add_record(incomes, current_user.id, income_data)


@router.get("/get-incomes", response_model=List[RecordInDB])
def get_all_income(
    userid: str | None = Query(None),
    current_user: UserInDB = Depends(get_current_user),
    incomes: RecordRepository = Depends(get_income_repository),
):
    """
    Отримує список усіх записів про доходи для поточного користувача.
    """
    return record_service.list_records(incomes, current_user.id, userid)


@router.delete("/delete-income/{income_id}", response_model=DeleteResponse)
def delete_income(
    income_id: str,
    current_user: UserInDB = Depends(get_current_user),
    incomes: RecordRepository = Depends(get_income_repository),
):
    record_service.delete_record(incomes, current_user.id, income_id)
    return DeleteResponse(message="Income deleted")
