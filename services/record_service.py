# Сервісний шар для доходів і витрат
import logging

from core.errors import FinanceError, ForbiddenError, NotFoundError, StorageFailureError
from models.record import RecordCreate, RecordInDB
from services.record_repository import RecordRepository

logger = logging.getLogger(__name__)


def add_record(records: RecordRepository, user_uid: str, data: RecordCreate) -> RecordInDB:
    try:
        record = records.add(user_uid, data)
    except Exception as e:
        logger.exception(f"Failed to add {records.kind.value} for {user_uid}: {e}")
        raise StorageFailureError(f"Failed to add {records.kind.value}")

    logger.info(f"Added {records.kind.value} {record.id} for {user_uid}")
    return record


def list_records(records: RecordRepository, user_uid: str, requested_uid: str | None = None) -> list[RecordInDB]:
    """
    Повертає всі записи користувача в порядку створення.
    Чужі записи не видаємо, навіть якщо запитано інший userid.
    """
    if requested_uid and requested_uid != user_uid:
        raise ForbiddenError()

    try:
        return records.list_for_user(user_uid)
    except Exception as e:
        logger.exception(f"Failed to list {records.kind.collection} for {user_uid}: {e}")
        raise StorageFailureError(f"Failed to load {records.kind.collection}")


def delete_record(records: RecordRepository, user_uid: str, record_id: str) -> None:
    try:
        record = records.get(record_id)
        if record is None:
            raise NotFoundError(f"{records.kind.label} not found")
        if record.user_uid != user_uid:
            logger.warning(f"User {user_uid} tried to delete {records.kind.value} {record_id} of another user")
            raise ForbiddenError()
        records.delete(record_id)
    except FinanceError:
        raise
    except Exception as e:
        logger.exception(f"Failed to delete {records.kind.value} {record_id}: {e}")
        raise StorageFailureError(f"Failed to delete {records.kind.value}")

    logger.info(f"Deleted {records.kind.value} {record_id}")
