import datetime

from google.cloud.firestore_v1.base_query import FieldFilter

from models.record import RecordCreate, RecordInDB, RecordKind


def _from_document(doc, kind: RecordKind) -> RecordInDB:
    data = doc.to_dict()
    # Firestore не зберігає 'date', тому читаємо datetime назад як дату
    if isinstance(data.get("date"), datetime.datetime):
        data["date"] = data["date"].date()
    data.setdefault("type", kind.value)
    return RecordInDB(id=doc.id, **data)


class RecordRepository:
    """
    Доступ до колекції 'incomes' або 'expenses' у Firestore.
    """

    def __init__(self, db, kind: RecordKind):
        self.db = db
        self.kind = kind

    @property
    def collection(self):
        return self.db.collection(self.kind.collection)

    def add(self, user_uid: str, record: RecordCreate) -> RecordInDB:
        data = record.model_dump()
        data["user_uid"] = user_uid
        data["type"] = self.kind.value
        data["created_at"] = datetime.datetime.now(datetime.timezone.utc)
        stored = dict(data)
        stored["date"] = datetime.datetime.combine(record.date, datetime.time.min)

        _, doc_ref = self.collection.add(stored)
        return RecordInDB(id=doc_ref.id, **data)

    def list_for_user(self, user_uid: str) -> list[RecordInDB]:
        query = self.collection.where(filter=FieldFilter("user_uid", "==", user_uid)).stream()
        results = [_from_document(doc, self.kind) for doc in query]
        # Порядок вставки; сортуємо тут, щоб не вимагати композитного індексу
        results.sort(key=lambda r: r.created_at)
        return results

    def get(self, record_id: str) -> RecordInDB | None:
        doc = self.collection.document(record_id).get()
        if not doc.exists:
            return None
        return _from_document(doc, self.kind)

    def delete(self, record_id: str) -> None:
        self.collection.document(record_id).delete()
