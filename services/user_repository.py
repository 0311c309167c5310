import hashlib
from datetime import datetime, timezone

from google.cloud.firestore_v1.base_query import FieldFilter

from models.user import UserInDB

COLLECTION = "users"
# Один документ на email: create() атомарно падає з AlreadyExists, якщо email зайнятий
EMAILS_COLLECTION = "user_emails"


def _email_key(email: str) -> str:
    # email може містити '/', а id документа Firestore - ні
    return hashlib.sha256(email.encode("utf-8")).hexdigest()


class UserRepository:
    def __init__(self, db):
        self.db = db

    def add(self, name: str, email: str, password_hash: str) -> UserInDB:
        """
        Резервує email і створює користувача.
        Кидає google.api_core.exceptions.AlreadyExists, якщо email вже зайнятий.
        """
        user_ref = self.db.collection(COLLECTION).document()
        email_ref = self.db.collection(EMAILS_COLLECTION).document(_email_key(email))
        email_ref.create({"user_id": user_ref.id, "email": email})

        data = {
            "name": name,
            "email": email,
            "password_hash": password_hash,
            "created_at": datetime.now(timezone.utc),
        }
        try:
            user_ref.set(data)
        except Exception:
            email_ref.delete()
            raise
        return UserInDB(id=user_ref.id, **data)

    def get(self, user_id: str) -> UserInDB | None:
        doc = self.db.collection(COLLECTION).document(user_id).get()
        if not doc.exists:
            return None
        return UserInDB(id=doc.id, **doc.to_dict())

    def find_by_email(self, email: str) -> UserInDB | None:
        docs = list(
            self.db.collection(COLLECTION)
            .where(filter=FieldFilter("email", "==", email))
            .limit(1)
            .stream()
        )
        if not docs:
            return None
        return UserInDB(id=docs[0].id, **docs[0].to_dict())
