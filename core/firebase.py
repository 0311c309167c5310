# Ініціалізація Firebase Admin та клієнта Firestore.
import logging

import firebase_admin
from firebase_admin import credentials, firestore

from core.config import settings

logger = logging.getLogger(__name__)

db = None


def initialize_firebase():
    global db
    if not firebase_admin._apps:
        options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
        if settings.FIREBASE_SERVICE_ACCOUNT_KEY_PATH:
            cred = credentials.Certificate(settings.FIREBASE_SERVICE_ACCOUNT_KEY_PATH)
            firebase_admin.initialize_app(cred, options)
        else:
            firebase_admin.initialize_app(options=options)
        logger.info("Firebase app initialized")

    db = firestore.client()


def ensure_initialized():
    if db is None:
        initialize_firebase()
    return db
