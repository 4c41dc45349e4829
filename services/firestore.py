import logging

import firebase_admin
from firebase_admin import credentials, firestore_async

from config import Settings
from services.posts import PostStore

logger = logging.getLogger(__name__)


def init_firebase(settings: Settings) -> firebase_admin.App:
    """Initialize the Firebase Admin SDK from the service account file"""
    cred = credentials.Certificate(settings.firebase_credentials)
    app = firebase_admin.initialize_app(cred)
    logger.info("Initialized Firebase app for project %s", app.project_id)
    return app


class FirestoreDB:
    def __init__(self, app: firebase_admin.App, settings: Settings):
        self.db = firestore_async.client(app)
        self.settings = settings

    def collection(self, name: str):
        return self.db.collection(name)

    def posts(self) -> PostStore:
        """Create a PostStore over the configured posts collection"""
        return PostStore(
            self.collection(self.settings.posts_collection),
            self.db,
            page_size=self.settings.posts_page_size,
        )
