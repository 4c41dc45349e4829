import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import get_settings
from services.firestore import FirestoreDB, init_firebase

settings = get_settings()

logging.basicConfig(level=settings.log_level,
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    firebase_app = init_firebase(settings)

    # Initialize dependencies
    firestore = FirestoreDB(firebase_app, settings)
    app.state.post_store = firestore.posts()
    logger.info("Post store ready on collection '%s'", settings.posts_collection)

    yield


# Routers that serve posts are mounted by the web layer using dependencies.PostStoreDep
app = FastAPI(lifespan=lifespan)
