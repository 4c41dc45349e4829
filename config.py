import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    firebase_credentials: str = "./firebase.json"
    posts_collection: str = "posts"
    posts_page_size: int = 20
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Read settings from the environment (and .env, if present)"""
    return Settings(
        firebase_credentials=os.getenv("FIREBASE_CREDENTIALS", "./firebase.json"),
        posts_collection=os.getenv("POSTS_COLLECTION", "posts"),
        posts_page_size=int(os.getenv("POSTS_PAGE_SIZE", "20")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
