from datetime import datetime, timezone
from typing import List, Optional, Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(BaseModel):
    id: Optional[str] = None
    title: str
    text: str
    authorId: str
    createdAt: datetime = Field(default_factory=_utcnow)
    likes: List[str] = []
    dislikes: List[str] = []
    likesScore: int = 0
    mediaUrl: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot) -> "Post":
        """Build a post from a Firestore document snapshot"""
        data = snapshot.to_dict() or {}
        data["id"] = snapshot.id
        # Older documents may store null instead of an empty list
        data["likes"] = data.get("likes") or []
        data["dislikes"] = data.get("dislikes") or []
        return cls(**data)

    def to_document(self) -> Dict[str, Any]:
        """Fields as stored in Firestore; the id lives in the document key"""
        return self.model_dump(exclude={"id"})


class PostUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    text: Optional[str] = None
    mediaUrl: Optional[str] = None

    @field_validator("title", "text")
    @classmethod
    def not_null(cls, value):
        # Posts require a title and text; only mediaUrl may be cleared
        if value is None:
            raise ValueError("must not be null")
        return value


class PageRequest(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
