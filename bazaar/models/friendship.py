import os
from beanie import Document
from pydantic import Field
from pymongo import IndexModel, ASCENDING
from datetime import datetime
from typing import Tuple

def friendship_key(user_id: str, other_id: str) -> Tuple[str, str]:
    """Canonical (user1, user2) ordering for an undirected pair."""
    return (user_id, other_id) if user_id < other_id else (other_id, user_id)

class Friendship(Document):
    """
    An undirected friendship, stored once per pair with user1 < user2.
    """
    user1: str = Field(..., description="Smaller of the two user IDs.")
    user2: str = Field(..., description="Larger of the two user IDs.")
    createdAt: datetime = Field(default_factory=datetime.utcnow, description="When the friendship was formed.")
    updatedAt: datetime = Field(default_factory=datetime.utcnow, description="When the friendship was last updated.")

    @classmethod
    def between(cls, user_id: str, other_id: str) -> "Friendship":
        user1, user2 = friendship_key(user_id, other_id)
        return cls(user1=user1, user2=user2)

    class Settings:
        name = os.getenv("FRIENDSHIPS_COLLECTION", "friendships")
        indexes = [
            IndexModel([("user1", ASCENDING), ("user2", ASCENDING)], unique=True),
            "user2",
        ]
