import os
from beanie import Document
from pydantic import Field
from pymongo import IndexModel, ASCENDING
from typing import List
from datetime import datetime

class Collection(Document):
    """
    A named, user-owned bucket of saved posts.
    """
    owner: str = Field(..., description="ID of the owning user.")
    name: str = Field(..., description="Collection name, unique per owner.")
    postIds: List[str] = Field(default_factory=list, description="Saved post IDs in the order they were added.")
    createdAt: datetime = Field(default_factory=datetime.utcnow, description="When the collection was created.")
    updatedAt: datetime = Field(default_factory=datetime.utcnow, description="When the collection was last updated.")

    class Settings:
        name = os.getenv("COLLECTIONS_COLLECTION", "collections")
        indexes = [
            IndexModel([("owner", ASCENDING), ("name", ASCENDING)], unique=True),
        ]
