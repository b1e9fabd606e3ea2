import os
from beanie import Document
from pydantic import Field
from pymongo import IndexModel
from typing import List
from datetime import datetime

class Label(Document):
    """
    A free-text tag and the posts carrying it.
    Label documents are kept even after their last post is removed.
    """
    label: str = Field(..., description="The tag text, unique across labels.")
    postIds: List[str] = Field(default_factory=list, description="IDs of the tagged posts.")
    createdAt: datetime = Field(default_factory=datetime.utcnow, description="When the label was first used.")
    updatedAt: datetime = Field(default_factory=datetime.utcnow, description="When the label was last updated.")

    class Settings:
        name = os.getenv("LABELS_COLLECTION", "labels")
        indexes = [
            IndexModel("label", unique=True),
        ]
