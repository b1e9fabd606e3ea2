import os
from beanie import Document
from pydantic import Field
from typing import Literal
from datetime import datetime

class FriendRequest(Document):
    """
    A directed friend request.

    Only pending requests are visible to callers. A request left in 'accepted'
    belongs to an acceptance that was interrupted before the record was removed.
    """
    fromUserId: str = Field(..., description="ID of the user who sent the request.")
    toUserId: str = Field(..., description="ID of the user who received the request.")
    # Rejected and withdrawn requests are deleted, so 'rejected' is never stored
    status: Literal['pending', 'accepted', 'rejected'] = Field(default='pending', description="Request status.")
    createdAt: datetime = Field(default_factory=datetime.utcnow, description="When the request was created.")
    updatedAt: datetime = Field(default_factory=datetime.utcnow, description="When the request was last updated.")

    class Settings:
        name = os.getenv("FRIEND_REQUESTS_COLLECTION", "friendRequests")
        indexes = [
            "fromUserId",
            "toUserId",
            "status",
            "createdAt",
        ]
