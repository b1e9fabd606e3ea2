from pydantic import BaseModel
from datetime import datetime

class FriendRequestPublic(BaseModel):
    id: str
    fromUserId: str
    toUserId: str
    fromUsername: str | None = None
    toUsername: str | None = None
    status: str
    createdAt: datetime
