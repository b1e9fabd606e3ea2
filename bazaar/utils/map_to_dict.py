from typing import Dict, Optional
from ..schemas.auth_schema import UserPublic
from ..schemas.user_schema import FriendRequestPublic
from ..models.user import User
from ..models.friend_request import FriendRequest

# Helpers that turn documents into JSON-serializable dicts for responses
def map_user_to_public_dict(user: User) -> dict:
    """Convert a User document into its public representation."""
    public_user = UserPublic(
        id=str(user.id),
        username=user.username,
        createdAt=user.createdAt.isoformat() if user.createdAt else None
    )
    return public_user.model_dump()

def map_friend_request_to_public_dict(request: FriendRequest, usernames: Optional[Dict[str, str]] = None) -> dict:
    """Convert a FriendRequest document into a dict, resolving usernames when known."""
    usernames = usernames or {}
    public_request = FriendRequestPublic(
        id=str(request.id),
        fromUserId=request.fromUserId,
        toUserId=request.toUserId,
        fromUsername=usernames.get(request.fromUserId),
        toUsername=usernames.get(request.toUserId),
        status=request.status,
        createdAt=request.createdAt
    )
    return public_request.model_dump(mode="json")
