from fastapi import APIRouter, Depends, HTTPException
from ..services import AuthService, FriendService
from ..security import get_current_user_id
from ..exceptions import ConflictError, NotFoundError
from ..utils import map_friend_request_to_public_dict

router = APIRouter(tags=["Friend"])

# List friends
@router.get("")
async def get_friends(current_user_id: str = Depends(get_current_user_id)):
    """
    Usernames of the current user's friends.
    """
    friend_ids = await FriendService.get_friends(current_user_id)
    return await AuthService.ids_to_usernames(friend_ids)

# Pending requests sent or received
@router.get("/requests")
async def get_friend_requests(current_user_id: str = Depends(get_current_user_id)):
    requests = await FriendService.get_friend_requests(current_user_id)
    user_ids = [r.fromUserId for r in requests] + [r.toUserId for r in requests]
    usernames = await AuthService.usernames_by_id(user_ids)
    return [map_friend_request_to_public_dict(r, usernames) for r in requests]

# Send a friend request
@router.post("/requests/{to}", status_code=201)
async def send_friend_request(to: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        to_user = await AuthService.get_user_by_username(to)
        request = await FriendService.send_friend_request(current_user_id, str(to_user.id))
        return {"message": "Friend request sent.", "request": map_friend_request_to_public_dict(request)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.detail)

# Withdraw a sent request
@router.delete("/requests/{to}")
async def cancel_friend_request(to: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        to_user = await AuthService.get_user_by_username(to)
        return await FriendService.cancel_friend_request(current_user_id, str(to_user.id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Accept a received request
@router.put("/accept/{from_username}")
async def accept_friend_request(from_username: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        from_user = await AuthService.get_user_by_username(from_username)
        return await FriendService.accept_friend_request(str(from_user.id), current_user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Reject a received request
@router.put("/reject/{from_username}")
async def reject_friend_request(from_username: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        from_user = await AuthService.get_user_by_username(from_username)
        return await FriendService.reject_friend_request(str(from_user.id), current_user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Relationship with another user
@router.get("/status/{username}")
async def check_friend_status(username: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        user = await AuthService.get_user_by_username(username)
        status = await FriendService.check_friend_status(current_user_id, str(user.id))
        return {"status": status}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Unfriend
@router.delete("/{friend}")
async def unfriend_user(friend: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        friend_user = await AuthService.get_user_by_username(friend)
        return await FriendService.unfriend_user(current_user_id, str(friend_user.id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
