from fastapi import APIRouter, Depends, HTTPException
from typing import List
from ..services import AuthService
from ..schemas import UserPublic, UsernameUpdate, PasswordUpdate
from ..models import User
from ..security import get_current_user
from ..exceptions import ConflictError, NotAllowedError, NotFoundError
from ..utils import map_user_to_public_dict

router = APIRouter(tags=["User"])

# Profile of the logged-in user
@router.get("/me", response_model=UserPublic)
async def read_users_me(current_user: User = Depends(get_current_user)):
    return map_user_to_public_dict(current_user)

# Change username
@router.patch("/me/username", response_model=UserPublic)
async def update_username(
    update: UsernameUpdate,
    current_user: User = Depends(get_current_user)
):
    try:
        user = await AuthService.update_username(str(current_user.id), update.username)
        return map_user_to_public_dict(user)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.detail)

# Change password
@router.patch("/me/password")
async def update_password(
    update: PasswordUpdate,
    current_user: User = Depends(get_current_user)
):
    try:
        await AuthService.update_password(str(current_user.id), update.currentPassword, update.newPassword)
        return {"message": "Password updated."}
    except NotAllowedError as e:
        raise HTTPException(status_code=403, detail=e.detail)

# Delete account
@router.delete("/me")
async def delete_account(current_user: User = Depends(get_current_user)):
    try:
        return await AuthService.delete_user(str(current_user.id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# List users
@router.get("", response_model=List[UserPublic])
async def get_users():
    users = await AuthService.get_users()
    return [map_user_to_public_dict(user) for user in users]

# Look up a user by username
@router.get("/{username}", response_model=UserPublic)
async def get_user(username: str):
    try:
        user = await AuthService.get_user_by_username(username)
        return map_user_to_public_dict(user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
