import logging
from typing import Optional
from bson import ObjectId
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from .services import jwt_service
from .models import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)

async def get_user_from_token(token: str) -> User:
    token_data = jwt_service.decode_access_token(token)
    if not token_data or not token_data.user_id:
        logger.warning("Token decode failed or missing subject")
        raise credentials_exception

    # The subject must be a valid ObjectId
    if not ObjectId.is_valid(token_data.user_id):
        logger.warning(f"Invalid ObjectId in token subject: {token_data.user_id}")
        raise credentials_exception

    user = await User.get(ObjectId(token_data.user_id))
    if user is None:
        logger.warning(f"User not found with ID: {token_data.user_id}")
        raise credentials_exception

    return user

async def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    """Logged-in precondition: resolve the session token to its user."""
    return await get_user_from_token(token)

async def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    user = await get_user_from_token(token)
    return str(user.id)

async def ensure_logged_out(token: Optional[str] = Depends(optional_oauth2_scheme)) -> None:
    """Logged-out precondition: reject callers presenting a valid session."""
    if not token:
        return
    try:
        await get_user_from_token(token)
    except HTTPException:
        # An expired or unknown token does not count as a session
        return
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You are already logged in.")
