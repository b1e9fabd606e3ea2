import logging
from datetime import datetime
from typing import Dict, List, Optional
from bson import ObjectId
from passlib.context import CryptContext
from pymongo.errors import DuplicateKeyError
from ..models.user import User
from ..exceptions import ConflictError, NotAllowedError, NotFoundError

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

class AuthService:

    @staticmethod
    def verify_password(plain_password, hashed_password):
        """Check a plain password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password):
        """Hash a plain password."""
        return pwd_context.hash(password)

    @staticmethod
    async def register_user(username: str, password: str) -> User:
        """
        Register a new user.
        Raises ConflictError if the username is taken.
        """
        if await User.find_one(User.username == username):
            raise ConflictError(f"Username '{username}' already exists.")

        # The salt is generated by passlib and stored inside the hash
        new_user = User(
            username=username,
            hashedPassword=AuthService.get_password_hash(password),
        )
        try:
            await new_user.insert()
        except DuplicateKeyError:
            raise ConflictError(f"Username '{username}' already exists.")

        logger.info(f"Registered user {new_user.id}")
        return new_user

    @staticmethod
    async def login_user(username: str, password: str) -> Optional[User]:
        """
        Authenticate by username and password.
        Returns None when the credentials do not match.
        """
        user = await User.find_one(User.username == username)
        if not user:
            return None

        if not AuthService.verify_password(password, user.hashedPassword):
            return None
        return user

    @staticmethod
    async def get_user_by_id(user_id: str) -> User:
        user = await User.get(ObjectId(user_id)) if ObjectId.is_valid(user_id) else None
        if not user:
            raise NotFoundError(f"User {user_id} not found.")
        return user

    @staticmethod
    async def get_user_by_username(username: str) -> User:
        user = await User.find_one(User.username == username)
        if not user:
            raise NotFoundError(f"User '{username}' not found.")
        return user

    @staticmethod
    async def get_users() -> List[User]:
        return await User.find_all().sort("username").to_list()

    @staticmethod
    async def usernames_by_id(user_ids: List[str]) -> Dict[str, str]:
        """Map each known user ID to its username."""
        object_ids = [ObjectId(uid) for uid in set(user_ids) if ObjectId.is_valid(uid)]
        if not object_ids:
            return {}

        users = await User.find({"_id": {"$in": object_ids}}).to_list()
        return {str(user.id): user.username for user in users}

    @staticmethod
    async def ids_to_usernames(user_ids: List[str]) -> List[str]:
        """
        Translate user IDs to usernames, keeping the input order.
        Unknown IDs are skipped.
        """
        by_id = await AuthService.usernames_by_id(user_ids)
        return [by_id[uid] for uid in user_ids if uid in by_id]

    @staticmethod
    async def update_username(user_id: str, username: str) -> User:
        user = await AuthService.get_user_by_id(user_id)

        existing = await User.find_one(User.username == username)
        if existing and existing.id != user.id:
            raise ConflictError(f"Username '{username}' already exists.")

        user.username = username
        user.updatedAt = datetime.utcnow()
        try:
            await user.save()
        except DuplicateKeyError:
            raise ConflictError(f"Username '{username}' already exists.")
        return user

    @staticmethod
    async def update_password(user_id: str, current_password: str, new_password: str) -> User:
        user = await AuthService.get_user_by_id(user_id)

        if not AuthService.verify_password(current_password, user.hashedPassword):
            raise NotAllowedError("Current password is incorrect.")

        user.hashedPassword = AuthService.get_password_hash(new_password)
        user.updatedAt = datetime.utcnow()
        await user.save()
        return user

    @staticmethod
    async def delete_user(user_id: str):
        user = await AuthService.get_user_by_id(user_id)
        await user.delete()
        logger.info(f"Deleted user {user_id}")
        return {"message": "User deleted."}
