from .auth_schema import (
    UserCreate,
    UserLogin,
    UserPublic,
    UsernameUpdate,
    PasswordUpdate
)
from .user_schema import FriendRequestPublic
from .collection_schema import CollectionCreate
