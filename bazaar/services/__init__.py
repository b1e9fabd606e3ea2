from .auth_service import AuthService
from .jwt_service import create_access_token, decode_access_token
from .friend_service import FriendService
from .saving_service import SavingService
from .label_service import LabelService

__all__ = [
    "AuthService",
    "create_access_token",
    "decode_access_token",
    "FriendService",
    "SavingService",
    "LabelService"
]
