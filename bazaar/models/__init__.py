from dotenv import load_dotenv

# Collection names are read from the environment when the models are defined
load_dotenv()

from .user import User
from .friend_request import FriendRequest
from .friendship import Friendship, friendship_key
from .collection import Collection
from .label import Label
from .database import init_db
