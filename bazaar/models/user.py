import os
from beanie import Document
from pydantic import Field
from pymongo import IndexModel
from datetime import datetime

class User(Document):
    """
    A registered account in the 'users' collection.
    Other concepts only ever reference a user by its id.
    """
    username: str = Field(..., description="Unique login name.")
    hashedPassword: str = Field(..., description="bcrypt hash of the password.")
    createdAt: datetime = Field(default_factory=datetime.utcnow, description="When the user was created.")
    updatedAt: datetime = Field(default_factory=datetime.utcnow, description="When the user was last updated.")

    class Settings:
        name = os.getenv("USERS_COLLECTION", "users")
        indexes = [
            IndexModel("username", unique=True),
        ]
