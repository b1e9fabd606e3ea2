from pydantic import BaseModel, Field
from typing import Optional

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class UserLogin(BaseModel):
    username: str
    password: str

class UserPublic(BaseModel):
    id: str
    username: str
    createdAt: Optional[str] = None

class UsernameUpdate(BaseModel):
    username: str = Field(..., min_length=1)

class PasswordUpdate(BaseModel):
    currentPassword: str
    newPassword: str = Field(..., min_length=1)
