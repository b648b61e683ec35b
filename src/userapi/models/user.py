"""
User-related Pydantic models
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


class User(BaseModel):
    id: int
    name: str


class UserQuery(BaseModel):
    """Query parameters for GET /users"""
    name: Optional[str] = None


class UserIdParam(BaseModel):
    """Route parameters for /users/{id}"""
    id: int = Field(ge=0)


class UserPayload(BaseModel):
    """Request body for POST /users and PUT /users/{id}"""
    # validate_default sends a missing name through name_must_be_string
    name: str = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def name_must_be_string(cls, value):
        if not isinstance(value, str):
            raise PydanticCustomError("name_type", "Name is required and must be a string.")
        return value

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("name_empty", "Name cannot be empty.")
        return value


class DeletedUserResponse(BaseModel):
    message: str = "User deleted!"
    user: User
