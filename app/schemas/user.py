from pydantic import Field, model_validator
from typing import Optional

from app.schemas.common import CamelModel


class UserLogin(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserBase(CamelModel):
    username: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1)
    role: str = Field(default="operator", pattern='^(operator|management)$')
    operator_id: Optional[str] = None  # Only for operators


class UserCreate(UserBase):
    password: str = Field(..., min_length=1, max_length=100)

    @model_validator(mode="after")
    def operator_id_only_for_operators(self):
        if self.role == "management" and self.operator_id:
            raise ValueError("operatorId is only allowed for operators")
        return self


class User(UserBase):
    """User as returned to clients, never includes the password"""
    id: int
