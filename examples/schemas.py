from pydantic import BaseModel
from typing import Optional
import datetime
from enum import Enum


class StatusEnum(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


# -------------------
# Role Schemas
# -------------------

class RoleResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


# -------------------
# User Schemas
# -------------------

class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    age: Optional[int] = None
    status: Optional[StatusEnum] = None
    role_id: int
    created_at: datetime.datetime
    role: Optional[RoleResponse]

    class Config:
        from_attributes = True
