"""User API endpoints."""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cafe.api.errors import to_http_exception
from cafe.core.enums import UserRole
from cafe.core.errors import CafeError
from cafe.db.database import get_db
from cafe.services.persistence.users import UserPersistenceService

router = APIRouter()


class CreateUserRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER


class UserResponse(BaseModel):
    """User response model."""

    id: int
    email: str
    name: str
    phone: Optional[str] = None
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


@router.post("/api/users", response_model=UserResponse, status_code=201)
async def create_user(
    user: CreateUserRequest,
    db: AsyncSession = Depends(get_db),
):
    """Register a customer, staff member or admin."""
    try:
        return await UserPersistenceService(db).create_user(
            email=user.email, name=user.name, phone=user.phone, role=user.role
        )
    except CafeError as e:
        raise to_http_exception(e, "USERS")
