"""Pydantic schemas for user API endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegisterRequest(BaseModel):
    """Request schema for user registration; role and status are never accepted."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    name: Optional[str] = Field(None, max_length=120)
    blood_group: Optional[str] = Field(None, alias="bloodGroup", max_length=8)
    district: Optional[str] = Field(None, max_length=80)
    upazila: Optional[str] = Field(None, max_length=80)
    photo_url: Optional[str] = Field(None, alias="photoURL", max_length=2048)


class UserProfileUpdateRequest(BaseModel):
    """Profile fields a user may change; anything else is ignored."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, max_length=120)
    blood_group: Optional[str] = Field(None, alias="bloodGroup", max_length=8)
    district: Optional[str] = Field(None, max_length=80)
    upazila: Optional[str] = Field(None, max_length=80)
    photo_url: Optional[str] = Field(None, alias="photoURL", max_length=2048)


class UserRoleUpdateRequest(BaseModel):
    role: str = Field(..., description="Either 'donor' or 'admin'")


class UserStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="Either 'active' or 'blocked'")
