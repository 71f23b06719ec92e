"""API router for user registration, profiles and donor search."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ....application.services.listing import DEFAULT_LIMIT, MAX_LIMIT, PageRequest
from ....application.services.user_service import UserService
from ....core.dependencies import get_user_service
from ....domain.models import Identity
from ...api.dependencies import require_admin, require_identity
from ...api.schemas.user_schemas import (
    UserProfileUpdateRequest,
    UserRegisterRequest,
    UserRoleUpdateRequest,
    UserStatusUpdateRequest,
)
from ...api.serializers import serialize_user

router = APIRouter(prefix="/users", tags=["Users"])
donors_router = APIRouter(prefix="/donors", tags=["Donors"])


@router.post("", status_code=status.HTTP_201_CREATED)
def register_user(
    payload: UserRegisterRequest,
    response: Response,
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Register a user; repeating the call for the same email is a no-op."""
    profile = payload.model_dump(by_alias=True, exclude_none=True, exclude={"email"})
    user, created = user_service.register(payload.email, profile)
    if not created:
        response.status_code = status.HTTP_200_OK
    return {"insertedId": user.id, "created": created}


@router.get("/role/{email}")
def get_user_role(
    email: str,
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, str]:
    return user_service.get_role(email)


@router.get("/profile")
def get_profile(
    identity: Identity = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    return serialize_user(user_service.get_profile(identity))


@router.patch("/profile")
def update_profile(
    payload: UserProfileUpdateRequest,
    identity: Identity = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    changes = payload.model_dump(by_alias=True, exclude_none=True)
    user = user_service.update_profile(identity, changes)
    return {"message": "Profile updated", "user": serialize_user(user)}


@router.get("")
def list_users(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    result = user_service.list_users(PageRequest(page=page, limit=limit), status=status_filter)
    return {
        "users": [serialize_user(user) for user in result.items],
        "pagination": result.pagination.to_dict(total_key="totalUsers"),
    }


@router.patch("/{user_id}/role")
def update_user_role(
    user_id: str,
    payload: UserRoleUpdateRequest,
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    user = user_service.set_role(user_id, payload.role.strip().lower())
    return {"message": f"Role updated to {user.role}", "user": serialize_user(user)}


@router.patch("/{user_id}/status")
def update_user_status(
    user_id: str,
    payload: UserStatusUpdateRequest,
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    user = user_service.set_status(user_id, payload.status.strip().lower())
    return {"message": f"Status updated to {user.status}", "user": serialize_user(user)}


@donors_router.get("/search")
def search_donors(
    blood_group: Optional[str] = Query(None, alias="bloodGroup"),
    district: Optional[str] = None,
    upazila: Optional[str] = None,
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    donors = user_service.search_donors(blood_group=blood_group, district=district, upazila=upazila)
    return {"donors": [serialize_user(donor) for donor in donors], "count": len(donors)}
