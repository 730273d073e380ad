"""Admin verification endpoints for the Gridrr API."""

from __future__ import annotations

from fastapi import APIRouter

from gridrr.api.v1.dependencies import AdminUserDep, SessionDep
from gridrr.models import User
from gridrr.schemas.user import UserResponse
from gridrr.schemas.verification import SweepResponse, VerificationActionResponse
from gridrr.services import verification as verification_service

router = APIRouter(prefix="/verification", tags=["verification"])


@router.get("/requests", response_model=list[UserResponse])
def list_requests(_admin: AdminUserDep, db: SessionDep) -> list[User]:
    """List users flagged for verification review."""
    return verification_service.list_requests(db)


@router.post("/approve/{user_id}", response_model=VerificationActionResponse)
def approve(user_id: int, _admin: AdminUserDep, db: SessionDep) -> VerificationActionResponse:
    """Approve a pending verification request."""
    verification_service.approve(db, user_id)
    return VerificationActionResponse()


@router.post("/reject/{user_id}", response_model=VerificationActionResponse)
def reject(user_id: int, _admin: AdminUserDep, db: SessionDep) -> VerificationActionResponse:
    """Reject a pending verification request."""
    verification_service.reject(db, user_id)
    return VerificationActionResponse()


@router.post("/verify/{user_id}", response_model=VerificationActionResponse)
def verify(user_id: int, _admin: AdminUserDep, db: SessionDep) -> VerificationActionResponse:
    """Verify a user directly."""
    verification_service.verify(db, user_id)
    return VerificationActionResponse()


@router.post("/unverify/{user_id}", response_model=VerificationActionResponse)
def unverify(user_id: int, _admin: AdminUserDep, db: SessionDep) -> VerificationActionResponse:
    """Revoke a user's verified status."""
    verification_service.unverify(db, user_id)
    return VerificationActionResponse()


@router.post("/sweep", response_model=SweepResponse)
def sweep(_admin: AdminUserDep, db: SessionDep) -> SweepResponse:
    """Run the verification threshold sweep immediately."""
    return SweepResponse(flagged=verification_service.run_verification_sweep(db))
