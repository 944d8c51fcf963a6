"""
Profile Routes

GET /profile - List all profiles (public)
GET /profile/me - Get own profile
GET /profile/user/{user_id} - Get profile by user id (public)
POST /profile - Create or update own profile
DELETE /profile - Delete own profile and account
PUT /profile/experience - Add experience
PUT /profile/experience/{exp_id} - Edit experience
DELETE /profile/experience/{exp_id} - Remove experience
PUT /profile/education - Add education
PUT /profile/education/{edu_id} - Edit education
DELETE /profile/education/{edu_id} - Remove education
"""

from fastapi import APIRouter, Depends
from typing import List

from devconnect.core.auth import get_current_user
from devconnect.services.profile_service import ProfileService, get_profile_service
from devconnect.schemas.schemas import (
    ProfileRequest, ProfileResponse, ExperienceCreate, ExperienceUpdate,
    EducationCreate, EducationUpdate, MessageResponse
)

router = APIRouter(prefix="/profile", tags=["Profiles"])


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(profiles: ProfileService = Depends(get_profile_service)):
    """Get all profiles with the owner's name and avatar."""
    return profiles.list_profiles()


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Get current user's profile."""
    return profiles.get_my_profile(user["id"])


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user(user_id: str, profiles: ProfileService = Depends(get_profile_service)):
    """Get a profile by the owning user's id."""
    return profiles.get_profile_by_user(user_id)


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    data: ProfileRequest,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """
    Create or update the current user's profile.

    Skills are sent as a comma separated string; social links
    (youtube, twitter, facebook, linkedin, instagram) as top-level fields.
    """
    return profiles.upsert_profile(user["id"], data.model_dump())


@router.delete("", response_model=MessageResponse)
async def delete_account(
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Delete current user's profile and account. Their posts are kept."""
    profiles.delete_account(user["id"])
    return MessageResponse(msg="Deletion successful.")


# ============================================================
# EXPERIENCE
# ============================================================

@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    data: ExperienceCreate,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return profiles.add_experience(user["id"], data.model_dump(by_alias=True))


@router.put("/experience/{exp_id}", response_model=ProfileResponse)
async def edit_experience(
    exp_id: str,
    data: ExperienceUpdate,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Update only the fields present in the body."""
    return profiles.edit_experience(user["id"], exp_id, data.model_dump(by_alias=True, exclude_unset=True))


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def delete_experience(
    exp_id: str,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return profiles.delete_experience(user["id"], exp_id)


# ============================================================
# EDUCATION
# ============================================================

@router.put("/education", response_model=ProfileResponse)
async def add_education(
    data: EducationCreate,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return profiles.add_education(user["id"], data.model_dump(by_alias=True))


@router.put("/education/{edu_id}", response_model=ProfileResponse)
async def edit_education(
    edu_id: str,
    data: EducationUpdate,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Update only the fields present in the body."""
    return profiles.edit_education(user["id"], edu_id, data.model_dump(by_alias=True, exclude_unset=True))


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def delete_education(
    edu_id: str,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return profiles.delete_education(user["id"], edu_id)
