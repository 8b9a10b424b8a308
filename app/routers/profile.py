from fastapi import APIRouter, Depends, HTTPException

from app.models.user import User
from app.schemas.auth import ProfileUpdate, ProfileOut
from app.services.security import require_user, AuthUser
from app.schemas.poster import DashboardOut
from app.services.catalog import clean_text, user_dashboard

router = APIRouter(prefix="/api/profile", tags=["profile"])


def profile_out(user: User) -> ProfileOut:
    return ProfileOut(
        id=str(user.id),
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
    )


@router.get("", response_model=ProfileOut)
async def get_profile(auth: AuthUser = Depends(require_user)):
    user = await User.get_or_none(id=auth.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return profile_out(user)


@router.put("")
async def update_profile(payload: ProfileUpdate, auth: AuthUser = Depends(require_user)):
    """Update display name and avatar; the avatar comes from /api/upload with type=avatar."""
    user = await User.get_or_none(id=auth.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    user.full_name = clean_text(payload.full_name)
    user.avatar_url = clean_text(payload.avatar_url)
    await user.save()
    return {"success": True, "profile": profile_out(user)}


@router.get("/dashboard", response_model=DashboardOut)
async def get_dashboard(auth: AuthUser = Depends(require_user)):
    return await user_dashboard(auth.user_id)
