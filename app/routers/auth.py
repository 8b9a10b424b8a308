# app/routers/auth.py

import logging

from fastapi import APIRouter, HTTPException, Depends, Body, Request

from app.config import settings
from app.core.rate_limit import limiter
from app.schemas.auth import SignupPayload, LoginPayload, TokenOut, ProfileOut
from app.models.user import User
from app.services.security import hash_password, verify_password, create_token, require_user, AuthUser

router = APIRouter(prefix="/auth", tags=["auth"])
log = logging.getLogger(__name__)


@router.post("/signup", response_model=TokenOut, status_code=201)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def signup(request: Request, payload: SignupPayload = Body(...)):
    """
    Create an account and its public profile in one step.
    """
    email = payload.email.lower()
    exists = await User.filter(email=email).exists()
    if exists:
        raise HTTPException(status_code=400, detail="Email already registered")

    user = await User.create(
        email=email,
        full_name=(payload.full_name or "").strip() or None,
        password_hash=hash_password(payload.password),
    )
    log.info("User %s signed up", user.id)
    return TokenOut(access_token=create_token(str(user.id)))


@router.post("/login", response_model=TokenOut)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(request: Request, payload: LoginPayload = Body(...)):
    user = await User.filter(email=payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return TokenOut(access_token=create_token(str(user.id)))


@router.get("/me", response_model=ProfileOut)
async def get_current_user(auth: AuthUser = Depends(require_user)):
    user = await User.get_or_none(id=auth.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return ProfileOut(
        id=str(user.id),
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
    )
