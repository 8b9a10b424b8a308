# app/routers/ratings.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.models.poster import Poster
from app.schemas.poster import RatingCreate, RatingOut, RatingSummaryOut
from app.services.security import require_user, optional_user, AuthUser
from app.services.metrics import record_rating
from app.services import ratings
from app.services.catalog import parse_uuid

router = APIRouter(prefix="/api/ratings", tags=["ratings"])
log = logging.getLogger(__name__)


# Method: rate_poster()
@router.post("")
async def rate_poster(payload: RatingCreate, auth: AuthUser = Depends(require_user)):
    poster_id = parse_uuid(payload.poster_id)
    if not ratings.is_valid_rating(payload.rating):
        raise HTTPException(status_code=400, detail="Invalid rating (must be 1-5)")
    if not await Poster.filter(id=poster_id).exists():
        raise HTTPException(status_code=404, detail="Poster not found")

    rating = await ratings.upsert_rating(str(poster_id), auth.user_id, payload.rating)
    record_rating()
    log.info("User %s rated poster %s with %s", auth.user_id, poster_id, payload.rating)
    return {
        "rating": RatingOut(
            id=str(rating.id),
            poster_id=str(poster_id),
            user_id=auth.user_id,
            rating=rating.rating,
        )
    }


# Method: get_rating_summary()
@router.get("", response_model=RatingSummaryOut)
async def get_rating_summary(
    poster_id: Optional[str] = Query(default=None),
    auth: Optional[AuthUser] = Depends(optional_user),
):
    pid = parse_uuid(poster_id)
    summary = await ratings.rating_summary(str(pid), auth.user_id if auth else None)
    return RatingSummaryOut(**summary.to_dict())
