# app/routers/posters.py

from uuid import UUID

from fastapi import APIRouter, Depends

from app.schemas.poster import PosterCreate, PosterOut, PosterList
from app.services.security import require_user, AuthUser
from app.services import catalog

router = APIRouter(prefix="/api/posters", tags=["posters"])


@router.post("")
async def create_poster(payload: PosterCreate, auth: AuthUser = Depends(require_user)):
    poster = await catalog.create_poster(payload, auth.user_id)
    return {"poster": catalog.poster_out(poster)}


@router.get("", response_model=PosterList)
async def list_posters():
    posters = await catalog.list_posters()
    return PosterList(posters=[catalog.poster_out(p) for p in posters])


@router.get("/{poster_id}", response_model=PosterOut)
async def get_poster(poster_id: UUID):
    poster = await catalog.get_poster_or_404(poster_id)
    return catalog.poster_out(poster)
