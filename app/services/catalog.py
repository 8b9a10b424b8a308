"""
Poster catalog: posters, parties and comments.

Routers stay thin; record shaping and the input cleanup rules live here.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException

from app.models.poster import PoliticalParty, Poster, Comment, Rating
from app.models.user import User
from app.schemas.poster import (
    PosterCreate,
    PosterOut,
    PartyOut,
    AuthorOut,
    CommentOut,
    PosterRef,
    DashboardComment,
    DashboardOut,
)

log = logging.getLogger(__name__)

ANONYMOUS_NAME = "Community Member"

DEFAULT_PARTIES = [
    {"name": "ANO 2011", "short_name": "ANO", "color_hex": "#261060"},
    {"name": "Občanská demokratická strana", "short_name": "ODS", "color_hex": "#004494"},
    {"name": "Česká pirátská strana", "short_name": "Piráti", "color_hex": "#000000"},
    {"name": "Starostové a nezávislí", "short_name": "STAN", "color_hex": "#5F9F3C"},
    {"name": "Svoboda a přímá demokracie", "short_name": "SPD", "color_hex": "#E2001A"},
    {"name": "KDU-ČSL", "short_name": "KDU-ČSL", "color_hex": "#FECA30"},
    {"name": "TOP 09", "short_name": "TOP 09", "color_hex": "#7C3592"},
    {"name": "Nezávislí / ostatní", "short_name": None, "color_hex": "#6B7280"},
]


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip whitespace; empty strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_uuid(value: Optional[str], what: str = "Poster ID") -> UUID:
    if not value:
        raise HTTPException(status_code=400, detail=f"{what} required")
    try:
        return UUID(str(value))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {what}")


def author_out(user: Optional[User]) -> Optional[AuthorOut]:
    if user is None:
        return None
    return AuthorOut(id=str(user.id), full_name=user.full_name or ANONYMOUS_NAME)


def party_out(party: Optional[PoliticalParty]) -> Optional[PartyOut]:
    if party is None:
        return None
    return PartyOut(id=party.id, name=party.name, short_name=party.short_name, color_hex=party.color_hex)


def poster_out(poster: Poster) -> PosterOut:
    # party and uploaded_by must be prefetched
    return PosterOut(
        id=str(poster.id),
        title=poster.title,
        description=poster.description,
        image_url=poster.image_url,
        image_filename=poster.image_filename,
        location=poster.location,
        date_photographed=poster.date_photographed,
        created_at=poster.created_at,
        party=party_out(poster.party),
        uploaded_by=author_out(poster.uploaded_by),
    )


def comment_out(comment: Comment) -> CommentOut:
    return CommentOut(
        id=str(comment.id),
        poster_id=str(comment.poster_id),
        content=comment.content,
        created_at=comment.created_at,
        author=author_out(comment.user) or AuthorOut(id=str(comment.user_id), full_name=ANONYMOUS_NAME),
    )


async def get_poster_or_404(poster_id: UUID) -> Poster:
    poster = await Poster.filter(id=poster_id).prefetch_related("party", "uploaded_by").first()
    if not poster:
        raise HTTPException(status_code=404, detail="Poster not found")
    return poster


async def create_poster(payload: PosterCreate, user_id: str) -> Poster:
    title = clean_text(payload.title)
    image_url = clean_text(payload.image_url)
    if not title or not image_url:
        raise HTTPException(status_code=400, detail="Missing required fields")

    party = None
    if payload.party_id is not None:
        party = await PoliticalParty.filter(id=payload.party_id).first()
        if not party:
            raise HTTPException(status_code=400, detail="Unknown political party")

    poster = await Poster.create(
        title=title,
        description=clean_text(payload.description),
        image_url=image_url,
        image_filename=clean_text(payload.filename) or "unknown",
        party=party,
        uploaded_by_id=user_id,
        location=clean_text(payload.location),
        date_photographed=payload.date_photographed,
    )
    log.info("Poster %s created by %s", poster.id, user_id)
    return await get_poster_or_404(poster.id)


async def list_posters() -> List[Poster]:
    return await Poster.all().order_by("-created_at").prefetch_related("party", "uploaded_by")


async def add_comment(poster_id: UUID, user_id: str, content: Optional[str]) -> Comment:
    text = clean_text(content)
    if not text:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if not await Poster.filter(id=poster_id).exists():
        raise HTTPException(status_code=404, detail="Poster not found")
    comment = await Comment.create(poster_id=poster_id, user_id=user_id, content=text)
    await comment.fetch_related("user")
    return comment


async def list_comments(poster_id: UUID) -> List[Comment]:
    return await Comment.filter(poster_id=poster_id).order_by("-created_at").prefetch_related("user")


# Dashboard: a user's own activity

RECENT_COMMENTS_LIMIT = 5


async def list_user_posters(user_id: str) -> List[Poster]:
    return await (
        Poster.filter(uploaded_by_id=user_id)
        .order_by("-created_at")
        .prefetch_related("party", "uploaded_by")
    )


async def recent_user_comments(user_id: str, limit: int = RECENT_COMMENTS_LIMIT) -> List[Comment]:
    return await (
        Comment.filter(user_id=user_id)
        .order_by("-created_at")
        .limit(limit)
        .prefetch_related("poster")
    )


async def count_user_ratings(user_id: str) -> int:
    return await Rating.filter(user_id=user_id).count()


def dashboard_comment_out(comment: Comment) -> DashboardComment:
    # poster must be prefetched
    return DashboardComment(
        id=str(comment.id),
        content=comment.content,
        created_at=comment.created_at,
        poster=PosterRef(id=str(comment.poster.id), title=comment.poster.title),
    )


async def user_dashboard(user_id: str) -> DashboardOut:
    """Own posters newest first, the latest comments and how many ratings were given."""
    posters = await list_user_posters(user_id)
    comments = await recent_user_comments(user_id)
    ratings_count = await count_user_ratings(user_id)
    return DashboardOut(
        posters=[poster_out(p) for p in posters],
        recent_comments=[dashboard_comment_out(c) for c in comments],
        ratings_count=ratings_count,
    )


async def seed_parties() -> int:
    """Insert the default parties that are missing; returns how many were added."""
    added = 0
    for row in DEFAULT_PARTIES:
        _, created = await PoliticalParty.get_or_create(
            name=row["name"],
            defaults={"short_name": row["short_name"], "color_hex": row["color_hex"]},
        )
        added += int(created)
    return added
