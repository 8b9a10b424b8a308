from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import date, datetime


class PartyOut(BaseModel):
    id: int
    name: str
    short_name: str | None = None
    color_hex: str


class AuthorOut(BaseModel):
    id: str
    full_name: str | None = None


class PosterCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    filename: Optional[str] = None
    party_id: Optional[int] = None
    location: Optional[str] = None
    date_photographed: Optional[date] = None


class PosterOut(BaseModel):
    id: str
    title: str
    description: str | None = None
    image_url: str
    image_filename: str
    location: str | None = None
    date_photographed: date | None = None
    created_at: datetime | None = None
    party: PartyOut | None = None
    uploaded_by: AuthorOut | None = None


class CommentCreate(BaseModel):
    poster_id: str
    content: Optional[str] = None


class CommentOut(BaseModel):
    id: str
    poster_id: str
    content: str
    created_at: datetime | None = None
    author: AuthorOut


class RatingCreate(BaseModel):
    poster_id: str
    # Validated by the rating service so bad values map to a 400, not a 422
    rating: Any = None


class RatingOut(BaseModel):
    id: str
    poster_id: str
    user_id: str
    rating: int


class RatingSummaryOut(BaseModel):
    average_rating: float
    total_ratings: int
    user_rating: int | None = None


class PosterList(BaseModel):
    posters: List[PosterOut] = Field(default_factory=list)


class PosterRef(BaseModel):
    id: str
    title: str


class DashboardComment(BaseModel):
    id: str
    content: str
    created_at: datetime | None = None
    poster: PosterRef


class DashboardOut(BaseModel):
    posters: List[PosterOut] = Field(default_factory=list)
    recent_comments: List[DashboardComment] = Field(default_factory=list)
    ratings_count: int = 0
