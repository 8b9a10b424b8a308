import math
from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from app.models.poster import Rating

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    total_ratings: int
    user_rating: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


def is_valid_rating(value) -> bool:
    # bool is an int subclass; True must not count as a one-star rating
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_RATING <= value <= MAX_RATING


def round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def summarize(values: Iterable[int], user_rating: Optional[int] = None) -> RatingSummary:
    values = list(values)
    total = len(values)
    average = sum(values) / total if total else 0
    return RatingSummary(
        average_rating=round_half_up(average),
        total_ratings=total,
        user_rating=user_rating,
    )


async def upsert_rating(poster_id: str, user_id: str, value: int) -> Rating:
    """Insert the user's rating or overwrite their previous one."""
    if not is_valid_rating(value):
        raise ValueError(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}")
    rating, _ = await Rating.update_or_create(
        defaults={"rating": value},
        poster_id=poster_id,
        user_id=user_id,
    )
    return rating


async def rating_summary(poster_id: str, user_id: Optional[str] = None) -> RatingSummary:
    values = await Rating.filter(poster_id=poster_id).values_list("rating", flat=True)
    user_rating = None
    if user_id:
        own = await Rating.filter(poster_id=poster_id, user_id=user_id).first()
        user_rating = own.rating if own else None
    return summarize(values, user_rating)
