# tests/test_ratings.py
"""Rating aggregation and upsert"""

import pytest
from hypothesis import given, strategies as st

from app.models.poster import Poster, Rating
from app.models.user import User
from app.services.ratings import (
    is_valid_rating,
    rating_summary,
    round_half_up,
    summarize,
    upsert_rating,
)


def test_empty_summary():
    s = summarize([])
    assert s.average_rating == 0
    assert s.total_ratings == 0
    assert s.user_rating is None


def test_average_rounds_half_up():
    # 17 / 4 = 4.25 -> 4.3
    assert summarize([5, 4, 4, 4]).average_rating == 4.3
    assert summarize([1, 2]).average_rating == 1.5
    assert summarize([5, 5, 4]).average_rating == 4.7
    assert round_half_up(3.45) == 3.5


@given(st.lists(st.integers(min_value=1, max_value=5), min_size=1, max_size=200))
def test_average_bounded(values):
    s = summarize(values)
    assert 1.0 <= s.average_rating <= 5.0
    assert s.total_ratings == len(values)


@pytest.mark.parametrize("value", [1, 2, 3, 4, 5])
def test_valid_ratings(value):
    assert is_valid_rating(value)


@pytest.mark.parametrize("value", [0, 6, -1, 3.5, "4", None, True])
def test_invalid_ratings(value):
    assert not is_valid_rating(value)


async def _poster_with_user():
    user = await User.create(email="rater@example.com", password_hash="x")
    poster = await Poster.create(title="Volte nás", image_url="/uploads/p.jpg", uploaded_by=user)
    return user, poster


@pytest.mark.asyncio
async def test_upsert_overwrites(db_setup):
    user, poster = await _poster_with_user()
    await upsert_rating(str(poster.id), str(user.id), 2)
    await upsert_rating(str(poster.id), str(user.id), 5)
    assert await Rating.filter(poster_id=poster.id).count() == 1
    summary = await rating_summary(str(poster.id), str(user.id))
    assert summary.average_rating == 5.0
    assert summary.total_ratings == 1
    assert summary.user_rating == 5


@pytest.mark.asyncio
async def test_upsert_rejects_out_of_range(db_setup):
    user, poster = await _poster_with_user()
    with pytest.raises(ValueError):
        await upsert_rating(str(poster.id), str(user.id), 6)
    assert await Rating.all().count() == 0


@pytest.mark.asyncio
async def test_summary_across_users(db_setup):
    user, poster = await _poster_with_user()
    other = await User.create(email="other@example.com", password_hash="x")
    await upsert_rating(str(poster.id), str(user.id), 4)
    await upsert_rating(str(poster.id), str(other.id), 5)
    summary = await rating_summary(str(poster.id))
    assert summary.average_rating == 4.5
    assert summary.total_ratings == 2
    assert summary.user_rating is None
