# Import all models for Tortoise ORM registration
from .base import BaseModel
from .user import User
from .poster import PoliticalParty, Poster, Comment, Rating

__all__ = [
    "BaseModel",
    "User",
    "PoliticalParty",
    "Poster",
    "Comment",
    "Rating",
]
