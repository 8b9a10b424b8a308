from tortoise import fields
from .base import BaseModel

class User(BaseModel):
    email = fields.CharField(max_length=255, unique=True, index=True)
    full_name = fields.CharField(max_length=255, null=True)
    avatar_url = fields.CharField(max_length=1024, null=True)
    password_hash = fields.CharField(max_length=255)

    class Meta:
        table = "profiles"
