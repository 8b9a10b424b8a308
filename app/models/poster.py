from tortoise import fields
from tortoise.models import Model
from .base import BaseModel

class PoliticalParty(Model):
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=255, unique=True)
    short_name = fields.CharField(max_length=32, null=True)
    color_hex = fields.CharField(max_length=7, default="#6B7280")
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "political_parties"
        ordering = ["name"]

class Poster(BaseModel):
    title = fields.CharField(max_length=255)
    description = fields.TextField(null=True)
    image_url = fields.CharField(max_length=1024)
    image_filename = fields.CharField(max_length=512, default="unknown")
    party = fields.ForeignKeyField(
        "models.PoliticalParty",
        related_name="posters",
        null=True,
        on_delete=fields.SET_NULL,
    )
    uploaded_by = fields.ForeignKeyField("models.User", related_name="posters", on_delete=fields.CASCADE)
    location = fields.CharField(max_length=255, null=True)
    date_photographed = fields.DateField(null=True)

    class Meta:
        table = "posters"
        ordering = ["-created_at"]

class Comment(BaseModel):
    poster = fields.ForeignKeyField("models.Poster", related_name="comments", on_delete=fields.CASCADE)
    user = fields.ForeignKeyField("models.User", related_name="comments", on_delete=fields.CASCADE)
    content = fields.TextField()

    class Meta:
        table = "comments"
        ordering = ["-created_at"]

class Rating(BaseModel):
    poster = fields.ForeignKeyField("models.Poster", related_name="ratings", on_delete=fields.CASCADE)
    user = fields.ForeignKeyField("models.User", related_name="ratings", on_delete=fields.CASCADE)
    rating = fields.SmallIntField()

    class Meta:
        table = "ratings"
        unique_together = ("poster", "user")
