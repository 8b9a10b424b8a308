from pydantic import BaseModel, Field


class UploadOut(BaseModel):
    url: str
    filename: str
    size: int
    type: str


class UploadError(BaseModel):
    error: str
    message: str


class PrecheckPayload(BaseModel):
    filename: str = Field(min_length=1)
    mime_type: str = ""
    size: int = Field(ge=0)
