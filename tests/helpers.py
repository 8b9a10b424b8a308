"""Shared test data builders."""

from httpx import AsyncClient

TEST_PASSWORD = "Poster1234"

JPEG_HEADER = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00"
PNG_HEADER = b"\x89PNG\r\n\x1a\n"
GIF87_HEADER = b"GIF87a"
GIF89_HEADER = b"GIF89a"
WEBP_HEADER = b"RIFF\x24\x00\x01\x00WEBPVP8 "
AVI_HEADER = b"RIFF\x24\x00\x01\x00AVI LIST"

# Comfortably inside the 50KB..10MB window
DEFAULT_SIZE = 100_000


def image_bytes(header: bytes, size: int = DEFAULT_SIZE) -> bytes:
    return header + b"\x00" * (size - len(header))


async def signup(ac: AsyncClient, email: str, full_name: str = "Test User") -> dict:
    resp = await ac.post("/auth/signup", json={
        "email": email,
        "password": TEST_PASSWORD,
        "full_name": full_name,
    })
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
