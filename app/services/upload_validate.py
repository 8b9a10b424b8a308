"""
Image upload validation for poster and avatar uploads.

Two entry points share the same rules:

* ``validate_client_side`` only looks at metadata (name, declared type, size)
  and is used by the browser pre-check endpoint to fail fast.
* ``validate_server_side`` is authoritative: it repeats the metadata checks and
  then sniffs the leading bytes against the signature table of the *declared*
  MIME type.

Rejections are plain return values (``ValidationOutcome``), never exceptions.
"""

import time
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class UploadContext(str, Enum):
    POSTER = "poster"
    AVATAR = "avatar"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "UploadContext":
        # Anything that is not explicitly an avatar is stored as a poster
        if value and value.strip().lower() == cls.AVATAR.value:
            return cls.AVATAR
        return cls.POSTER


class ErrorCode(str, Enum):
    NO_EXTENSION = "NO_EXTENSION"
    INVALID_EXTENSION = "INVALID_EXTENSION"
    INVALID_MIME_TYPE = "INVALID_MIME_TYPE"
    FILE_TOO_SMALL = "FILE_TOO_SMALL"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    CONTENT_MISMATCH = "CONTENT_MISMATCH"


# (offset, expected bytes) pairs; every part must match for the signature to match
Signature = Tuple[Tuple[int, bytes], ...]


@dataclass(frozen=True)
class ImageFormat:
    mime_type: str
    extensions: Tuple[str, ...]
    signatures: Tuple[Signature, ...]


# SVG is deliberately absent: it is markup that can carry scripts.
# A new format goes here and nowhere else.
IMAGE_FORMATS: Tuple[ImageFormat, ...] = (
    ImageFormat(
        mime_type="image/jpeg",
        extensions=("jpg", "jpeg"),
        signatures=(((0, b"\xff\xd8\xff"),),),
    ),
    ImageFormat(
        mime_type="image/png",
        extensions=("png",),
        signatures=(((0, b"\x89PNG\r\n\x1a\n"),),),
    ),
    ImageFormat(
        mime_type="image/gif",
        extensions=("gif",),
        signatures=(
            ((0, b"GIF87a"),),
            ((0, b"GIF89a"),),
        ),
    ),
    ImageFormat(
        mime_type="image/webp",
        extensions=("webp",),
        # RIFF alone also wraps AVI and WAV, so the inner tag is required too
        signatures=(((0, b"RIFF"), (8, b"WEBP")),),
    ),
)

ALLOWED_EXTENSIONS = frozenset(ext for fmt in IMAGE_FORMATS for ext in fmt.extensions)
ALLOWED_MIME_TYPES = frozenset(fmt.mime_type for fmt in IMAGE_FORMATS)
IMAGE_SIGNATURES: Mapping[str, Tuple[Signature, ...]] = MappingProxyType(
    {fmt.mime_type: fmt.signatures for fmt in IMAGE_FORMATS}
)
EXTENSION_MIME_TYPES: Mapping[str, str] = MappingProxyType(
    {ext: fmt.mime_type for fmt in IMAGE_FORMATS for ext in fmt.extensions}
)

MIN_UPLOAD_BYTES = 50 * 1024  # 50KB
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB

SIZE_LIMITS: Mapping[UploadContext, Tuple[int, int]] = MappingProxyType(
    {
        UploadContext.POSTER: (MIN_UPLOAD_BYTES, MAX_UPLOAD_BYTES),
        UploadContext.AVATAR: (MIN_UPLOAD_BYTES, MAX_UPLOAD_BYTES),
    }
)

DEFAULT_EXTENSION = "jpg"

_ALLOWED_LIST = ", ".join(sorted(ALLOWED_EXTENSIONS))

MESSAGES: Mapping[ErrorCode, str] = MappingProxyType(
    {
        ErrorCode.NO_EXTENSION: "Soubor nemá příponu.",
        ErrorCode.INVALID_EXTENSION: (
            f"Nepovolená přípona souboru. Povolené: {_ALLOWED_LIST}. "
            "SVG soubory nejsou povoleny z bezpečnostních důvodů."
        ),
        ErrorCode.INVALID_MIME_TYPE: (
            "Neplatný typ souboru. Nahrajte platný obrázek (JPG, PNG, GIF, WEBP). "
            "SVG soubory nejsou povoleny."
        ),
        ErrorCode.FILE_TOO_SMALL: "Soubor je příliš malý. Minimální velikost je {min_kb} KB.",
        ErrorCode.FILE_TOO_LARGE: "Soubor je příliš velký. Maximální velikost je {max_mb} MB.",
        ErrorCode.UNSUPPORTED_TYPE: "Nepodporovaný typ obrázku.",
        ErrorCode.CONTENT_MISMATCH: (
            "Obsah souboru neodpovídá deklarovanému typu obrázku. "
            "Soubor může být poškozen nebo se jedná o jiný typ souboru."
        ),
    }
)


@dataclass(frozen=True)
class ValidationOutcome:
    is_valid: bool
    error_code: Optional[ErrorCode] = None
    error_message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def reject(cls, code: ErrorCode, message: Optional[str] = None) -> "ValidationOutcome":
        return cls(is_valid=False, error_code=code, error_message=message or MESSAGES[code])

    def as_error(self) -> dict:
        """Payload for the 400 response body."""
        return {
            "error": self.error_code.value if self.error_code else None,
            "message": self.error_message,
        }


@dataclass(frozen=True)
class UploadCandidate:
    declared_filename: str
    declared_mime_type: str
    byte_size: int
    content: bytes


def file_extension(filename: str) -> Optional[str]:
    """Lowercased suffix after the last dot, or None when there is none."""
    if not filename or "." not in filename:
        return None
    ext = filename.rsplit(".", 1)[1].lower()
    return ext or None


def check_extension(filename: str) -> ValidationOutcome:
    ext = file_extension(filename)
    if ext is None:
        return ValidationOutcome.reject(ErrorCode.NO_EXTENSION)
    if ext not in ALLOWED_EXTENSIONS:
        return ValidationOutcome.reject(ErrorCode.INVALID_EXTENSION)
    return ValidationOutcome.ok()


def check_mime_type(mime_type: Optional[str]) -> ValidationOutcome:
    if mime_type not in ALLOWED_MIME_TYPES:
        return ValidationOutcome.reject(ErrorCode.INVALID_MIME_TYPE)
    return ValidationOutcome.ok()


def check_size(byte_size: int, context: UploadContext = UploadContext.POSTER) -> ValidationOutcome:
    min_bytes, max_bytes = SIZE_LIMITS[context]
    if byte_size < min_bytes:
        return ValidationOutcome.reject(
            ErrorCode.FILE_TOO_SMALL,
            MESSAGES[ErrorCode.FILE_TOO_SMALL].format(min_kb=round(min_bytes / 1024)),
        )
    if byte_size > max_bytes:
        return ValidationOutcome.reject(
            ErrorCode.FILE_TOO_LARGE,
            MESSAGES[ErrorCode.FILE_TOO_LARGE].format(max_mb=round(max_bytes / (1024 * 1024))),
        )
    return ValidationOutcome.ok()


def _matches(content: bytes, signature: Signature) -> bool:
    for offset, expected in signature:
        if content[offset:offset + len(expected)] != expected:
            return False
    return True


def check_content(content: bytes, declared_mime_type: str) -> ValidationOutcome:
    signatures = IMAGE_SIGNATURES.get(declared_mime_type)
    if not signatures:
        return ValidationOutcome.reject(ErrorCode.UNSUPPORTED_TYPE)
    if any(_matches(content, sig) for sig in signatures):
        return ValidationOutcome.ok()
    return ValidationOutcome.reject(ErrorCode.CONTENT_MISMATCH)


def validate_client_side(filename: str, mime_type: Optional[str], byte_size: int) -> ValidationOutcome:
    """Metadata-only pre-check. Never a trust boundary."""
    outcome = check_extension(filename)
    if not outcome.is_valid:
        return outcome
    outcome = check_mime_type(mime_type)
    if not outcome.is_valid:
        return outcome
    return check_size(byte_size)


def validate_server_side(
    declared_filename: str,
    declared_mime_type: Optional[str],
    byte_size: int,
    content: bytes,
    context: UploadContext = UploadContext.POSTER,
) -> ValidationOutcome:
    """Authoritative validation, run on every upload before anything is stored.

    Checks run in order (extension, MIME, size, signature) and the first
    failure is returned; the content is only sniffed once the cheap checks
    have passed.
    """
    outcome = check_extension(declared_filename)
    if not outcome.is_valid:
        return outcome
    outcome = check_mime_type(declared_mime_type)
    if not outcome.is_valid:
        return outcome
    outcome = check_size(byte_size, context)
    if not outcome.is_valid:
        return outcome
    return check_content(content, declared_mime_type)


def validate_candidate(candidate: UploadCandidate, context: UploadContext = UploadContext.POSTER) -> ValidationOutcome:
    return validate_server_side(
        candidate.declared_filename,
        candidate.declared_mime_type,
        candidate.byte_size,
        candidate.content,
        context,
    )


def derive_storage_filename(
    original_name: str,
    user_id: str,
    context: UploadContext = UploadContext.POSTER,
    timestamp_ms: Optional[int] = None,
) -> str:
    # Two uploads by the same user in the same millisecond would collide
    prefix = "avatar" if context == UploadContext.AVATAR else "poster"
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    extension = file_extension(original_name) or DEFAULT_EXTENSION
    return f"{prefix}-{timestamp_ms}-{user_id}.{extension}"
