"""Image type detection for uploaded nutrition-label photos."""

import base64
import re

SUPPORTED_IMAGE_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)

GENERIC_CONTENT_TYPE = "application/octet-stream"

MAX_IMAGE_BYTES = 10 * 1024 * 1024

# Leading bytes -> MIME type. RIFF containers are assumed to be WebP.
_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8", "image/jpeg"),
    (b"\x89PN", "image/png"),
    (b"GIF", "image/gif"),
    (b"RIF", "image/webp"),
)

_IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|bmp|webp)$", re.IGNORECASE)


def detect_image_type(image_bytes: bytes, declared_type: str | None) -> str | None:
    """Return the image MIME type, or None when it is not a supported image.

    File signatures win over the declared content type. An undetectable
    payload declared as a generic binary stream is treated as JPEG.
    """
    mime_type = declared_type or GENERIC_CONTENT_TYPE
    if len(image_bytes) >= 2:
        for signature, signature_type in _SIGNATURES:
            if image_bytes.startswith(signature):
                mime_type = signature_type
                break
        else:
            if mime_type == GENERIC_CONTENT_TYPE:
                mime_type = "image/jpeg"
    if mime_type not in SUPPORTED_IMAGE_TYPES:
        return None
    return mime_type


def is_acceptable_upload(declared_type: str | None, filename: str | None) -> bool:
    """Check whether an upload looks like an image before reading it."""
    if not declared_type or declared_type == GENERIC_CONTENT_TYPE:
        return bool(_IMAGE_EXTENSION.search(filename or ""))
    return declared_type.startswith("image/")


def to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
