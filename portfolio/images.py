"""
Images : validation type/taille + conversion en data URI.
Partagé par la route d'upload (re-validation serveur) et le pipeline client.
"""
import base64
from typing import Optional

VALID_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")
MAX_SIZE    = 5 * 1024 * 1024  # 5 MiB

INVALID_TYPE_MSG = "Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed."
TOO_LARGE_MSG    = "File too large. Maximum size is 5MB."


def validation_error(content_type: Optional[str], size: int) -> Optional[str]:
    """Message d'erreur si le fichier est refusé, None sinon."""
    if content_type not in VALID_TYPES:
        return INVALID_TYPE_MSG
    if size > MAX_SIZE:
        return TOO_LARGE_MSG
    return None


def to_data_uri(content_type: str, data: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def size_kb(size: int) -> str:
    return f"{size / 1024:.2f} KB"
