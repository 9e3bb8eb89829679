# =============================================================================
# HEALTH MONITOR BACKEND - FACE SNAPSHOT ENCRYPTION
# =============================================================================
"""
AES-256-GCM encryption for face scan snapshots at rest.

Snapshots arrive as base64 data URLs (``data:image/jpeg;base64,...``). The
base64 payload is decoded and the raw image bytes are encrypted; the media
type is kept beside the ciphertext and bound to it as associated data, so a
swapped type fails authentication. Anything that is not a well-formed data
URL is encrypted as UTF-8 text.
"""

import base64
import binascii
import os
import re
from typing import Optional, Tuple

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from config import get_settings

DEFAULT_KEY = "health_monitor_default_key_32b!!"

IV_LENGTH = 12
TAG_LENGTH = 16

DATA_URL_PATTERN = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);base64,(?P<payload>[A-Za-z0-9+/]+=*)$"
)


def _get_key() -> bytes:
    """Configured key as exactly 32 bytes (zero-padded or truncated)."""
    key = get_settings().encryption_key.encode("utf-8")
    return key[:32].ljust(32, b"\0")


def split_data_url(image_data: str) -> Tuple[bytes, Optional[str]]:
    """
    Split a snapshot into the bytes to encrypt and its media type.

    Data URLs give their decoded image bytes and media type. Other text,
    or base64 that would not re-encode to the same payload, is returned
    as UTF-8 with no media type.
    """
    match = DATA_URL_PATTERN.match(image_data)
    if match:
        payload = match.group("payload")
        try:
            raw = base64.b64decode(payload, validate=True)
        except binascii.Error:
            raw = None
        if raw is not None and base64.b64encode(raw).decode("ascii") == payload:
            return raw, match.group("media_type")
    return image_data.encode("utf-8"), None


def build_data_url(raw: bytes, media_type: Optional[str]) -> str:
    """Inverse of split_data_url."""
    if media_type is None:
        return raw.decode("utf-8")
    return f"data:{media_type};base64,{base64.b64encode(raw).decode('ascii')}"


def _associated_data(media_type: Optional[str]) -> Optional[bytes]:
    return media_type.encode("ascii") if media_type else None


def encrypt_face_image(image_data: str) -> Tuple[bytes, bytes, bytes, Optional[str]]:
    """
    Encrypt a face snapshot.

    Args:
        image_data: Base64 data URL, or any other text

    Returns:
        Tuple of (ciphertext, iv, tag, media_type). media_type is None
        when the input was not a data URL.
    """
    raw, media_type = split_data_url(image_data)

    # Fresh IV per snapshot; GCM must never reuse one under the same key
    iv = os.urandom(IV_LENGTH)
    sealed = AESGCM(_get_key()).encrypt(iv, raw, _associated_data(media_type))

    return sealed[:-TAG_LENGTH], iv, sealed[-TAG_LENGTH:], media_type


def decrypt_face_image(
    ciphertext: bytes,
    iv: bytes,
    tag: bytes,
    media_type: Optional[str] = None
) -> str:
    """
    Decrypt a face snapshot back into the text it was stored from.

    Raises:
        InvalidTag: If the ciphertext, tag, media type or key do not match
    """
    raw = AESGCM(_get_key()).decrypt(iv, ciphertext + tag, _associated_data(media_type))
    return build_data_url(raw, media_type)


def verify_key_strength() -> bool:
    """False for the shipped default key or anything shorter than 32 characters."""
    key = get_settings().encryption_key
    return key != DEFAULT_KEY and len(key) >= 32
