import pytest
from cryptography.exceptions import InvalidTag

from database.encryption import (
    decrypt_face_image,
    encrypt_face_image,
    split_data_url,
    verify_key_strength,
)

JPEG_URL = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


def test_data_url_is_decoded_before_encryption(database_url):
    raw, media_type = split_data_url(JPEG_URL)
    assert media_type == "image/jpeg"
    assert raw.startswith(b"\xff\xd8\xff\xe0")

    ciphertext, iv, tag, stored_type = encrypt_face_image(JPEG_URL)
    assert stored_type == "image/jpeg"
    assert len(ciphertext) == len(raw)
    assert len(iv) == 12
    assert len(tag) == 16
    assert decrypt_face_image(ciphertext, iv, tag, stored_type) == JPEG_URL


@pytest.mark.parametrize("text", [
    "not a data url",
    "data:image/png;base64,@@@",
    "data:image/png;base64,iVBORw0KGgp=",
])
def test_other_text_is_encrypted_verbatim(database_url, text):
    ciphertext, iv, tag, media_type = encrypt_face_image(text)
    assert media_type is None
    assert decrypt_face_image(ciphertext, iv, tag) == text


def test_media_type_is_authenticated(database_url):
    ciphertext, iv, tag, _ = encrypt_face_image(JPEG_URL)
    with pytest.raises(InvalidTag):
        decrypt_face_image(ciphertext, iv, tag, "image/png")


def test_each_snapshot_gets_a_fresh_iv(database_url):
    first = encrypt_face_image(JPEG_URL)
    second = encrypt_face_image(JPEG_URL)
    assert first[1] != second[1]
    assert first[0] != second[0]


def test_key_strength(database_url, monkeypatch):
    from config import get_settings

    assert verify_key_strength() is True

    monkeypatch.setenv("ENCRYPTION_KEY", "short")
    get_settings.cache_clear()
    assert verify_key_strength() is False
