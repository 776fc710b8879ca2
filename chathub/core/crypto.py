"""
Credential encryption.

AES-256-GCM encryption for connector configs stored in the database.
Tokens have the form ``base64(iv).base64(tag).base64(ciphertext)``.

Dependencies: cryptography, chathub.configs
System role: At-rest protection for connector credentials
"""

import base64
import binascii
import json
import os
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from chathub.configs import get_settings
from chathub.core.exceptions import EncryptionError

IV_LENGTH = 16
TAG_LENGTH = 16
KEY_LENGTH = 32


def _get_key(key: str | None = None) -> bytes:
    raw = key if key is not None else get_settings().security.encryption_key
    if not raw:
        raise EncryptionError(
            "ENCRYPTION_KEY environment variable is not set. "
            "Generate one with: openssl rand -base64 32"
        )
    try:
        decoded = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncryptionError("ENCRYPTION_KEY must be valid base64") from e
    if len(decoded) != KEY_LENGTH:
        raise EncryptionError(
            f"ENCRYPTION_KEY must be {KEY_LENGTH} bytes (256 bits) when decoded"
        )
    return decoded


def encrypt(plaintext: str, key: str | None = None) -> str:
    """
    Encrypt a string with AES-256-GCM.

    Args:
        plaintext: Text to encrypt
        key: Optional base64 key (defaults to configured key)

    Returns:
        str: ``iv.tag.ciphertext`` token, each part base64-encoded

    Raises:
        EncryptionError: If the key is missing or malformed
    """
    aesgcm = AESGCM(_get_key(key))
    iv = os.urandom(IV_LENGTH)
    # cryptography appends the tag to the ciphertext
    sealed = aesgcm.encrypt(iv, plaintext.encode("utf-8"), None)
    ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
    return ".".join(
        base64.b64encode(part).decode("ascii") for part in (iv, tag, ciphertext)
    )


def decrypt(token: str, key: str | None = None) -> str:
    """
    Decrypt a token produced by :func:`encrypt`.

    Args:
        token: ``iv.tag.ciphertext`` token
        key: Optional base64 key (defaults to configured key)

    Returns:
        str: Decrypted plaintext

    Raises:
        EncryptionError: If the token is malformed, tampered with or the key is wrong
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise EncryptionError("Invalid encrypted data format")

    try:
        iv, tag, ciphertext = (base64.b64decode(part, validate=True) for part in parts)
    except (binascii.Error, ValueError) as e:
        raise EncryptionError("Invalid encrypted data format") from e

    if len(iv) != IV_LENGTH:
        raise EncryptionError("Invalid IV length")
    if len(tag) != TAG_LENGTH:
        raise EncryptionError("Invalid auth tag length")

    aesgcm = AESGCM(_get_key(key))
    try:
        plaintext = aesgcm.decrypt(iv, ciphertext + tag, None)
    except InvalidTag as e:
        raise EncryptionError("Failed to decrypt data: authentication failed") from e
    return plaintext.decode("utf-8")


def encrypt_json(data: Any, key: str | None = None) -> str:
    """Serialize ``data`` to JSON and encrypt it."""
    return encrypt(json.dumps(data), key)


def decrypt_json(token: str, key: str | None = None) -> Any:
    """Decrypt a token and parse the JSON payload."""
    plaintext = decrypt(token, key)
    try:
        return json.loads(plaintext)
    except json.JSONDecodeError as e:
        raise EncryptionError("Decrypted data is not valid JSON") from e
